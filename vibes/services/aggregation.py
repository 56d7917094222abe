# vibes/services/aggregation.py
"""
응답 집계 (결과 화면용 통계).

summarize(question, responses) 는 DB 접근 없는 순수 함수이고 예외를 던지지 않는다.
- single         : 선택지별 count / percent (선택지 선언 순서 유지)
- rating/numeric : mean / median / standard_deviation (모집단 표준편차, 반올림된 mean 사용)
- date           : 날짜(YYYY-MM-DD)별 count
"""
import logging
import math
import sys
from collections import Counter
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List

from vibes.schemas.summary import (
    DateBucket,
    DateSummary,
    NumericSummary,
    OptionResult,
    SingleChoiceSummary,
)
from vibes.services.response_values import is_number, parse_date_value

logger = logging.getLogger(__name__)


def round_half_up(x: float, digits: int = 0) -> float:
    # float 의 실제 이진값 기준으로 0.5 는 0 에서 먼 쪽으로 반올림 (round() 의 banker's rounding 회피)
    # 2**52 이상 float 는 소수부가 없음 -> 그대로 반환 (Decimal 정밀도 초과 방지)
    if not math.isfinite(x) or abs(x) >= 2 ** 52:
        return float(x)
    quant = Decimal(1).scaleb(-digits)
    return float(Decimal(x).quantize(quant, rounding=ROUND_HALF_UP))


def round1(x: float) -> float:
    return round_half_up(x, 1)


def _values(responses: Iterable[Any]) -> List[Any]:
    # Response 모델, ResponseOut, dict, 원시값 모두 허용
    out = []
    for r in responses:
        if isinstance(r, dict):
            out.append(r.get("value"))
        elif hasattr(r, "value"):
            out.append(r.value)
        else:
            out.append(r)
    return out


# ----------------------------
# single
# ----------------------------
def summarize_single(options: List[str], values: List[Any]) -> SingleChoiceSummary:
    total = len(values)
    counts = Counter(v for v in values if isinstance(v, str))

    results = []
    for opt in options:
        count = counts.get(opt, 0)
        percent = int(round_half_up(100 * count / total)) if total > 0 else 0
        results.append(OptionResult(option=opt, count=count, percent=percent))

    matched = sum(r.count for r in results)
    return SingleChoiceSummary(total=total, options=results, unmatched=total - matched)


# ----------------------------
# rating / numeric
# ----------------------------
def median(values: List[float]) -> float:
    n = len(values)
    if n == 0:
        return 0
    s = sorted(values)
    mid = n // 2
    if n % 2 == 0:
        # 합 대신 절반끼리 더해서 overflow 방지 (2 로 나누기는 정확함)
        return s[mid - 1] / 2 + s[mid] / 2
    return s[mid]


def _finite_floats(values: List[Any]) -> List[float]:
    # float 로 표현 못 하는 큰 int, inf/nan 은 제외
    out = []
    for v in values:
        if not is_number(v):
            continue
        try:
            f = float(v)
        except OverflowError:
            continue
        if math.isfinite(f):
            out.append(f)
    return out


def _mean(nums: List[float]) -> float:
    n = len(nums)
    try:
        return math.fsum(nums) / n
    except OverflowError:
        # 합계가 float 범위를 넘으면 먼저 나눠서 더함
        return math.fsum(v / n for v in nums)


def _population_sd(nums: List[float], mean: float) -> float:
    n = len(nums)
    sq = math.fsum((v - mean) * (v - mean) for v in nums)
    if math.isfinite(sq):
        return math.sqrt(sq / n)

    # 제곱합이 overflow -> 최대 절대값으로 스케일링해서 계산
    scale = max(max(abs(v) for v in nums), abs(mean))
    var = math.fsum((v / scale - mean / scale) ** 2 for v in nums) / n
    return min(scale * math.sqrt(var), sys.float_info.max)


def summarize_numeric(qtype: str, values: List[Any]) -> NumericSummary:
    nums = _finite_floats(values)
    n = len(nums)
    if n == 0:
        return NumericSummary(type=qtype, total=len(values))

    mean = round1(_mean(nums))
    # 표준편차는 반올림된 mean 기준으로 계산 (결과 화면 수치와 동일하게)
    sd = round1(_population_sd(nums, mean))

    return NumericSummary(
        type=qtype,
        total=len(values),
        count=n,
        mean=mean,
        median=median(nums),
        standard_deviation=sd,
    )


# ----------------------------
# date
# ----------------------------
def date_key(value: Any, tz: tzinfo = timezone.utc):
    parsed = parse_date_value(value)
    if parsed is None:
        return None
    if isinstance(parsed, datetime):
        # tz 정보가 있으면 표시 시간대로 변환, 없으면 그대로 사용
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(tz)
        parsed = parsed.date()
    return parsed.isoformat()


def summarize_dates(values: List[Any], tz: tzinfo = timezone.utc) -> DateSummary:
    counts = Counter()
    for v in values:
        key = date_key(v, tz)
        if key is not None:
            counts[key] += 1

    # ISO 키라서 문자열 정렬 == 날짜순
    buckets = [DateBucket(date=k, count=c) for k, c in sorted(counts.items())]
    return DateSummary(total=len(values), buckets=buckets)


def summarize(question, responses: Iterable[Any], tz: tzinfo = timezone.utc):
    """question.type 에 따라 집계. 응답이 없으면 0 값 요약을 돌려준다."""
    values = _values(responses)
    qtype = question.type

    if qtype == "single":
        return summarize_single(list(question.options or []), values)
    if qtype in ("rating", "numeric"):
        return summarize_numeric(qtype, values)
    if qtype == "date":
        return summarize_dates(values, tz)

    logger.warning("summarize: unknown question type %r (question_id=%s)", qtype, getattr(question, "id", None))
    return SingleChoiceSummary(total=len(values))
