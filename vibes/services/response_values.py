# vibes/services/response_values.py
# 응답 값(tagged union: string | number | date) 처리
# - tag_value: 저장용 (kind, json 값) 변환
# - coerce_value: API 경계에서 질문 타입/범위에 맞는지 검증
import math
from datetime import date, datetime
from typing import Any, Tuple

from vibes.errors import ValidationError


def is_number(v: Any) -> bool:
    # bool 은 int 의 서브클래스라 따로 제외
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def tag_value(value: Any) -> Tuple[str, Any]:
    """
    파이썬 값 -> (value_kind, JSON 저장값)
    date/datetime 은 ISO 문자열로 저장한다.
    """
    if isinstance(value, (date, datetime)):
        return "date", value.isoformat()
    if is_number(value):
        return "number", value
    if isinstance(value, str):
        return "string", value
    # 레포지토리 계층은 관대하게 저장 (검증은 API 경계 책임)
    return "string", str(value)


def parse_date_value(value: Any):
    """
    ISO 날짜/일시 문자열, date, datetime -> date 또는 datetime.
    해석 불가하면 None.
    """
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    try:
        if len(raw) == 10:
            return date.fromisoformat(raw)
        # "Z" 접미사는 3.11 미만 fromisoformat 에서 지원 안 됨
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def coerce_value(question, value: Any) -> Any:
    """질문 타입/범위 기준으로 응답 값을 검증하고 저장할 파이썬 값으로 변환"""
    qtype = question.type

    if qtype == "single":
        options = question.options or []
        if not isinstance(value, str) or value not in options:
            raise ValidationError("invalid_value", "value must be one of the question options")
        return value

    if qtype in ("rating", "numeric"):
        if not is_number(value) or not math.isfinite(value):
            raise ValidationError("invalid_value", "value must be a number")
        if qtype == "rating" and float(value) != int(value):
            raise ValidationError("invalid_value", "rating must be a whole number")
        if not (question.min_value <= value <= question.max_value):
            raise ValidationError(
                "invalid_value",
                f"value must be between {question.min_value} and {question.max_value}",
            )
        return int(value) if qtype == "rating" else value

    if qtype == "date":
        parsed = parse_date_value(value)
        if parsed is None:
            raise ValidationError("invalid_value", "value must be an ISO date (YYYY-MM-DD)")
        return parsed

    raise ValidationError("invalid_value", f"unsupported question type: {qtype}")
