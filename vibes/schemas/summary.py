# vibes/schemas/summary.py
# 결과 화면용 집계 결과. question.type 으로 구분되는 union
from typing import List, Literal, Union

from pydantic import BaseModel, Field


class OptionResult(BaseModel):
    option: str
    count: int
    percent: int


class DateBucket(BaseModel):
    date: str  # YYYY-MM-DD
    count: int


class SingleChoiceSummary(BaseModel):
    type: Literal["single"] = "single"
    total: int = 0
    options: List[OptionResult] = Field(default_factory=list)
    unmatched: int = 0  # 선택지에 없는 값 (집계 제외)


class NumericSummary(BaseModel):
    type: Literal["rating", "numeric"]
    total: int = 0
    count: int = 0  # 실제 숫자 값 개수
    mean: float = 0
    median: float = 0
    standard_deviation: float = 0


class DateSummary(BaseModel):
    type: Literal["date"] = "date"
    total: int = 0
    buckets: List[DateBucket] = Field(default_factory=list)


Summary = Union[SingleChoiceSummary, NumericSummary, DateSummary]
