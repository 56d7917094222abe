# vibes/schemas/response.py
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr

# -- Request --

class ResponseSubmit(BaseModel):
    # single -> 선택지 문자열, rating/numeric -> 숫자, date -> ISO 날짜 문자열
    # strict: true -> 1, "5" -> 5 같은 암묵 변환 없음. bool 은 받아서 coerce_value 에서 invalid_value 처리
    value: Union[StrictBool, StrictInt, StrictFloat, StrictStr]

# -- Response --

class ResponseOut(BaseModel):
    question_id: int
    user_id: str
    value: Any
    answered_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, r) -> "ResponseOut":
        return cls(
            question_id=r.question_id,
            user_id=r.user_id,
            value=r.value,
            answered_at=r.answered_at,
        )

class AnsweredOut(BaseModel):
    question_id: int
    answered: bool
