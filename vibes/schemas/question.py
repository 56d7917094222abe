# vibes/schemas/question.py
from datetime import datetime
from typing import Literal, Optional, List

from pydantic import BaseModel, Field

QuestionType = Literal["single", "rating", "numeric", "date"]
QuestionStatus = Literal["draft", "approved"]

# -- Request --

# 질문 생성 요청. 타입별 필수값 검증은 question_repository.create 에서 처리
class QuestionDraft(BaseModel):
    text: str = Field(..., max_length=500, description="질문 내용")
    type: QuestionType = Field(..., description="single | rating | numeric | date")
    options: Optional[List[str]] = Field(None, description="single 타입 선택지")
    min: Optional[int] = Field(None, description="rating/numeric 최소값")
    max: Optional[int] = Field(None, description="rating/numeric 최대값")

# -- Response --

class QuestionCreated(BaseModel):
    id: int

class QuestionOut(BaseModel):
    id: int
    text: str
    type: QuestionType
    created_by: str
    created_at: Optional[datetime] = None
    status: QuestionStatus
    options: Optional[List[str]] = None
    min: Optional[int] = None
    max: Optional[int] = None

    @classmethod
    def from_model(cls, q) -> "QuestionOut":
        return cls(
            id=q.id,
            text=q.text,
            type=q.type,
            created_by=q.created_by,
            created_at=q.created_at,
            status=q.status,
            options=q.options,
            min=q.min_value,
            max=q.max_value,
        )
