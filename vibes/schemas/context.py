# vibes/schemas/context.py
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


# 온보딩 컨텍스트 - 모두 선택 항목. 보내지 않은 필드는 기존 값 유지(merge)
class UserContextIn(BaseModel):
    age: Optional[int] = Field(None, ge=0, le=120, description="나이 (0~120)")
    city: Optional[str] = Field(None, max_length=100, description="도시")

    @field_validator("city")
    @classmethod
    def blank_city_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class UserContextOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    user_id: str
    age: Optional[int] = None
    city: Optional[str] = None
    onboarding_done: bool = False
