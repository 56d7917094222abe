# vibes/routers/auth.py
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from vibes.deps import get_current_user
from vibes.models.user_profile import UserProfile

router = APIRouter(prefix="/api/auth", tags=["auth"])

# ---------- Schemas ----------
class MeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: str | None = None
    display_name: str | None = None
    status: Literal["active", "blocked", "deleted"]
    onboarding_done: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

# ---------- Endpoints ----------
@router.get("/me", response_model=MeOut, response_model_exclude_none=True)
def me(user=Depends(get_current_user)):
    """
    현재 로그인한 사용자 정보 조회.
    - 인증: Supabase Access Token (Authorization: Bearer <token>)
    - 반환: auth uid(=id), email(토큰 클레임), user_profiles의 표시명/상태/온보딩 여부
    """
    profile: UserProfile = user["profile"]
    return MeOut(
        id=user["id"],
        email=user["email"],
        display_name=profile.display_name,
        status=profile.status,
        onboarding_done=bool(profile.onboarding_done),
        created_at=getattr(profile, "created_at", None),
        updated_at=getattr(profile, "updated_at", None),
    )

@router.post("/logout", status_code=204)
def logout():
    """
    서버 세션은 없음. 클라에서 supabase.auth.signOut() 호출.
    이 엔드포인트는 UX용으로 204만 반환.
    """
    return
