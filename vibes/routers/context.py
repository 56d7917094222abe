# vibes/routers/context.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vibes.deps import get_current_user, get_db
from vibes.schemas.context import UserContextIn, UserContextOut
from vibes.services import context_service

router = APIRouter(prefix="/api/me", tags=["me"])


def _out(ctx, profile) -> UserContextOut:
    return UserContextOut(
        user_id=ctx.user_id,
        age=ctx.age,
        city=ctx.city,
        onboarding_done=bool(profile.onboarding_done),
    )


# ---- 내 컨텍스트 조회 ----

@router.get("/context", response_model=UserContextOut)
def get_my_context(
    current = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ctx = context_service.get_context(db, current["id"])
    return _out(ctx, current["profile"])


# ---- 내 컨텍스트 저장 (온보딩 완료 처리 포함) ----

@router.put("/context", response_model=UserContextOut)
def save_my_context(
    payload: UserContextIn,
    current = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ctx = context_service.save_context(db, current["id"], payload)
    prof = context_service.mark_onboarding_done(db, current["id"])
    return _out(ctx, prof)
