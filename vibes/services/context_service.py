# vibes/services/context_service.py
# 온보딩 컨텍스트(나이/도시) merge 저장 + 온보딩 완료 표시
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibes.errors import AuthRequiredError, StoreError
from vibes.models.user_context import UserContext
from vibes.models.user_profile import UserProfile
from vibes.schemas.context import UserContextIn

logger = logging.getLogger(__name__)


def get_context(db: Session, user_id: str) -> UserContext:
    try:
        ctx = db.get(UserContext, user_id)
    except SQLAlchemyError as e:
        raise StoreError("failed to load context") from e
    # 저장된 적 없으면 빈 컨텍스트 (세션에 add 하지 않음)
    return ctx if ctx is not None else UserContext(user_id=user_id)


def save_context(db: Session, user_id: str | None, patch: UserContextIn) -> UserContext:
    """
    보낸 필드만 덮어쓰는 merge 저장.
    명시적으로 null 을 보내면 해당 값을 지운다.
    """
    if not user_id:
        raise AuthRequiredError("Not signed in")

    data = patch.model_dump(exclude_unset=True)
    try:
        ctx = db.get(UserContext, user_id)
        if ctx is None:
            ctx = UserContext(user_id=user_id)
            db.add(ctx)
        for key, value in data.items():
            setattr(ctx, key, value)
        db.commit()
        db.refresh(ctx)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("failed to save context") from e

    logger.info("context saved for user=%s fields=%s", user_id, sorted(data))
    return ctx


def mark_onboarding_done(db: Session, user_id: str | None) -> UserProfile:
    if not user_id:
        raise AuthRequiredError("Not signed in")

    try:
        prof = db.get(UserProfile, user_id)
        if prof is None:
            prof = UserProfile(id=user_id, status="active")
            db.add(prof)
        prof.onboarding_done = True
        db.commit()
        db.refresh(prof)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("failed to update profile") from e

    logger.info("onboarding marked complete for user=%s", user_id)
    return prof
