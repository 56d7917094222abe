# vibes/deps.py
import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vibes.db.base import SessionLocal
from vibes.services.auth import verify_bearer
from vibes.models.user_profile import UserProfile

logger = logging.getLogger(__name__)

# ----------------------------
# DB 세션
# ----------------------------
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()  # 서비스에서 commit 하지 않은 변경분 정리
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

# ----------------------------
# 프로필 자동 생성
# ----------------------------
def ensure_profile(db: Session, user_id: str, display_name: str | None = None) -> UserProfile:
    prof = db.get(UserProfile, user_id)
    if prof is not None:
        return prof

    prof = UserProfile(
        id=user_id,
        display_name=display_name,
        status="active",
        onboarding_done=False,
    )
    db.add(prof)
    try:
        db.commit()
    except IntegrityError:
        # 같은 사용자의 동시 첫 요청이 먼저 insert 한 경우 -> 그 행을 사용
        db.rollback()
        existing = db.get(UserProfile, user_id)
        if existing is None:
            raise
        logger.info("profile %s created concurrently, reusing", user_id)
        return existing
    db.refresh(prof)
    return prof

# ----------------------------
# 현재 사용자 가져오기
# ----------------------------
async def get_current_user(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
):
    """
    토큰 검증 후 identity dict 를 돌려준다.
    라우터는 이 값을 서비스 함수에 명시적으로 넘긴다 (전역 current user 없음).
    처음 보는 사용자면 user_profiles 행을 만든다.
    """
    try:
        claims = await verify_bearer(authorization)
    except ValueError as e:
        logger.info("verify_bearer failed >>> %r", e)
        raise HTTPException(status_code=401, detail="unauthorized")

    prof = ensure_profile(db, claims["user_id"], claims.get("name"))

    if prof.status == "blocked":
        raise HTTPException(status_code=403, detail="account_blocked")

    return {
        "id": claims["user_id"],
        "email": claims.get("email"),
        "profile": prof,
    }
