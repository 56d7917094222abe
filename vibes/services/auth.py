# vibes/services/auth.py
from typing import Dict
import logging

from jose import JWTError, jwt
from vibes.config import settings

logger = logging.getLogger(__name__)


async def verify_bearer(authorization: str | None) -> Dict[str, str | None]:
    """
    - Authorization: Bearer <access_token> 헤더에서 토큰을 꺼내서
    - Supabase JWT secret(HS256)으로 검증하고
    - 기본적인 클레임(sub, email, name)을 반환한다.
    """
    if not settings.supabase_jwt_secret:
        raise RuntimeError("SUPABASE_JWT_SECRET 환경변수가 설정되어 있지 않습니다.")

    if not authorization:
        raise ValueError("missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise ValueError("invalid Authorization header")

    token = parts[1].strip()
    if not token:
        raise ValueError("invalid Authorization header")

    try:
        # issuer 는 None일 수도 있어서 옵션으로만 넣어줌
        decode_kwargs = {
            "key": settings.supabase_jwt_secret,
            "algorithms": ["HS256"],  # Supabase access token 의 alg
        }
        if settings.supabase_jwt_audience:
            decode_kwargs["audience"] = settings.supabase_jwt_audience  # "authenticated"
        if settings.supabase_issuer:
            decode_kwargs["issuer"] = settings.supabase_issuer          # "https://.../auth/v1"

        claims = jwt.decode(token, **decode_kwargs)
    except JWTError as e:
        logger.info("JWT decode failed: %s", e)
        raise ValueError("invalid token") from e

    user_id = claims.get("sub")
    if not user_id:
        raise ValueError("invalid token: missing sub")

    meta = claims.get("user_metadata") or {}
    return {
        "user_id": user_id,
        "email": claims.get("email"),
        "name": meta.get("full_name") or meta.get("name"),
    }
