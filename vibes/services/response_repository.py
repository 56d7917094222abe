# vibes/services/response_repository.py
# 응답 저장/조회. (question_id, user_id) 당 1개, 재제출 시 덮어쓰기(last-write-wins)
# 값의 타입/범위 검증은 여기서 하지 않는다 (라우터에서 response_values.coerce_value)
import logging
from typing import Any, List

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vibes.errors import AuthRequiredError, StoreError
from vibes.models.response import Response
from vibes.services.response_values import tag_value

logger = logging.getLogger(__name__)


def _find(db: Session, question_id: int, user_id: str) -> Response | None:
    return db.execute(
        select(Response).where(
            Response.question_id == question_id,
            Response.user_id == user_id,
        )
    ).scalar_one_or_none()


def _overwrite(row: Response, kind: str, stored: Any) -> None:
    row.value_kind = kind
    row.value = stored
    row.answered_at = func.now()  # 같은 값 재제출이어도 응답 시각 갱신


def submit(db: Session, question_id: int, user_id: str | None, value: Any) -> Response:
    """
    upsert. 처음이면 insert, 이미 있으면 value 만 교체.
    다른 기기에서 동시에 insert 해서 unique 충돌이 나면 덮어쓰기로 처리.
    """
    if not user_id:
        raise AuthRequiredError("You must be signed in to answer")

    kind, stored = tag_value(value)

    try:
        row = _find(db, question_id, user_id)
        if row is None:
            row = Response(question_id=question_id, user_id=user_id, value_kind=kind, value=stored)
            try:
                db.add(row)
                db.flush()
            except IntegrityError as e:
                # 동시 insert 에 밀림 -> 기존 행 덮어쓰기
                db.rollback()
                row = _find(db, question_id, user_id)
                if row is None:
                    # unique 충돌이 아님 (예: 없는 question_id 의 FK 위반)
                    raise StoreError("failed to submit response") from e
                _overwrite(row, kind, stored)
        else:
            _overwrite(row, kind, stored)

        db.commit()
        db.refresh(row)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("failed to submit response") from e

    logger.info("response saved question=%s user=%s kind=%s", question_id, user_id, kind)
    return row


def has_answered(db: Session, question_id: int, user_id: str) -> bool:
    try:
        return _find(db, question_id, user_id) is not None
    except SQLAlchemyError as e:
        raise StoreError("failed to check response") from e


def list_responses(db: Session, question_id: int) -> List[Response]:
    """질문의 전체 응답 (정렬 없음, DB 순서)"""
    try:
        return list(
            db.execute(select(Response).where(Response.question_id == question_id)).scalars()
        )
    except SQLAlchemyError as e:
        raise StoreError("failed to list responses") from e
