# vibes/services/question_repository.py
# 질문 생성/조회. 작성자, 생성시각, 상태(draft)는 서버에서 채운다.
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibes.config import settings
from vibes.errors import AuthRequiredError, NotFoundError, StoreError, ValidationError
from vibes.models.question import Question, QUESTION_STATUSES
from vibes.schemas.question import QuestionDraft

logger = logging.getLogger(__name__)


def _validate(draft: QuestionDraft) -> dict:
    """
    타입별 필수값 검증 후 저장할 필드만 골라서 반환.
    타입에 속하지 않는 필드(예: date 질문의 options)는 버린다.
    """
    text = (draft.text or "").strip()
    if not text:
        raise ValidationError("missing_text", "Question text is required")

    fields = {"text": text, "type": draft.type}

    if draft.type == "single":
        options = [o.strip() for o in (draft.options or []) if o and o.strip()]
        if not options:
            raise ValidationError("missing_options", "Options are required for single choice questions")
        fields["options"] = options

    elif draft.type in ("rating", "numeric"):
        if draft.min is None or draft.max is None:
            raise ValidationError("missing_bounds", "Min and max values are required for rating/numeric questions")
        if draft.min >= draft.max:
            raise ValidationError("invalid_bounds", "max must exceed min")
        fields["min_value"] = draft.min
        fields["max_value"] = draft.max

    return fields


def create(db: Session, creator_id: str | None, draft: QuestionDraft) -> int:
    """검증 -> draft 상태로 저장 -> 새 id 반환. 검증 실패 시 DB 쓰기 없음."""
    if not creator_id:
        raise AuthRequiredError("You must be signed in to create questions")

    fields = _validate(draft)

    q = Question(created_by=creator_id, status="draft", **fields)
    try:
        db.add(q)
        db.commit()
        db.refresh(q)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("failed to create question") from e

    logger.info("question created id=%s type=%s by=%s", q.id, q.type, creator_id)
    return q.id


def get(db: Session, question_id: int) -> Question:
    try:
        q = db.get(Question, question_id)
    except SQLAlchemyError as e:
        raise StoreError("failed to load question") from e
    if q is None:
        raise NotFoundError("question", question_id)
    return q


def list_approved(db: Session, limit: int | None = None) -> List[Question]:
    """승인된 질문을 최신순으로 최대 limit 개 (기본값 FEED_PAGE_SIZE)"""
    if limit is None:
        limit = settings.feed_page_size
    try:
        return (
            db.query(Question)
            .filter(Question.status == "approved")
            .order_by(Question.created_at.desc(), Question.id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as e:
        raise StoreError("failed to list questions") from e


def set_status(db: Session, question_id: int, status: str) -> Question:
    """
    검수(moderation) 결과 반영용. draft -> approved.
    API 로는 노출하지 않음 (외부 검수 프로세스에서 호출)
    """
    if status not in QUESTION_STATUSES:
        raise ValidationError("invalid_status", f"status must be one of {QUESTION_STATUSES}")

    q = get(db, question_id)
    q.status = status
    try:
        db.commit()
        db.refresh(q)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("failed to update question status") from e

    logger.info("question %s status -> %s", question_id, status)
    return q
