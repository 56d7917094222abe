# vibes/routers/questions.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vibes.config import settings
from vibes.deps import get_current_user, get_db
from vibes.schemas.question import QuestionCreated, QuestionDraft, QuestionOut
from vibes.services import question_repository

router = APIRouter(prefix="/api/questions", tags=["questions"])


# (1) 질문 만들기 -> draft 상태로 저장, 검수 후 피드에 노출
# POST /api/questions
@router.post("", response_model=QuestionCreated, status_code=201)
def create_question(
    payload: QuestionDraft,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    qid = question_repository.create(db, current_user["id"], payload)
    return QuestionCreated(id=qid)


# (2) 피드: 승인된 질문 최신순
# GET /api/questions?limit=50
@router.get("", response_model=List[QuestionOut])
def list_questions(
    limit: int | None = Query(None, ge=1, le=100),
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    items = question_repository.list_approved(db, limit)
    return [QuestionOut.from_model(q) for q in items]


# (3) 질문 하나
# GET /api/questions/{question_id}
@router.get("/{question_id}", response_model=QuestionOut)
def get_question(
    question_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return QuestionOut.from_model(question_repository.get(db, question_id))
