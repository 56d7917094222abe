# vibes/routers/responses.py
from typing import List
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vibes.config import settings
from vibes.deps import get_current_user, get_db
from vibes.schemas.response import AnsweredOut, ResponseOut, ResponseSubmit
from vibes.schemas.summary import Summary
from vibes.services import aggregation, question_repository, response_repository
from vibes.services.response_values import coerce_value

router = APIRouter(prefix="/api/questions", tags=["responses"])


# (1) 응답 제출 (재제출 시 덮어쓰기)
# PUT /api/questions/{question_id}/responses/me
@router.put("/{question_id}/responses/me", response_model=ResponseOut)
def submit_response(
    question_id: int,
    payload: ResponseSubmit,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question = question_repository.get(db, question_id)
    value = coerce_value(question, payload.value)
    row = response_repository.submit(db, question_id, current_user["id"], value)
    return ResponseOut.from_model(row)


# (2) 내가 이미 답했는지 -> 답변 폼 / 결과 화면 분기용
# GET /api/questions/{question_id}/responses/me
@router.get("/{question_id}/responses/me", response_model=AnsweredOut)
def my_response_status(
    question_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question_repository.get(db, question_id)
    answered = response_repository.has_answered(db, question_id, current_user["id"])
    return AnsweredOut(question_id=question_id, answered=answered)


# (3) 전체 응답
# GET /api/questions/{question_id}/responses
@router.get("/{question_id}/responses", response_model=List[ResponseOut])
def list_responses(
    question_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question_repository.get(db, question_id)
    return [ResponseOut.from_model(r) for r in response_repository.list_responses(db, question_id)]


# (4) 결과 통계
# GET /api/questions/{question_id}/results
@router.get("/{question_id}/results", response_model=Summary)
def question_results(
    question_id: int,
    current_user=Depends(get_current_user),
    db: Session = Depends(get_db),
):
    question = question_repository.get(db, question_id)
    responses = response_repository.list_responses(db, question_id)
    return aggregation.summarize(question, responses, tz=ZoneInfo(settings.display_timezone))
