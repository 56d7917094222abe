# vibes/models/response.py
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, JSON, ForeignKey, UniqueConstraint, func
from vibes.db.base import Base
from vibes.models.question import QuestionId

class Response(Base):
    __tablename__ = "responses"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    question_id = Column(QuestionId, ForeignKey("questions.id"), nullable=False, index=True)
    user_id = Column(String(128), nullable=False)

    value_kind = Column(String(10), nullable=False)  # string|number|date
    value = Column(JSON, nullable=True)

    answered_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # (question, user) 당 응답 1개
        UniqueConstraint('question_id', 'user_id', name='uq_responses_question_user'),
    )
