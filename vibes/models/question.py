# vibes/models/question.py
from sqlalchemy import Column, BigInteger, Integer, String, Text, DateTime, JSON, Index, func
from vibes.db.base import Base

# sqlite 에서는 INTEGER PRIMARY KEY 여야 autoincrement 됨
QuestionId = BigInteger().with_variant(Integer, "sqlite")

QUESTION_TYPES = ("single", "rating", "numeric", "date")
QUESTION_STATUSES = ("draft", "approved")

class Question(Base):
    __tablename__ = "questions"

    id = Column(QuestionId, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # single|rating|numeric|date (생성 후 변경 불가)
    created_by = Column(String(128), nullable=False, index=True)  # auth uid
    status = Column(String(20), nullable=False, server_default="draft")  # draft|approved

    # 타입별 필드: single -> options, rating/numeric -> min_value/max_value
    options = Column(JSON, nullable=True)
    min_value = Column("min", Integer, nullable=True)
    max_value = Column("max", Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('ix_questions_status_created_at', 'status', 'created_at'),
    )
