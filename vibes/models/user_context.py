# vibes/models/user_context.py
# 온보딩 시 받는 선택 정보 (나이/도시). 설문 데이터와는 독립.
from sqlalchemy import Column, Integer, String, DateTime, func
from vibes.db.base import Base

class UserContext(Base):
    __tablename__ = "user_context"

    user_id = Column(String(128), primary_key=True)  # = auth uid
    age = Column(Integer, nullable=True)       # 0..120
    city = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
