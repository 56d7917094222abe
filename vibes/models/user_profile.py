# vibes/models/user_profile.py
# supabase auth.users를 보조하는 프로필/메타 테이블 모델
from sqlalchemy import Column, String, Boolean, DateTime, Enum, func, text
from vibes.db.base import Base

class UserProfile(Base):
    __tablename__ = "user_profiles"
    id = Column(String(128), primary_key=True)  # = auth.users.id
    display_name = Column(String(100))
    status = Column(
        Enum("active", "blocked", "deleted", name="user_status", native_enum=False),
        nullable=False,
        server_default=text("'active'")
    )
    onboarding_done = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
