# vibes/db/session.py
# SQLAlchemy 기본 세팅. DB URL은 .env의 DATABASE_URL을 사용.

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from vibes.config import settings  # Settings() 인스턴스

# Supabase Postgres 연결용 URL (예: postgresql+psycopg2://...)
DATABASE_URL = settings.database_url

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL 환경변수가 설정되어 있지 않습니다.")

if DATABASE_URL.startswith("sqlite"):
    # 로컬 개발용 sqlite: 스레드 체크 해제만 필요
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,  # 끊어진 커넥션 자동 감지
        pool_size=10,
        max_overflow=0,      # 풀 크기 초과 연결 금지
        pool_timeout=30,     # 풀 고갈 시 대기 시간(초) 후 Timeout
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db() -> None:
    """
    로컬 개발 시 테이블 생성.
    운영(Supabase)에서는 마이그레이션으로 관리하므로 AUTO_CREATE_TABLES=false.
    """
    # 모델 import 해야 metadata에 테이블이 등록됨
    from vibes.models import question, response, user_context, user_profile  # noqa: F401

    Base.metadata.create_all(bind=engine)
