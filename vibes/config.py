# vibes/config.py


from dotenv import load_dotenv
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # .env 파일 먼저 읽기

BASE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    # 환경 구분
    app_env: str = "local"

    # DB (Supabase Postgres 또는 로컬 sqlite)
    database_url: str = f"sqlite:///{BASE_DIR / 'vibes.db'}"   # DATABASE_URL
    auto_create_tables: bool = False                           # 로컬 개발용 create_all

    # Supabase Auth (Identity Provider)
    supabase_jwt_secret: str | None = None           # SUPABASE_JWT_SECRET
    supabase_issuer: str | None = None               # SUPABASE_ISSUER
    supabase_jwt_audience: str = "authenticated"     # SUPABASE_JWT_AUDIENCE

    # 피드 / 통계
    feed_page_size: int = 50           # 승인 질문 목록 기본 개수
    display_timezone: str = "UTC"      # 날짜 응답 집계 기준 시간대

    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",                   # 필요 없는 env 무시
    )

settings = Settings()

if __name__ == "__main__":
    print("BASE_DIR:", BASE_DIR)
    print("DATABASE_URL:", settings.database_url)
    print("DISPLAY_TIMEZONE:", settings.display_timezone)
