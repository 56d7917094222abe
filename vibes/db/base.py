"""
공용 DB 베이스/세션 팩토리.
SessionLocal, engine, Base 정의는 vibes.db.session 한 곳에서 관리한다.
"""
from vibes.db.session import engine, SessionLocal, Base, init_db

__all__ = ["engine", "SessionLocal", "Base", "init_db"]
