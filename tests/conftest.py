"""Pytest configuration and shared fixtures."""

import os
import time

# Settings() 는 import 시점에 읽히므로 vibes import 전에 설정
os.environ["SUPABASE_JWT_SECRET"] = "test-secret"
os.environ["SUPABASE_JWT_AUDIENCE"] = "authenticated"
os.environ["SUPABASE_ISSUER"] = ""
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vibes.db.base import Base
from vibes.deps import get_db
from vibes.main import app
from vibes.models import question, response, user_context, user_profile  # noqa: F401

TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    """In-memory sqlite shared by every session of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client with get_db pointed at the in-memory database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_token(sub: str, email: str | None = None, secret: str = TEST_SECRET, **extra) -> str:
    now = int(time.time())
    claims = {
        "sub": sub,
        "aud": "authenticated",
        "iat": now,
        "exp": now + 3600,
        "role": "authenticated",
    }
    if email:
        claims["email"] = email
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def auth_headers():
    """Factory: auth_headers("alice") -> {"Authorization": "Bearer ..."}"""

    def _headers(uid: str = "user-alice", email: str | None = None):
        return {"Authorization": f"Bearer {make_token(uid, email)}"}

    return _headers
