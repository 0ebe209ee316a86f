"""Shared fixtures: an isolated SQLite store, signed access tokens, and an API client."""

from __future__ import annotations

import os
import time
import uuid

# Must be set before config.py is imported anywhere
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ["DATA_BACKEND"] = "supabase"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import config
from database import init_db, make_engine
from dependencies import get_store
from services.data_store import SqlStore


def make_token(user_id: str, email: str = "user@example.com", **claims) -> str:
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, config.SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return SqlStore(db_session)


@pytest.fixture
def owner() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def auth_headers(owner):
    return {"Authorization": f"Bearer {make_token(owner)}"}


@pytest.fixture
def client(store):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
