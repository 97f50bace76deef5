# tests/conftest.py
import os

os.environ.setdefault("APP_SECRET", "test-secret-for-hs256-signing-0123456789")
os.environ.setdefault("DB_URL", "sqlite://")

import random
import string

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from profitlens.config import settings
from profitlens.db import Base, get_db
from profitlens.main import app
from profitlens.services.workspace import Workspace


@pytest.fixture()
def engine():
    # one shared in-memory database per test
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def client(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.workspace = Workspace(window_days=30)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    tok = jwt.encode({"sub": "user-test-1"}, settings.APP_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {tok}"}


@pytest.fixture()
def rng_suffix():
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
