"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database and a low bcrypt cost
so hashing stays fast.
"""

import os
import sys

import pytest

# Add server directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "server"))

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi.testclient import TestClient

from core.config import Settings
from core.security import CredentialService
from database import create_db_engine, create_session_factory, init_db


@pytest.fixture
def settings():
    return Settings(
        jwt_secret_key="test-secret-key",
        bcrypt_rounds=4,
        access_token_expire_minutes=5,
        database_url="sqlite://",
    )


@pytest.fixture
def credentials(settings):
    return CredentialService(settings)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(settings):
    from main import create_app

    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
