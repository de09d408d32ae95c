"""
Shared fixtures: in-memory SQLite, services, and an HTTP client.
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlmodel import Session

from potluck.core.config import Settings
from potluck.core.database import create_database_engine, create_tables
from potluck.core.security import get_password_hash
from potluck.main import create_app
from potluck.models import User
from potluck.services.auth import AuthService
from potluck.services.groups import GroupService
from potluck.services.recipes import RecipeService

TEST_PASSWORD = "password"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at an in-memory database and a temp upload dir."""
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        AUTO_CREATE_TABLES=True,
    )


@pytest.fixture
def engine(settings):
    engine = create_database_engine(settings)
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def auth_service(db_session, settings):
    return AuthService(db_session, settings)


@pytest.fixture
def group_service(db_session):
    return GroupService(db_session)


@pytest.fixture
def recipe_service(db_session):
    return RecipeService(db_session)


@pytest.fixture
def make_user(db_session):
    """Factory inserting users directly, skipping the auth flow."""
    counter = {"n": 0}

    def _make_user(display_name: str = None, email: str = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            email=email or f"user{n}@example.com",
            display_name=display_name or f"User {n}",
            hashed_password=TEST_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes():
    """A tiny but real PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, "PNG")
    return buffer.getvalue()
