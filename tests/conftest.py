import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app's own engine off the on-disk database during tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from user_api.database import Base, get_db  # noqa: E402
from user_api.main import app  # noqa: E402
from user_api.models import User  # noqa: E402

# In-memory SQLite database shared across connections via StaticPool.
TEST_DATABASE_URL = "sqlite://"

VALID_TOKEN = "test-token-123"

engine_test = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine_test,
)


@pytest.fixture()
def db_session():
    """Provide a fresh test database session for each test.

    The schema is dropped and recreated for every test function,
    ensuring complete isolation between tests.
    """
    Base.metadata.drop_all(bind=engine_test)
    Base.metadata.create_all(bind=engine_test)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session):
    """TestClient that serves every request from the in-memory database.

    No Authorization header is set, so protected paths answer 401.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_client(client):
    """Same client, with a bearer token long enough to pass the access gate."""
    client.headers["Authorization"] = f"Bearer {VALID_TOKEN}"
    return client


@pytest.fixture()
def user_factory(db_session):
    """Create users directly in the test database, bypassing the HTTP API."""

    def _create_user(email: str, first_name: str = "Test", last_name: str = "User", **fields) -> User:
        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            created_at=datetime.now(timezone.utc),
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user
