"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-123")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="contactbook-uploads-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from contactbook.database import Base, build_engine, get_db  # noqa: E402
from contactbook.main import app  # noqa: E402
from contactbook.models.enums import Role  # noqa: E402
from contactbook.services.users import UserStore  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client, email: str, user_id: int, password: str = DEFAULT_PASSWORD) -> AuthHeaders:
    """Log in through the API and return bearer headers for the user."""
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


def register_and_login(client, email: str, password: str = DEFAULT_PASSWORD) -> AuthHeaders:
    """Register a user through the API and return bearer headers for it."""
    response = client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201
    return login(client, email, response.json()["id"], password)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "other@example.com")


@pytest.fixture
def admin_headers(client, db):
    """Create a user, promote it to admin and log in again."""
    headers = register_and_login(client, "admin@example.com")
    UserStore(db).set_role(headers.user_id, Role.ADMIN)
    return login(client, headers.email, headers.user_id)
