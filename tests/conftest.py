"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Iterator, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["IDENTITY_URL"] = os.environ.get("IDENTITY_URL") or "https://identity.test"
os.environ["IDENTITY_API_KEY"] = os.environ.get("IDENTITY_API_KEY") or "test-identity-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = os.environ.get("LOG_DIR") or tempfile.mkdtemp(prefix="liftlog-logs-")

from liftlog.logging_config import configure_logging

configure_logging()

from liftlog.database import Base, get_db
from liftlog.main import app
from liftlog.models import database_models  # noqa: F401
from liftlog.models.schemas import WorkoutMeta
from liftlog.services.identity import AuthenticationError, get_token_resolver
from liftlog.services.workout_store import WorkoutStoreError, get_workout_store

ALICE_TOKEN = "token-alice"
BOB_TOKEN = "token-bob"


class FakeTokenResolver:
    """In-memory identity service keyed by token."""

    def __init__(self, tokens: dict[str, str]) -> None:
        self.tokens = tokens
        self.calls: list[str] = []

    def resolve(self, token: str) -> str:
        self.calls.append(token)
        try:
            return self.tokens[token]
        except KeyError:
            raise AuthenticationError("unknown token") from None


class FakeWorkoutStore:
    """Workout metadata store that records every query it receives."""

    def __init__(self, rows: list[dict] | None = None, error: str | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.fetch_calls: list[tuple[list[str], str]] = []

    def fetch_metadata(self, ids: Sequence[str], user_id: str) -> list[WorkoutMeta]:
        self.fetch_calls.append((list(ids), user_id))
        if self.error:
            raise WorkoutStoreError(self.error)
        return [
            WorkoutMeta(id=row["id"], updated_at=row["updated_at"], completed_at=row["completed_at"])
            for row in self.rows
            if row["id"] in ids and row["user_id"] == user_id
        ]


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture
def token_resolver() -> FakeTokenResolver:
    return FakeTokenResolver({ALICE_TOKEN: "user-alice", BOB_TOKEN: "user-bob"})


@pytest.fixture
def fake_store() -> FakeWorkoutStore:
    stamp = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
    return FakeWorkoutStore(
        rows=[
            {"id": "a", "user_id": "user-alice", "updated_at": stamp, "completed_at": stamp},
            {"id": "b", "user_id": "user-bob", "updated_at": stamp, "completed_at": None},
        ]
    )


@pytest.fixture
def client(test_client: TestClient, token_resolver: FakeTokenResolver, fake_store: FakeWorkoutStore) -> Iterator[TestClient]:
    """Test client with identity and storage replaced by in-memory doubles."""

    app.dependency_overrides[get_token_resolver] = lambda: token_resolver
    app.dependency_overrides[get_workout_store] = lambda: fake_store
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Create in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def db_client(test_client: TestClient, token_resolver: FakeTokenResolver, db_session: Session) -> Iterator[TestClient]:
    """Test client backed by the real SQLAlchemy store on an in-memory database."""

    def override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_token_resolver] = lambda: token_resolver
    app.dependency_overrides[get_db] = override_get_db
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {BOB_TOKEN}"}
