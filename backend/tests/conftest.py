"""Pytest fixtures — fresh SQLite database per test, authenticated API helpers."""
from datetime import datetime, timezone, timedelta

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, get_db
from app.main import app

# Import all models so they register with Base.metadata
from app.models.user import User                    # noqa: F401
from app.models.event import Event                  # noqa: F401
from app.models.swap_request import SwapRequest     # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: users, auth headers and slots through the API
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", email: str | None = None) -> dict:
    """Helper — POST /api/users and return response JSON (includes access_token)."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    resp = client.post("/api/users/", json={"name": name, "email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth(user: dict) -> dict:
    """Authorization header for a user returned by create_test_user."""
    return {"Authorization": f"Bearer {user['access_token']}"}


def make_db_user(db, name: str = "Db User", email: str | None = None) -> User:
    """Helper — insert a user straight into the database (service-level tests)."""
    user = User(name=name, email=email or f"{name.lower().replace(' ', '.')}@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_test_slot(
    client: TestClient,
    user: dict,
    title: str = "Slot",
    start_offset_hours: int = 24,
    duration_hours: int = 1,
    status: str | None = None,
) -> dict:
    """Helper — POST /api/events for the user and return response JSON."""
    start = datetime.now(timezone.utc) + timedelta(hours=start_offset_hours)
    end = start + timedelta(hours=duration_hours)
    payload = {"title": title, "start_time": start.isoformat(), "end_time": end.isoformat()}
    if status:
        payload["status"] = status
    resp = client.post("/api/events/", json=payload, headers=auth(user))
    assert resp.status_code == 201, resp.text
    return resp.json()
