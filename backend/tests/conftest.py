"""Pytest fixtures — throwaway SQLite database for fast, isolated tests."""
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from karaoke.config import settings
from karaoke.database import Base, get_db
from karaoke.main import app

# Import all models so they register with Base.metadata
from karaoke.models.event import Event               # noqa: F401
from karaoke.models.song_request import SongRequest  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"
OPERATOR_TOKEN = "test-operator-token"
OPERATOR_HEADERS = {"X-Operator-Token": OPERATOR_TOKEN}


@pytest.fixture(autouse=True)
def operator_token(monkeypatch):
    """Every test runs with a known operator token configured."""
    monkeypatch.setattr(settings, "OPERATOR_TOKEN", OPERATOR_TOKEN)
    return OPERATOR_TOKEN


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

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the throwaway database."""
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
# Helpers: drive the API the way the booth and the attendees do
# ---------------------------------------------------------------------------
def create_test_event(client: TestClient, name: str = "Friday Night", song_minutes_avg=4.5) -> dict:
    """Helper — POST /api/events as the operator and return response JSON."""
    resp = client.post("/api/events/", json={
        "name": name,
        "song_minutes_avg": song_minutes_avg,
    }, headers=OPERATOR_HEADERS)
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit_test_request(client: TestClient, event_code: str, nickname: str = "Mia",
                        song_title: str = "Bohemian Rhapsody", key_shift: int = 0) -> dict:
    """Helper — attendee submission through the public route, returns the receipt JSON."""
    resp = client.post(f"/api/public/submit?eventCode={event_code}", json={
        "nickname": nickname,
        "song_title": song_title,
        "key_shift": key_shift,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def set_test_status(client: TestClient, event_id: str, request_id: str, new_status: str) -> dict:
    """Helper — PUT a status change as the operator and return response JSON."""
    resp = client.put(
        f"/api/events/{event_id}/requests/{request_id}/status",
        json={"status": new_status},
        headers=OPERATOR_HEADERS,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def public_rows(client: TestClient, event_code: str) -> list[dict]:
    """Helper — rows of the public queue view."""
    resp = client.get(f"/api/public/queue?eventCode={event_code}")
    assert resp.status_code == 200, resp.text
    return resp.json()["rows"]
