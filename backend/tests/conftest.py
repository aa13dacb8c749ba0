# Set test environment before any application or db imports.
import os
import shutil
import tempfile

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="test_uploads_"))
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "password"

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.orm import Session

from api.deps import get_blob_store
from db import SessionLocal, get_db
from main import app
from models import Base
from models.location import Location  # noqa: F401 - register with Base
from repositories.location_repository import create_location
from site_core import sessions
from site_core.photo_store import LocalBlobStore

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


# pysqlite emits no BEGIN of its own and releases SAVEPOINTs as real commits;
# let SQLAlchemy issue BEGIN so repository commits stay inside the test transaction.
@event.listens_for(_get_engine(), "connect")
def _sqlite_no_autobegin(dbapi_conn, connection_record):
    dbapi_conn.isolation_level = None


@event.listens_for(_get_engine(), "begin")
def _sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


@contextmanager
def _isolated_session(engine):
    """Session inside an outer transaction that is always rolled back; commits become SAVEPOINT releases."""
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session; each test runs in a transaction that is rolled back."""
    with _isolated_session(engine) as session:
        yield session


@pytest.fixture
def session_factory(engine):
    """Open further isolated sessions, as db_session does (for isolation tests)."""
    return lambda: _isolated_session(engine)


@pytest.fixture
def blob_store(tmp_path):
    """Blob store writing under the test's tmp_path."""
    return LocalBlobStore(tmp_path / "media", "http://testserver/media")


@pytest.fixture(autouse=True)
def clear_sessions():
    """Admin sessions are process-global; reset around each test."""
    sessions.clear()
    yield
    sessions.clear()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session, blob_store):
    """API test client; overrides get_db and the blob store, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Authorization header for a logged-in admin."""
    r = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def make_location(db_session):
    """Factory creating locations with sensible defaults; minutes offsets createdAt from BASE_TIME."""
    def make(qr_code_id: str, minutes: int = 0, **overrides):
        fields = {
            "qr_code_id": qr_code_id,
            "location_name": f"Site {qr_code_id}",
            "area": "North Zone",
            "supervisor_name": "R. Sharma",
            "contact_number": "9876543210",
            "latitude": 28.6139,
            "longitude": 77.2090,
            "created_at": BASE_TIME + timedelta(minutes=minutes),
        }
        fields.update(overrides)
        return create_location(db_session, **fields)
    return make


def pytest_sessionfinish(session, exitstatus):
    """Remove the temporary upload directory created for the run."""
    upload_dir = os.environ.get("UPLOAD_DIR", "")
    if os.path.basename(upload_dir).startswith("test_uploads_"):
        shutil.rmtree(upload_dir, ignore_errors=True)
