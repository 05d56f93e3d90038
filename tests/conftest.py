import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_publishable.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["PUBLISH_BY_DEFAULT"] = "true"
os.environ["UNPUBLISH_BACKDATE_SECONDS"] = "60"
os.environ["REJECT_INVERTED_WINDOWS"] = "false"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from app.main import app
from app.api.deps import get_db, get_now
from app.repositories.article import create_article

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Reference "now" shared by fixtures and the overridden clock dependency.
NOW = datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def now() -> datetime:
    return NOW


@pytest.fixture(scope="function")
def client(db_session, now):
    """Create a test client with database and clock dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: now

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================================================
# ARTICLE FIXTURES
# ============================================================================
# Created through the repository, so the publish-by-default hook does not run.


@pytest.fixture(scope="function")
def undated_article(db: Session):
    """No dates at all: always published."""
    return create_article(db, title="Undated", created_at=NOW - timedelta(days=10))


@pytest.fixture(scope="function")
def published_article(db: Session):
    """Published in the past, never expires."""
    return create_article(
        db,
        title="Published",
        created_at=NOW - timedelta(days=10),
        publish_at=NOW - timedelta(days=5),
    )


@pytest.fixture(scope="function")
def regular_article(db: Session):
    """Inside a window that opened in the past and closes in the future."""
    return create_article(
        db,
        title="Regular",
        created_at=NOW - timedelta(days=10),
        publish_at=NOW - timedelta(days=1),
        unpublish_at=NOW + timedelta(days=1),
    )


@pytest.fixture(scope="function")
def scheduled_article(db: Session):
    """Publication date still in the future."""
    return create_article(
        db,
        title="Scheduled",
        created_at=NOW - timedelta(days=10),
        publish_at=NOW + timedelta(days=2),
    )


@pytest.fixture(scope="function")
def unpublished_article(db: Session):
    """Unpublication date already passed."""
    return create_article(
        db,
        title="Unpublished",
        created_at=NOW - timedelta(days=10),
        unpublish_at=NOW - timedelta(hours=1),
    )


@pytest.fixture(scope="function")
def fixed_article(db: Session):
    """A window that closed long ago."""
    return create_article(
        db,
        title="Fixed",
        created_at=datetime(2006, 5, 1, 0, 0, 0),
        publish_at=datetime(2006, 5, 23, 8, 0, 0),
        unpublish_at=datetime(2006, 5, 24, 9, 0, 0),
    )


@pytest.fixture(scope="function")
def published_articles(undated_article, published_article, regular_article):
    return [undated_article, published_article, regular_article]


@pytest.fixture(scope="function")
def unpublished_articles(scheduled_article, unpublished_article, fixed_article):
    return [scheduled_article, unpublished_article, fixed_article]
