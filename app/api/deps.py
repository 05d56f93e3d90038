from datetime import datetime

from app.core.clock import utc_now
from app.db.base import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_now() -> datetime:
    """Reference time for publication checks. Overridden in tests."""
    return utc_now()
