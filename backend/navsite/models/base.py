"""
Base model and timestamp helpers for SQLAlchemy ORM.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()


def utc_now_iso() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        Millisecond precision timestamp with a ``Z`` suffix
        (e.g., "2025-01-15T10:30:45.123Z"), the format stored in every
        JSON record.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
