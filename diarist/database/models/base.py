"""
Base Classes
------------

Foundational ORM classes for the Diarist database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - utc_now: Timestamp factory shared by the models and managers
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass
