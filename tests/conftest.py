"""
conftest.py
-----------
Shared pytest fixtures for Diarist tests.

Provides fixtures for:
- Database setup and teardown
- Entity managers bound to a test session
- Seeded pre-built tags
- Test data factories
"""
import pytest
from pathlib import Path
from datetime import date, timedelta
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Sample Data Factory Functions -----

REFERENCE_DAY = date(2024, 3, 15)


def create_sample_date(offset: int = 0) -> date:
    """Factory for consistent test dates, offset days before the reference day."""
    return REFERENCE_DAY - timedelta(days=offset)


def create_minimal_entry(offset: int = 0):
    """Factory for minimal entry metadata."""
    return {"entry_date": create_sample_date(offset)}


def create_complex_entry(offset: int = 0, tags=None):
    """Factory for entry metadata with every field populated."""
    return {
        "entry_date": create_sample_date(offset),
        "title": "A full day",
        "content": "Went for a **long** walk by the river and read two chapters",
        "primary_mood": "happy",
        "secondary_mood_1": "grateful",
        "secondary_mood_2": "tired",
        "is_favorite": True,
        "tags": tags or [],
    }


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Tables are created from the ORM metadata before DiaristDB is built,
    so the instance treats the file as an existing database and skips
    migrations and seeding. Database is torn down after the test.
    """
    from diarist.database.manager import DiaristDB
    from diarist.database.models import Base
    from sqlalchemy import create_engine

    engine = create_engine(f"sqlite:///{test_db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()

    db = DiaristDB(db_path=test_db_path)

    yield db

    db.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def streak_manager(db_session):
    """Create StreakManager instance for testing."""
    from diarist.database.managers.streak_manager import StreakManager
    return StreakManager(db_session)


@pytest.fixture
def entry_manager(db_session, streak_manager):
    """Create EntryManager instance sharing the streak manager."""
    from diarist.database.managers.entry_manager import EntryManager
    return EntryManager(db_session, streak_manager=streak_manager)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from diarist.database.managers.tag_manager import TagManager
    return TagManager(db_session)


@pytest.fixture
def settings_manager(db_session):
    """Create SettingsManager instance for testing."""
    from diarist.database.managers.settings_manager import SettingsManager
    return SettingsManager(db_session)


@pytest.fixture
def seeded_tags(tag_manager):
    """Seed the pre-built tags and return them keyed by name."""
    tag_manager.seed_prebuilt()
    return {tag.name: tag for tag in tag_manager.get_prebuilt()}


@pytest.fixture
def mock_logger():
    """Mock logger implementing the DiaristLogger interface."""
    from diarist.core.logging_manager import DiaristLogger
    return MagicMock(spec=DiaristLogger)
