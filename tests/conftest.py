"""
conftest.py
-----------
Shared pytest fixtures for Attic tests.

Provides fixtures for:
- Database setup and teardown
- Session-bound managers
- Mock loggers
- Sample fixture files
"""
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from attic.core.logging_manager import AtticLogger
from attic.database.manager import AtticDB


# ----- Path Fixtures -----

@pytest.fixture
def test_data_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_fixture(test_data_dir):
    """Path to the sample YAML fixture file."""
    return test_data_dir / "sample.yaml"


# ----- Logger Fixtures -----

@pytest.fixture
def mock_logger():
    """AtticLogger stand-in for asserting log calls."""
    return MagicMock(spec=AtticLogger)


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_path):
    """Temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns an AtticDB on a temporary SQLite file. The engine is disposed
    after the test.
    """
    db = AtticDB(db_path=test_db_path)
    yield db
    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Open a session scope for tests.

    Managers are reachable through test_db (test_db.books, ...) while the
    scope is active; the scope commits when the test finishes.
    """
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def tag_manager(test_db, db_session):
    """TagManager bound to the test session."""
    return test_db.tags


@pytest.fixture
def essay_manager(test_db, db_session):
    """EssayManager bound to the test session."""
    return test_db.essays


@pytest.fixture
def book_manager(test_db, db_session):
    """BookManager bound to the test session."""
    return test_db.books


@pytest.fixture
def quote_manager(test_db, db_session):
    """QuoteManager bound to the test session."""
    return test_db.quotes


@pytest.fixture
def note_manager(test_db, db_session):
    """NoteManager bound to the test session."""
    return test_db.notes


@pytest.fixture
def collection_manager(test_db, db_session):
    """CollectionManager bound to the test session."""
    return test_db.collections


@pytest.fixture
def analytics(test_db, db_session):
    """QueryAnalytics bound to the test session."""
    return test_db.analytics


@pytest.fixture
def resolver(test_db, db_session):
    """ContentResolver bound to the test session."""
    return test_db.resolver


@pytest.fixture
def health(test_db, db_session):
    """HealthMonitor bound to the test session."""
    return test_db.health

