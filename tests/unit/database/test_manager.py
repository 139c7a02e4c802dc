"""Tests for AtticDB engine setup and session handling."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from attic.core.exceptions import DatabaseError, NotFoundError
from attic.core.logging_manager import AtticLogger
from attic.database.manager import AtticDB
from attic.database.models import Base, Note, Quote


class TestAtticDBSetup:
    """Engine and schema initialization."""

    def test_fresh_file_gets_schema(self, test_db, test_db_path):
        assert test_db_path.exists()
        assert set(Base.metadata.tables) <= set(test_db.table_names())

    def test_in_memory_store(self):
        with AtticDB(":memory:") as db:
            assert db.in_memory is True
            assert db.db_path is None
            assert "collection_items" in db.table_names()

    def test_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "attic.db"
        with AtticDB(db_path):
            assert db_path.exists()

    def test_reopening_keeps_data(self, test_db_path):
        with AtticDB(test_db_path) as db:
            with db.session_scope():
                db.notes.create({"content": "persisted"})

        with AtticDB(test_db_path) as db:
            with db.session_scope() as session:
                assert session.query(Note).count() == 1

    def test_initialize_schema_is_idempotent(self, test_db):
        test_db.initialize_schema()
        test_db.initialize_schema()
        assert "tags" in test_db.table_names()

    def test_log_dir_creates_logger(self, tmp_path):
        with AtticDB(":memory:", log_dir=tmp_path / "logs") as db:
            assert isinstance(db.logger, AtticLogger)
            assert (tmp_path / "logs" / "database.log").exists()


class TestSessionScope:
    """Transactions and session-bound components."""

    def test_commit_on_success(self, test_db):
        with test_db.session_scope():
            test_db.notes.create({"content": "kept"})

        with test_db.session_scope() as session:
            assert session.query(Note).count() == 1

    def test_rollback_on_error(self, test_db):
        with pytest.raises(RuntimeError):
            with test_db.session_scope():
                test_db.notes.create({"content": "discarded"})
                raise RuntimeError("abort")

        with test_db.session_scope() as session:
            assert session.query(Note).count() == 0

    def test_components_unavailable_outside_scope(self, test_db):
        with pytest.raises(DatabaseError, match="requires an active session"):
            test_db.books

    def test_components_released_after_scope(self, test_db):
        with test_db.session_scope():
            assert test_db.tags is not None
        with pytest.raises(DatabaseError):
            test_db.tags

    def test_components_share_the_session(self, test_db):
        with test_db.session_scope() as session:
            assert test_db.notes.session is session
            assert test_db.analytics.session is session
            assert test_db.health.session is session

    def test_nested_scope_rejected(self, test_db):
        with test_db.session_scope():
            with pytest.raises(DatabaseError, match="already active"):
                with test_db.session_scope():
                    pass

    def test_foreign_keys_enforced(self, test_db):
        with pytest.raises(IntegrityError):
            with test_db.session_scope() as session:
                session.add(Quote(content="orphan", book_id=999))
                session.flush()

    def test_session_logging(self, test_db):
        test_db.logger = MagicMock(spec=AtticLogger)

        with test_db.session_scope():
            pass

        messages = [c[0][0] for c in test_db.logger.log_debug.call_args_list]
        assert messages == ["session_start", "session_commit", "session_close"]

    def test_rollback_is_logged(self, test_db):
        test_db.logger = MagicMock(spec=AtticLogger)

        with pytest.raises(ValueError):
            with test_db.session_scope():
                raise ValueError("bad")

        context = test_db.logger.log_error.call_args[0][1]
        assert context["operation"] == "session_rollback"

    def test_domain_error_rollback_logged_at_debug(self, test_db):
        test_db.logger = MagicMock(spec=AtticLogger)

        with pytest.raises(NotFoundError):
            with test_db.session_scope():
                raise NotFoundError("NOT_FOUND", "Note not found")

        test_db.logger.log_error.assert_not_called()
        messages = [c.args[0] for c in test_db.logger.log_debug.call_args_list]
        assert "session_rollback rejected" in messages
