"""Tests for database decorators and context managers."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from attic.core.exceptions import DatabaseError, NotFoundError
from attic.core.logging_manager import AtticLogger
from attic.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)


class TestDatabaseOperation:
    """Tests for DatabaseOperation context manager."""

    def test_successful_operation(self):
        """DatabaseOperation should log completion on success."""
        mock_logger = MagicMock(spec=AtticLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            result = 1 + 1

        assert result == 2
        mock_logger.log_operation.assert_called_once()
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "test_operation_completed"
        assert call_args[0][1]["success"] is True

    def test_successful_operation_with_none_logger(self):
        """DatabaseOperation should work with None logger (uses NullLogger)."""
        with DatabaseOperation(None, "test_operation"):
            result = 1 + 1

        assert result == 2

    def test_integrity_error_raises_database_error(self):
        """DatabaseOperation should convert IntegrityError to DatabaseError."""
        mock_logger = MagicMock(spec=AtticLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise IntegrityError("statement", {}, Exception("duplicate"))

        assert "Data integrity violation" in str(exc_info.value)
        mock_logger.log_error.assert_called_once()

    def test_sqlalchemy_error_raises_database_error(self):
        """DatabaseOperation should convert SQLAlchemyError to DatabaseError."""
        mock_logger = MagicMock(spec=AtticLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise SQLAlchemyError("connection failed")

        assert "Database operation failed" in str(exc_info.value)
        mock_logger.log_error.assert_called_once()

    def test_attic_errors_propagate_unchanged(self):
        """Declared errors keep their kind through the context manager."""
        mock_logger = MagicMock(spec=AtticLogger)

        with pytest.raises(NotFoundError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise NotFoundError("NOT_FOUND", "Book not found")

        assert exc_info.value.kind == "NOT_FOUND"
        mock_logger.log_error.assert_not_called()
        message, context = mock_logger.log_debug.call_args[0]
        assert message == "test_operation rejected"
        assert context["kind"] == "NOT_FOUND"

    def test_log_start_option(self):
        """DatabaseOperation should log start when log_start=True."""
        mock_logger = MagicMock(spec=AtticLogger)

        with DatabaseOperation(mock_logger, "test_operation", log_start=True):
            pass

        mock_logger.log_debug.assert_called_once()
        assert "Starting test_operation" in mock_logger.log_debug.call_args[0][0]

    def test_no_log_start_by_default(self):
        """DatabaseOperation should not log start by default."""
        mock_logger = MagicMock(spec=AtticLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            pass

        mock_logger.log_debug.assert_not_called()

    def test_duration_is_logged(self):
        """DatabaseOperation should log duration on completion."""
        mock_logger = MagicMock(spec=AtticLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            pass

        call_args = mock_logger.log_operation.call_args
        assert "duration_seconds" in call_args[0][1]
        assert isinstance(call_args[0][1]["duration_seconds"], float)

    def test_exit_without_enter(self):
        """An operation that never started reports zero duration."""
        mock_logger = MagicMock(spec=AtticLogger)
        error = RuntimeError("boom")

        assert DatabaseOperation(mock_logger, "test_operation").__exit__(
            RuntimeError, error, None
        ) is False
        assert mock_logger.log_error.call_args[0][1]["duration_seconds"] == 0.0


class _Worker:
    """Minimal object with a logger attribute, like a manager."""

    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("do_work")
    def work(self, value):
        return value * 2

    @log_database_operation("fail_work")
    def fail(self):
        raise RuntimeError("boom")

    @log_database_operation("find_work")
    def find(self):
        raise NotFoundError("NOT_FOUND", "missing")

    @handle_db_errors
    def integrity(self):
        raise IntegrityError("statement", {}, Exception("duplicate"))

    @handle_db_errors
    def operational(self):
        raise SQLAlchemyError("disk I/O error")

    @handle_db_errors
    def not_found(self):
        raise NotFoundError("NOT_FOUND", "missing")


class TestLogDatabaseOperation:
    """Tests for the log_database_operation decorator."""

    def test_logs_start_and_completion(self):
        mock_logger = MagicMock(spec=AtticLogger)

        assert _Worker(mock_logger).work(21) == 42

        assert mock_logger.log_debug.call_args[0][0] == "Starting do_work"
        assert mock_logger.log_operation.call_args[0][0] == "do_work_completed"

    def test_logs_error_and_reraises(self):
        mock_logger = MagicMock(spec=AtticLogger)

        with pytest.raises(RuntimeError):
            _Worker(mock_logger).fail()

        context = mock_logger.log_error.call_args[0][1]
        assert context["operation"] == "fail_work"
        mock_logger.log_operation.assert_not_called()

    def test_domain_error_logged_at_debug(self):
        mock_logger = MagicMock(spec=AtticLogger)

        with pytest.raises(NotFoundError):
            _Worker(mock_logger).find()

        mock_logger.log_error.assert_not_called()
        message, context = mock_logger.log_debug.call_args[0]
        assert message == "find_work rejected"
        assert context["kind"] == "NOT_FOUND"
        assert context["operation"] == "find_work"

    def test_works_without_logger(self):
        assert _Worker().work(2) == 4

    def test_preserves_function_name(self):
        assert _Worker.work.__name__ == "work"


class TestHandleDbErrors:
    """Tests for the handle_db_errors decorator."""

    def test_integrity_error(self):
        with pytest.raises(DatabaseError, match="Data integrity violation"):
            _Worker().integrity()

    def test_sqlalchemy_error(self):
        with pytest.raises(DatabaseError, match="Database operation failed"):
            _Worker().operational()

    def test_other_errors_pass_through(self):
        with pytest.raises(NotFoundError):
            _Worker().not_found()
