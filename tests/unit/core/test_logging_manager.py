"""Tests for the logging system and CLI error helpers."""
import pytest
from unittest.mock import MagicMock

from attic.core.exceptions import NotFoundError
from attic.core.logging_manager import (
    AtticLogger,
    NullLogger,
    format_cli_error,
    handle_cli_error,
    safe_logger,
)


class TestAtticLogger:
    """Tests for AtticLogger file output."""

    @pytest.fixture
    def logger(self, tmp_path):
        logger = AtticLogger(tmp_path / "logs", component_name="unittest")
        yield logger
        logger.close()

    def test_creates_log_directory(self, tmp_path, logger):
        assert (tmp_path / "logs").is_dir()

    def test_operation_written_to_component_log(self, tmp_path, logger):
        logger.log_operation("create_book", {"book_id": 1})
        content = (tmp_path / "logs" / "unittest.log").read_text()
        assert "OPERATION - create_book" in content
        assert '"book_id": 1' in content

    def test_error_written_to_error_log(self, tmp_path, logger):
        logger.log_error(NotFoundError("NOT_FOUND", "Book not found"), {"book_id": 7})
        content = (tmp_path / "logs" / "errors.log").read_text()
        assert "[NOT_FOUND] Book not found" in content
        assert "book_id=7" in content

    def test_cli_error_message(self, logger):
        message = logger.log_cli_error(NotFoundError("NOT_FOUND", "Book not found"))
        assert message == "❌ NOT_FOUND (404): Book not found"


class TestFormatting:
    """Tests for CLI error formatting."""

    def test_attic_error(self):
        error = NotFoundError("PROCEDURE_NOT_FOUND", "Unknown procedure: x.y")
        assert format_cli_error(error) == "❌ PROCEDURE_NOT_FOUND (404): Unknown procedure: x.y"

    def test_foreign_error(self):
        assert format_cli_error(ValueError("boom")) == "❌ ValueError: boom"


class TestSafeLogger:
    """Tests for safe_logger()."""

    def test_none_gives_null_logger(self):
        logger = safe_logger(None)
        assert isinstance(logger, NullLogger)
        logger.log_operation("noop")
        logger.log_warning("noop")

    def test_passes_real_logger_through(self):
        logger = MagicMock(spec=AtticLogger)
        assert safe_logger(logger) is logger


class TestHandleCliError:
    """Tests for handle_cli_error()."""

    def test_prints_and_exits(self, capsys):
        ctx = MagicMock()
        ctx.obj = {"logger": None, "verbose": False}

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("NOT_FOUND", "Book not found"), "call")

        assert exc_info.value.code == 1
        assert "❌ NOT_FOUND (404): Book not found" in capsys.readouterr().err

    def test_logs_through_context_logger(self):
        logger = MagicMock(spec=AtticLogger)
        logger.log_cli_error.return_value = "❌ failure"
        ctx = MagicMock()
        ctx.obj = {"logger": logger, "verbose": True}

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("bad"), "seed", {"fixture": "x.yaml"})

        args, kwargs = logger.log_cli_error.call_args
        assert args[1] == {"operation": "seed", "fixture": "x.yaml"}
        assert kwargs["show_traceback"] is True
