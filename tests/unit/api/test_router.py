"""
test_router.py
--------------
Unit tests for procedure dispatch: payload validation, session handling
and error mapping.
"""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from attic.api import ROUTER, call, get_procedure, procedure_names
from attic.api.procedures import procedure
from attic.core.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from attic.core.logging_manager import AtticLogger
from attic.database.manager import AtticDB
from attic.schemas import IdInput, SuccessOut


class TestLookup:
    """Tests for procedure registration and lookup."""

    def test_unknown_procedure(self, test_db):
        with pytest.raises(NotFoundError) as exc_info:
            call(test_db, "book.burnBook", {"id": 1})

        assert exc_info.value.kind == "PROCEDURE_NOT_FOUND"
        assert exc_info.value.status == 404

    def test_get_procedure(self):
        merge = get_procedure("tag.mergeTags")

        assert merge.namespace == "tag"
        assert merge.errors == {
            "VALIDATION_ERROR",
            "SOURCE_NOT_FOUND",
            "TARGET_NOT_FOUND",
            "SAME_TAG",
        }

    def test_every_procedure_declares_validation_error(self):
        assert all("VALIDATION_ERROR" in p.errors for p in ROUTER.values())

    def test_names_by_namespace(self):
        names = procedure_names("quote")

        assert len(names) == 8
        assert "quote.getRandomQuote" in names
        assert all(name.startswith("quote.") for name in names)

    def test_names_sorted(self):
        names = procedure_names()
        assert names == sorted(names)
        assert {name.split(".")[0] for name in names} == {
            "tag", "essay", "book", "quote", "note", "collection"
        }

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError, match="registered twice"):
            procedure("tag.createTag", IdInput, SuccessOut)(lambda db, params: None)


class TestCall:
    """Tests for call() input and output handling."""

    def test_missing_payload_uses_defaults(self, test_db):
        result = call(test_db, "tag.getTags")

        assert result["tags"] == []
        assert result["total"] == 0
        assert result["limit"] == 20
        assert set(result) == {"tags", "total", "page", "limit", "totalPages"}

    def test_output_uses_wire_names(self, test_db):
        tag = call(test_db, "tag.createTag", {"name": "Science Fiction", "color": "#112233"})

        assert tag["slug"] == "science-fiction"
        assert "createdAt" in tag
        assert "created_at" not in tag
        assert tag["_count"] == {
            "essays": 0, "books": 0, "quotes": 0, "notes": 0, "collections": 0
        }

    def test_snake_case_input_accepted(self, test_db):
        book = call(test_db, "book.createBook", {"title": "Dune", "author": "Frank Herbert",
                                                 "published_year": 1965})
        assert book["publishedYear"] == 1965

    def test_invalid_payload(self, test_db):
        with pytest.raises(ValidationError) as exc_info:
            call(test_db, "book.createBook", {"title": "", "author": "A"})

        assert exc_info.value.kind == "VALIDATION_ERROR"
        assert "title" in exc_info.value.message

    def test_invalid_enum(self, test_db):
        with pytest.raises(ValidationError):
            call(test_db, "note.getNotes", {"status": "ARCHIVED"})

    def test_declared_error_propagates(self, test_db):
        with pytest.raises(NotFoundError) as exc_info:
            call(test_db, "book.updateReadingProgress", {"id": 999, "progress": 10})

        assert exc_info.value.kind == "NOT_FOUND"

    def test_missing_returns_none(self, test_db):
        assert call(test_db, "book.getBook", {"id": 999}) is None

    def test_session_released_after_call(self, test_db):
        call(test_db, "note.createNote", {"content": "one"})

        with test_db.session_scope():
            assert test_db.notes.get(1).content == "one"

    def test_failed_call_rolls_back(self, test_db):
        call(test_db, "tag.createTag", {"name": "Kept"})

        with pytest.raises(ConflictError):
            call(test_db, "tag.createTag", {"name": "Kept"})

        assert call(test_db, "tag.getTags")["total"] == 1


class TestErrorMapping:
    """Tests for store failures and undeclared error kinds."""

    def test_database_error_becomes_validation_error(self, test_db, monkeypatch):
        def broken(db, params):
            raise DatabaseError("disk on fire")

        monkeypatch.setattr(ROUTER["note.getNote"], "handler", broken)

        with pytest.raises(ValidationError) as exc_info:
            call(test_db, "note.getNote", {"id": 1})

        assert exc_info.value.kind == "VALIDATION_ERROR"
        assert exc_info.value.message == "disk on fire"

    def test_sqlalchemy_error_becomes_validation_error(self, test_db, monkeypatch):
        def broken(db, params):
            raise OperationalError("SELECT 1", {}, Exception("locked"))

        monkeypatch.setattr(ROUTER["note.getNote"], "handler", broken)

        with pytest.raises(ValidationError):
            call(test_db, "note.getNote", {"id": 1})

    def test_undeclared_kind_logged(self, test_db, monkeypatch):
        test_db.logger = MagicMock(spec=AtticLogger)

        def odd(db, params):
            raise ConflictError("ODD_KIND", "unexpected")

        monkeypatch.setattr(ROUTER["note.getNote"], "handler", odd)

        with pytest.raises(ConflictError):
            call(test_db, "note.getNote", {"id": 1})

        test_db.logger.log_warning.assert_called_once()
        message, context = test_db.logger.log_warning.call_args[0]
        assert message == "Undeclared error kind from note.getNote"
        assert context["kind"] == "ODD_KIND"

    def test_declared_kind_not_logged(self, test_db):
        test_db.logger = MagicMock(spec=AtticLogger)

        with pytest.raises(NotFoundError):
            call(test_db, "note.deleteNote", {"id": 1})

        test_db.logger.log_warning.assert_not_called()

    def test_declared_kind_logged_at_debug_only(self, test_db):
        test_db.logger = MagicMock(spec=AtticLogger)

        with pytest.raises(NotFoundError):
            call(test_db, "note.deleteNote", {"id": 1})

        test_db.logger.log_error.assert_not_called()
        rejected = [
            c.args for c in test_db.logger.log_debug.call_args_list
            if c.args[0].endswith("rejected")
        ]
        assert rejected
        assert all(args[1]["kind"] == "NOT_FOUND" for args in rejected)

    def test_declared_kind_kept_out_of_errors_log(self, tmp_path):
        db = AtticDB(db_path=tmp_path / "logged.db", log_dir=tmp_path / "logs")
        try:
            with pytest.raises(NotFoundError):
                call(db, "note.deleteNote", {"id": 1})
        finally:
            db.close()

        assert (tmp_path / "logs" / "errors.log").read_text() == ""
        assert "rejected" in (tmp_path / "logs" / "database.log").read_text()

    def test_store_failure_reaches_errors_log(self, tmp_path, monkeypatch):
        def broken(db, params):
            raise DatabaseError("disk on fire")

        monkeypatch.setattr(ROUTER["note.getNote"], "handler", broken)
        db = AtticDB(db_path=tmp_path / "logged.db", log_dir=tmp_path / "logs")
        try:
            with pytest.raises(ValidationError):
                call(db, "note.getNote", {"id": 1})
        finally:
            db.close()

        assert "disk on fire" in (tmp_path / "logs" / "errors.log").read_text()
