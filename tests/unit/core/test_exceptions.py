"""Tests for the Attic exception hierarchy."""
import pytest

from attic.core.exceptions import (
    AtticError,
    ConflictError,
    DatabaseError,
    MissingReferenceError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)


class TestErrorDefaults:
    """Each error class carries its default kind and status."""

    @pytest.mark.parametrize(
        "error_class, kind, status",
        [
            (AtticError, "INTERNAL_ERROR", 500),
            (DatabaseError, "DATABASE_ERROR", 500),
            (ValidationError, "VALIDATION_ERROR", 400),
            (NotFoundError, "NOT_FOUND", 404),
            (MissingReferenceError, "REFERENCE_NOT_FOUND", 404),
            (ConflictError, "CONFLICT", 409),
            (PreconditionError, "PRECONDITION_FAILED", 400),
        ],
    )
    def test_defaults(self, error_class, kind, status):
        error = error_class()
        assert error.kind == kind
        assert error.status == status
        assert isinstance(error, AtticError)

    def test_custom_kind_and_message(self):
        error = ConflictError("ISBN_EXISTS", "A book with this ISBN already exists")
        assert error.kind == "ISBN_EXISTS"
        assert error.message == "A book with this ISBN already exists"
        assert str(error) == "A book with this ISBN already exists"
        assert error.status == 409

    def test_status_override(self):
        error = AtticError("TEAPOT", "short and stout", status=418)
        assert error.status == 418
        assert AtticError.status == 500

    def test_database_error_takes_message_only(self):
        error = DatabaseError("Data integrity violation: UNIQUE constraint failed")
        assert error.kind == "DATABASE_ERROR"
        assert "UNIQUE" in error.message

    def test_to_dict(self):
        error = NotFoundError("COLLECTION_NOT_FOUND", "Collection not found")
        assert error.to_dict() == {
            "kind": "COLLECTION_NOT_FOUND",
            "status": 404,
            "message": "Collection not found",
        }

    def test_repr(self):
        assert repr(PreconditionError("SAME_TAG")) == (
            "<PreconditionError(kind=SAME_TAG, status=400)>"
        )
