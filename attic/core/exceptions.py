#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Attic project.

Every error raised by the content layer carries a stable machine-readable
``kind`` plus an HTTP-style ``status`` and a human-readable message, so that
procedures can declare a closed set of failures and callers can handle them
exhaustively.

Exception Hierarchy:
    Exception (built-in)
    └── AtticError - Base for all project errors (500)
        ├── DatabaseError - Store-level failures
        ├── ValidationError - Malformed or out-of-range input (400)
        ├── NotFoundError - Addressed entity is absent (404)
        ├── MissingReferenceError - Foreign reference does not resolve (404)
        ├── ConflictError - Uniqueness violations (409)
        └── PreconditionError - Operation not applicable to its input (400)

Usage:
    from attic.core.exceptions import ConflictError, NotFoundError

    try:
        db.books.create(payload)
    except ConflictError as e:
        print(e.kind, e.status, e.message)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Optional


class AtticError(Exception):
    """
    Base exception for all Attic errors.

    Attributes:
        kind: Stable machine-readable error identifier (e.g. ``ISBN_EXISTS``)
        status: HTTP-style status code
        message: Human-readable description suitable for display

    Examples:
        >>> raise AtticError("INTERNAL_ERROR", "Something went wrong")
    """

    default_kind = "INTERNAL_ERROR"
    default_message = "Unexpected error"
    status = 500

    def __init__(
        self,
        kind: Optional[str] = None,
        message: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        self.kind = kind or self.default_kind
        self.message = message or self.default_message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for transport or display."""
        return {"kind": self.kind, "status": self.status, "message": self.message}

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(kind={self.kind}, status={self.status})>"


class DatabaseError(AtticError):
    """
    Exception for store-level failures.

    Raised when database operations fail due to connection issues,
    integrity violations that were not pre-checked, or sessions used
    outside their scope. Procedures re-surface it as their generic
    ``VALIDATION_ERROR`` so implementation detail never leaks.

    Examples:
        >>> raise DatabaseError(message="Data integrity violation: UNIQUE constraint failed")
    """

    default_kind = "DATABASE_ERROR"
    default_message = "Database operation failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(self.default_kind, message)


class ValidationError(AtticError):
    """
    Exception for data validation failures.

    Raised before any store access when input is malformed:
    - Missing required fields
    - Values out of range (progress, rating, limits)
    - Invalid enumeration values

    Examples:
        >>> raise ValidationError(message="Progress must be between 0 and 100")
    """

    default_kind = "VALIDATION_ERROR"
    default_message = "Invalid input data"
    status = 400


class NotFoundError(AtticError):
    """
    Exception for id-based operations whose target does not exist.

    Examples:
        >>> raise NotFoundError("NOT_FOUND", "Book not found")
        >>> raise NotFoundError("COLLECTION_NOT_FOUND", "Collection not found")
    """

    default_kind = "NOT_FOUND"
    default_message = "Not found"
    status = 404


class MissingReferenceError(AtticError):
    """
    Exception for foreign references that do not resolve.

    Distinct from NotFoundError: the primary entity may exist, but a value
    it points at (a quote's book, a collection item's content) does not.

    Examples:
        >>> raise MissingReferenceError("BOOK_NOT_FOUND", "Book not found")
        >>> raise MissingReferenceError("CONTENT_NOT_FOUND", "Content not found")
    """

    default_kind = "REFERENCE_NOT_FOUND"
    default_message = "Referenced entity not found"
    status = 404


class ConflictError(AtticError):
    """
    Exception for uniqueness violations.

    Examples:
        >>> raise ConflictError("ISBN_EXISTS", "A book with this ISBN already exists")
        >>> raise ConflictError("ITEM_EXISTS", "Item already exists in collection")
    """

    default_kind = "CONFLICT"
    default_message = "Resource already exists"
    status = 409


class PreconditionError(AtticError):
    """
    Exception for well-formed input that the operation cannot apply.

    Examples:
        >>> raise PreconditionError("SAME_TAG", "Cannot merge a tag with itself")
    """

    default_kind = "PRECONDITION_FAILED"
    default_message = "Precondition failed"
    status = 400
