#!/usr/bin/env python3
"""
book_manager.py
--------------------
Manages Book entities, reading progress and highlights.

Reading progress drives the book status:

    progress == 0        -> WANT_TO_READ
    0 < progress < 100   -> CURRENTLY_READING
    progress == 100      -> READ

DNF is never derived; it is only set by passing an explicit status, which
always overrides the derived one. Independently of the status,
``started_at`` is stamped the first time progress becomes positive and
``finished_at`` the first time it reaches 100; dropping below 100 again
clears ``finished_at``.

Usage:
    books = BookManager(session, logger)

    book = books.create({"title": "Dune", "author": "Frank Herbert", "pages": 412})
    books.update_progress({"id": book.id, "progress": 40})
    books.add_highlight({"bookId": book.id, "highlight": {"text": "...", "page": 12}})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Union

# --- Local imports ---
from attic.core.exceptions import ConflictError
from attic.core.logging_manager import safe_logger
from attic.database.decorators import handle_db_errors, log_database_operation
from attic.database.models import Book, BookStatus, ContentType, utc_now
from attic.schemas.books import (
    AddHighlightInput,
    BookListInput,
    CreateBookInput,
    ReadingProgressInput,
    UpdateBookInput,
)
from .base_manager import BaseManager, Page

SEARCH_FIELDS = ("title", "author", "description")

SORT_COLUMNS = {
    "title": Book.title,
    "author": Book.author,
    "rating": Book.rating,
    "finishedAt": Book.finished_at,
    "createdAt": Book.created_at,
}


class BookManager(BaseManager):
    """Manages Book table operations and the reading-progress state machine."""

    content_type = ContentType.BOOK

    def _check_isbn(self, isbn: Optional[str]) -> None:
        if isbn and self._exists(Book, "isbn", isbn):
            raise ConflictError("ISBN_EXISTS", "A book with this ISBN already exists")

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_book")
    def create(self, data: Union[CreateBookInput, Dict[str, Any]]) -> Book:
        """
        Create a new book.

        Args:
            data: CreateBookInput or mapping

        Returns:
            Created Book with its tags

        Raises:
            ConflictError: ISBN_EXISTS if the ISBN is already catalogued
            MissingReferenceError: TAG_NOT_FOUND for unknown tag ids
        """
        data = self._coerce(CreateBookInput, data)
        self._check_isbn(data.isbn)

        book = Book(highlights=[], **data.model_dump(exclude={"tag_ids"}))
        self._set_tags(book, data.tag_ids)
        self.session.add(book)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Created book: {book.title}", {"book_id": book.id, "isbn": book.isbn}
        )
        return book

    @handle_db_errors
    @log_database_operation("get_book")
    def get(self, book_id: int) -> Optional[Book]:
        return self._get_by_id(Book, book_id)

    @handle_db_errors
    @log_database_operation("list_books")
    def list(self, params: Union[BookListInput, Dict[str, Any], None] = None) -> Page[Book]:
        """
        List books with filtering, sorting and pagination.

        Args:
            params: BookListInput or mapping (page, limit, status, rating,
                tagId, search, sortBy, sortOrder)
        """
        params = self._coerce(BookListInput, params or {})
        query = self._filter(
            self.session.query(Book),
            Book.status == params.status if params.status else None,
            Book.rating == params.rating if params.rating else None,
            self._tagged_with(Book, params.tag_id),
            self._search(Book, SEARCH_FIELDS, params.search),
        )
        query = self._order(query, Book, SORT_COLUMNS[params.sort_by], params.sort_order)
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("update_book")
    def update(self, data: Union[UpdateBookInput, Dict[str, Any]]) -> Book:
        """
        Update book fields.

        Raises:
            NotFoundError: NOT_FOUND if the book does not exist
            ConflictError: ISBN_EXISTS if the new ISBN belongs to another book
        """
        data = self._coerce(UpdateBookInput, data)
        book = self._require(Book, data.id, message="Book not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id", "tag_ids"})

        new_isbn = updates.get("isbn")
        if new_isbn and new_isbn != book.isbn:
            self._check_isbn(new_isbn)

        self._assign_fields(book, updates, required=("title", "author", "language", "status"))
        self._set_tags(book, data.tag_ids)
        self.session.flush()
        return book

    @handle_db_errors
    @log_database_operation("delete_book")
    def delete(self, book_id: int) -> None:
        """
        Delete a book.

        Quotes linked to it are kept with their book reference cleared.

        Raises:
            NotFoundError: NOT_FOUND if the book does not exist
        """
        book = self._require(Book, book_id, message="Book not found")
        self._delete_content(book)

    # -------------------------------------------------------------------------
    # Reading Progress
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("update_reading_progress")
    def update_progress(
        self,
        data: Union[ReadingProgressInput, Dict[str, Any]],
        now: Optional[datetime] = None,
    ) -> Book:
        """
        Record reading progress and keep status and dates consistent.

        Args:
            data: ReadingProgressInput or mapping (id, progress, status?,
                rating?, notes?)
            now: Timestamp to stamp started_at/finished_at with

        Returns:
            Updated Book

        Raises:
            NotFoundError: NOT_FOUND if the book does not exist
        """
        data = self._coerce(ReadingProgressInput, data)
        book = self._require(Book, data.id, message="Book not found")
        now = now or utc_now()
        previous = book.status

        book.progress = data.progress
        book.status = data.status or BookStatus.from_progress(data.progress)

        if data.progress > 0 and book.started_at is None:
            book.started_at = now
        if data.progress == 100 and book.finished_at is None:
            book.finished_at = now
        if data.progress < 100 and book.finished_at is not None:
            book.finished_at = None

        if data.rating is not None:
            book.rating = data.rating
        if data.notes is not None:
            book.notes = data.notes

        self.session.flush()

        if book.status != previous:
            safe_logger(self.logger).log_info(
                "Book status changed",
                {
                    "book_id": book.id,
                    "from": previous.value,
                    "to": book.status.value,
                    "progress": book.progress,
                },
            )
        return book

    # -------------------------------------------------------------------------
    # Highlights
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("add_highlight")
    def add_highlight(self, data: Union[AddHighlightInput, Dict[str, Any]]) -> Book:
        """
        Append a highlight to a book.

        Each stored highlight gets a generated ``id`` and a ``createdAt``
        ISO timestamp. The list is replaced rather than mutated so the JSON
        column is written back.

        Raises:
            NotFoundError: NOT_FOUND if the book does not exist
        """
        data = self._coerce(AddHighlightInput, data)
        book = self._require(Book, data.book_id, message="Book not found")

        highlight = {
            "id": uuid.uuid4().hex[:12],
            "text": data.highlight.text,
            "page": data.highlight.page,
            "note": data.highlight.note,
            "createdAt": utc_now().isoformat(),
        }
        book.highlights = [*(book.highlights or []), highlight]
        self.session.flush()
        return book
