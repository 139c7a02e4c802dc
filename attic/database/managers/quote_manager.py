#!/usr/bin/env python3
"""
quote_manager.py
--------------------
Manages Quote entities and their optional link to a Book.

Usage:
    quotes = QuoteManager(session, logger)

    quote = quotes.create({"content": "...", "author": "Seneca", "bookId": 2})
    quotes.list_by_book({"bookId": 2})
    quotes.random(tag_id=5)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import random
from typing import Any, Dict, Optional, Union

# --- Local imports ---
from attic.core.exceptions import MissingReferenceError
from attic.database.decorators import handle_db_errors, log_database_operation
from attic.database.models import Book, ContentType, Quote
from attic.schemas.common import TagSlugInput
from attic.schemas.quotes import (
    CreateQuoteInput,
    QuoteListInput,
    QuotesByBookInput,
    UpdateQuoteInput,
)
from .base_manager import BaseManager, Page

SEARCH_FIELDS = ("content", "author", "source", "context")

SORT_COLUMNS = {
    "createdAt": Quote.created_at,
    "author": Quote.author,
    "source": Quote.source,
}


class QuoteManager(BaseManager):
    """Manages Quote table operations."""

    content_type = ContentType.QUOTE

    def _check_book(self, book_id: Optional[int]) -> None:
        if book_id is not None and self._get_by_id(Book, book_id) is None:
            raise MissingReferenceError("BOOK_NOT_FOUND", "Referenced book not found")

    @handle_db_errors
    @log_database_operation("create_quote")
    def create(self, data: Union[CreateQuoteInput, Dict[str, Any]]) -> Quote:
        """
        Create a new quote.

        Raises:
            MissingReferenceError: BOOK_NOT_FOUND for an unknown bookId,
                TAG_NOT_FOUND for unknown tag ids
        """
        data = self._coerce(CreateQuoteInput, data)
        self._check_book(data.book_id)

        quote = Quote(**data.model_dump(exclude={"tag_ids"}))
        self._set_tags(quote, data.tag_ids)
        self.session.add(quote)
        self.session.flush()
        return quote

    @handle_db_errors
    @log_database_operation("get_quote")
    def get(self, quote_id: int) -> Optional[Quote]:
        return self._get_by_id(Quote, quote_id)

    @handle_db_errors
    @log_database_operation("list_quotes")
    def list(self, params: Union[QuoteListInput, Dict[str, Any], None] = None) -> Page[Quote]:
        """
        List quotes with filtering, sorting and pagination.

        Args:
            params: QuoteListInput or mapping (page, limit, bookId, tagId,
                search, sortBy, sortOrder)
        """
        params = self._coerce(QuoteListInput, params or {})
        query = self._filter(
            self.session.query(Quote),
            Quote.book_id == params.book_id if params.book_id is not None else None,
            self._tagged_with(Quote, params.tag_id),
            self._search(Quote, SEARCH_FIELDS, params.search),
        )
        query = self._order(query, Quote, SORT_COLUMNS[params.sort_by], params.sort_order)
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("list_quotes_by_book")
    def list_by_book(self, params: Union[QuotesByBookInput, Dict[str, Any]]) -> Page[Quote]:
        """Quotes taken from one book, in page order."""
        params = self._coerce(QuotesByBookInput, params)
        query = self.session.query(Quote).filter(Quote.book_id == params.book_id)
        query = self._order(query, Quote, Quote.page, "asc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("list_quotes_by_tag")
    def list_by_tag(self, params: Union[TagSlugInput, Dict[str, Any]]) -> Page[Quote]:
        """Quotes carrying the tag with this slug; an unknown slug yields an empty page."""
        params = self._coerce(TagSlugInput, params)
        tag = self._tag_by_slug(params.tag_slug)
        if tag is None:
            return Page(page=params.page, limit=params.limit)

        query = self.session.query(Quote).filter(self._tagged_with(Quote, tag.id))
        query = self._order(query, Quote, Quote.created_at, "desc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("random_quote")
    def random(self, tag_id: Optional[int] = None, rng: Optional[random.Random] = None) -> Optional[Quote]:
        """
        Pick a quote uniformly at random.

        Args:
            tag_id: Only draw from quotes carrying this tag
            rng: Random source, for reproducible draws

        Returns:
            A Quote, or None when no quote matches
        """
        query = self._filter(self.session.query(Quote), self._tagged_with(Quote, tag_id))
        count = query.count()
        if count == 0:
            return None
        offset = (rng or random).randrange(count)
        return query.order_by(Quote.id).offset(offset).first()

    @handle_db_errors
    @log_database_operation("update_quote")
    def update(self, data: Union[UpdateQuoteInput, Dict[str, Any]]) -> Quote:
        """
        Update quote fields; ``bookId: null`` unlinks the book.

        Raises:
            NotFoundError: NOT_FOUND if the quote does not exist
            MissingReferenceError: BOOK_NOT_FOUND for an unknown bookId
        """
        data = self._coerce(UpdateQuoteInput, data)
        quote = self._require(Quote, data.id, message="Quote not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id", "tag_ids"})

        if "book_id" in updates:
            book_id = updates.pop("book_id")
            self._check_book(book_id)
            quote.book = self._get_by_id(Book, book_id)

        self._assign_fields(quote, updates, required=("content",))
        self._set_tags(quote, data.tag_ids)
        self.session.flush()
        return quote

    @handle_db_errors
    @log_database_operation("delete_quote")
    def delete(self, quote_id: int) -> None:
        quote = self._require(Quote, quote_id, message="Quote not found")
        self._delete_content(quote)
