"""
test_quote_manager.py
---------------------
Unit tests for QuoteManager: book links, listings and random draws.
"""
import random

import pytest

from attic.core.exceptions import MissingReferenceError, NotFoundError, ValidationError
from attic.database.models import Quote


@pytest.fixture
def book(book_manager):
    return book_manager.create({"title": "Letters from a Stoic", "author": "Seneca"})


class TestQuoteCreate:
    """Tests for QuoteManager.create()."""

    def test_create_standalone(self, quote_manager):
        quote = quote_manager.create({"content": "Luck is what happens...", "author": "Seneca"})

        assert quote.book is None
        assert quote.author == "Seneca"

    def test_create_linked_to_book(self, quote_manager, book):
        quote = quote_manager.create({"content": "We suffer more...", "bookId": book.id})

        assert quote.book_id == book.id
        assert quote.book is book

    def test_unknown_book(self, quote_manager, db_session):
        with pytest.raises(MissingReferenceError) as exc_info:
            quote_manager.create({"content": "Orphan", "bookId": 404})

        assert exc_info.value.kind == "BOOK_NOT_FOUND"
        assert db_session.query(Quote).count() == 0

    def test_content_length_limit(self, quote_manager):
        with pytest.raises(ValidationError):
            quote_manager.create({"content": "x" * 2001})


class TestQuoteListings:
    """Tests for list(), list_by_book() and list_by_tag()."""

    def test_list_by_book_in_page_order(self, quote_manager, book):
        quote_manager.create({"content": "late", "page": 90, "bookId": book.id})
        quote_manager.create({"content": "early", "page": 4, "bookId": book.id})
        quote_manager.create({"content": "elsewhere", "page": 1})

        page = quote_manager.list_by_book({"bookId": book.id})

        assert [q.content for q in page.items] == ["early", "late"]

    def test_list_filters_by_book(self, quote_manager, book):
        quote_manager.create({"content": "in book", "bookId": book.id})
        quote_manager.create({"content": "loose"})

        page = quote_manager.list({"bookId": book.id})

        assert [q.content for q in page.items] == ["in book"]

    def test_search_across_fields(self, quote_manager):
        quote_manager.create({"content": "alpha", "context": "Written in exile"})
        quote_manager.create({"content": "beta", "source": "Moral Letters"})

        assert [q.content for q in quote_manager.list({"search": "exile"}).items] == ["alpha"]
        assert [q.content for q in quote_manager.list({"search": "letters"}).items] == ["beta"]

    def test_sort_by_author(self, quote_manager):
        quote_manager.create({"content": "z", "author": "Zeno"})
        quote_manager.create({"content": "e", "author": "Epictetus"})

        page = quote_manager.list({"sortBy": "author", "sortOrder": "asc"})

        assert [q.author for q in page.items] == ["Epictetus", "Zeno"]

    def test_list_by_tag(self, quote_manager, tag_manager):
        tag = tag_manager.create({"name": "Time"})
        quote_manager.create({"content": "tagged", "tagIds": [tag.id]})
        quote_manager.create({"content": "plain"})

        page = quote_manager.list_by_tag({"tagSlug": "time"})

        assert [q.content for q in page.items] == ["tagged"]


class TestRandomQuote:
    """Tests for QuoteManager.random()."""

    def test_empty_store(self, quote_manager):
        assert quote_manager.random() is None

    def test_draw_from_all(self, quote_manager):
        created = {quote_manager.create({"content": f"q{i}"}).id for i in range(5)}

        drawn = {quote_manager.random(rng=random.Random(seed)).id for seed in range(20)}

        assert drawn <= created
        assert len(drawn) > 1

    def test_reproducible_with_seed(self, quote_manager):
        for i in range(5):
            quote_manager.create({"content": f"q{i}"})

        first = quote_manager.random(rng=random.Random(7))
        second = quote_manager.random(rng=random.Random(7))

        assert first is second

    def test_restricted_to_tag(self, quote_manager, tag_manager):
        tag = tag_manager.create({"name": "Courage"})
        tagged = quote_manager.create({"content": "tagged", "tagIds": [tag.id]})
        for i in range(4):
            quote_manager.create({"content": f"other {i}"})

        for seed in range(10):
            assert quote_manager.random(tag_id=tag.id, rng=random.Random(seed)) is tagged

    def test_tag_without_quotes(self, quote_manager, tag_manager):
        tag = tag_manager.create({"name": "Empty"})
        quote_manager.create({"content": "untagged"})

        assert quote_manager.random(tag_id=tag.id) is None


class TestQuoteUpdateDelete:
    """Tests for QuoteManager.update() and delete()."""

    def test_relink_book(self, quote_manager, book_manager, book):
        other = book_manager.create({"title": "Enchiridion", "author": "Epictetus"})
        quote = quote_manager.create({"content": "c", "bookId": book.id})

        quote_manager.update({"id": quote.id, "bookId": other.id})

        assert quote.book is other
        assert quote.book_id == other.id

    def test_unlink_book_with_null(self, quote_manager, book):
        quote = quote_manager.create({"content": "c", "bookId": book.id})

        quote_manager.update({"id": quote.id, "bookId": None})

        assert quote.book is None
        assert quote.book_id is None

    def test_omitted_book_is_kept(self, quote_manager, book):
        quote = quote_manager.create({"content": "c", "bookId": book.id})

        quote_manager.update({"id": quote.id, "page": 3})

        assert quote.book is book

    def test_relink_to_unknown_book(self, quote_manager):
        quote = quote_manager.create({"content": "c"})
        with pytest.raises(MissingReferenceError):
            quote_manager.update({"id": quote.id, "bookId": 404})

    def test_update_missing(self, quote_manager):
        with pytest.raises(NotFoundError):
            quote_manager.update({"id": 404, "content": "x"})

    def test_delete(self, quote_manager, db_session):
        quote = quote_manager.create({"content": "c"})

        quote_manager.delete(quote.id)

        assert db_session.get(Quote, quote.id) is None
