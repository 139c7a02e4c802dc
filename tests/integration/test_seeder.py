"""
test_seeder.py
--------------
Integration tests for loading YAML fixtures.
"""
import pytest

from attic.core.exceptions import ValidationError
from attic.database.models import Book, BookStatus, CollectionItem, ContentType, Tag
from attic.database.seeder import Seeder


def write_fixture(tmp_path, text):
    path = tmp_path / "fixture.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestSeeder:
    """Tests for Seeder.load() with the sample fixture."""

    def test_counts(self, test_db, sample_fixture):
        counts = Seeder(test_db).load(sample_fixture)

        assert counts == {
            "tags": 2,
            "books": 2,
            "essays": 1,
            "quotes": 2,
            "notes": 2,
            "collections": 1,
            "items": 3,
        }

    def test_book_progress_applied(self, test_db, sample_fixture):
        Seeder(test_db).load(sample_fixture)

        with test_db.session_scope() as session:
            books = {b.title: b for b in session.query(Book).all()}
            assert books["Meditations"].status == BookStatus.READ
            assert books["Meditations"].finished_at is not None
            assert books["Dune"].status == BookStatus.CURRENTLY_READING
            assert [t.name for t in books["Dune"].tags] == ["Fiction"]

    def test_quotes_linked_to_books(self, test_db, sample_fixture):
        Seeder(test_db).load(sample_fixture)

        with test_db.session_scope():
            page = test_db.quotes.list({"sortBy": "createdAt", "sortOrder": "asc"})
            assert [q.book.title for q in page.items] == ["Meditations", "Dune"]
            assert page.items[0].page == 12

    def test_collection_items(self, test_db, sample_fixture):
        Seeder(test_db).load(sample_fixture)

        with test_db.session_scope():
            collection = test_db.collections.list().items[0]
            items = collection.items
            assert [i.content_type for i in items] == [
                ContentType.BOOK,
                ContentType.ESSAY,
                ContentType.QUOTE,
            ]
            assert [i.order for i in items] == [1, 2, 3]
            assert items[2].note == "Opening line"
            assert [t.name for t in collection.tags] == ["Philosophy"]

    def test_reset(self, test_db, sample_fixture):
        Seeder(test_db).load(sample_fixture)
        counts = Seeder(test_db).load(sample_fixture, reset=True)

        assert counts["tags"] == 2
        with test_db.session_scope() as session:
            assert session.query(Tag).count() == 2
            assert session.query(CollectionItem).count() == 3

    def test_empty_file(self, test_db, tmp_path):
        counts = Seeder(test_db).load(write_fixture(tmp_path, ""))
        assert sum(counts.values()) == 0


class TestSeederErrors:
    """Tests for rejected fixture files."""

    def test_unknown_section(self, test_db, tmp_path):
        path = write_fixture(tmp_path, "podcasts:\n  - {name: x}\n")

        with pytest.raises(ValidationError, match="podcasts"):
            Seeder(test_db).load(path)

    def test_not_a_mapping(self, test_db, tmp_path):
        with pytest.raises(ValidationError):
            Seeder(test_db).load(write_fixture(tmp_path, "- just\n- a list\n"))

    def test_unknown_tag_rolls_back(self, test_db, tmp_path):
        path = write_fixture(
            tmp_path,
            "tags:\n  - {name: Kept}\n"
            "books:\n  - {title: B, author: A, tags: [Missing]}\n",
        )

        with pytest.raises(ValidationError, match="Missing"):
            Seeder(test_db).load(path)

        with test_db.session_scope() as session:
            assert session.query(Tag).count() == 0
            assert session.query(Book).count() == 0

    def test_bad_item_type(self, test_db, tmp_path):
        path = write_fixture(
            tmp_path,
            "collections:\n  - name: Box\n    items:\n      - {type: podcast, ref: 1}\n",
        )

        with pytest.raises(ValidationError, match="Invalid collection item"):
            Seeder(test_db).load(path)

    def test_quote_position_out_of_range(self, test_db, tmp_path):
        path = write_fixture(
            tmp_path,
            "collections:\n  - name: Box\n    items:\n      - {type: quote, ref: 3}\n",
        )

        with pytest.raises(ValidationError, match="quote position"):
            Seeder(test_db).load(path)
