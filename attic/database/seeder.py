#!/usr/bin/env python3
"""
seeder.py
--------------------
Import a YAML fixture file into the database.

The whole file is loaded in one transaction through the entity managers,
so every row passes the same validation as a procedure call and a bad
entry leaves the store untouched.

File Layout:
    tags:
      - {name: Philosophy, color: "#8B5CF6"}
    books:
      - {title: Meditations, author: Marcus Aurelius, progress: 100, tags: [Philosophy]}
    essays:
      - {title: On Walking, content: "...", tags: [Philosophy]}
    quotes:
      - {content: "...", book: Meditations, tags: [Philosophy]}
    notes:
      - {content: "...", status: PUBLISHED}
    collections:
      - name: Stoic reading
        tags: [Philosophy]
        items:
          - {type: book, ref: Meditations}
          - {type: essay, ref: on-walking}
          - {type: quote, ref: 0}

References:
    - ``tags`` lists tag names defined in the file or already stored
    - ``book`` on a quote is a book title
    - collection items name their target by book title, essay slug or
      title, collection name, or the 0-based position of a quote or note
      in this file
    - a book ``progress`` value goes through the reading-progress rules

Usage:
    counts = Seeder(db).load("fixtures/attic.yaml", reset=True)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, List, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from attic.core.exceptions import ValidationError
from attic.core.logging_manager import safe_logger
from attic.database.models import (
    Base,
    Book,
    Collection,
    ContentType,
    Essay,
    Quote,
    Note,
    Tag,
)
from attic.utils.slugify import slugify
from .manager import AtticDB

SECTIONS = ("tags", "books", "essays", "quotes", "notes", "collections")


class Seeder:
    """Loads fixture files into an AtticDB."""

    def __init__(self, db: AtticDB) -> None:
        self.db = db
        self.logger = db.logger
        self.session = None
        self._quotes: List[Quote] = []
        self._notes: List[Note] = []

    @staticmethod
    def read(path: Union[str, Path]) -> Dict[str, Any]:
        """
        Parse a fixture file.

        Raises:
            ValidationError: If the document is not a mapping or has unknown sections
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValidationError(message="Fixture must be a mapping of sections")
        unknown = sorted(set(data) - set(SECTIONS))
        if unknown:
            raise ValidationError(message=f"Unknown fixture sections: {', '.join(unknown)}")
        return data

    def load(self, path: Union[str, Path], reset: bool = False) -> Dict[str, int]:
        """
        Import a fixture file.

        Args:
            path: YAML file
            reset: Delete every existing row first

        Returns:
            Created row counts per section, plus ``items`` for collection items
        """
        data = self.read(path)
        counts = {section: 0 for section in SECTIONS}
        counts["items"] = 0

        with self.db.session_scope() as session:
            if reset:
                for table in reversed(Base.metadata.sorted_tables):
                    session.execute(table.delete())
                safe_logger(self.logger).log_info("Existing data cleared")

            self.session = session
            self._quotes, self._notes = [], []

            for entry in data.get("tags") or []:
                self.db.tags.create(entry)
                counts["tags"] += 1

            for entry in data.get("books") or []:
                entry = self._with_tags(entry)
                progress = entry.pop("progress", None)
                book = self.db.books.create(entry)
                if progress is not None:
                    self.db.books.update_progress({"id": book.id, "progress": progress})
                counts["books"] += 1

            for entry in data.get("essays") or []:
                self.db.essays.create(self._with_tags(entry))
                counts["essays"] += 1

            for entry in data.get("quotes") or []:
                entry = self._with_tags(entry)
                title = entry.pop("book", None)
                if title is not None:
                    entry["book_id"] = self._book(title).id
                self._quotes.append(self.db.quotes.create(entry))
                counts["quotes"] += 1

            for entry in data.get("notes") or []:
                self._notes.append(self.db.notes.create(self._with_tags(entry)))
                counts["notes"] += 1

            for entry in data.get("collections") or []:
                entry = self._with_tags(entry)
                items = entry.pop("items", None) or []
                collection = self.db.collections.create(entry)
                counts["collections"] += 1
                for item in items:
                    self._add_item(collection, item)
                    counts["items"] += 1

        safe_logger(self.logger).log_operation(
            "fixture_loaded", {"path": str(path), "reset": reset, "counts": counts}
        )
        return counts

    # -------------------------------------------------------------------------
    # Reference resolution
    # -------------------------------------------------------------------------

    def _with_tags(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        """Copy ``entry`` with its ``tags`` names replaced by ``tag_ids``."""
        entry = dict(entry)
        names = entry.pop("tags", None)
        if names is not None:
            entry["tag_ids"] = [self._tag(name).id for name in names]
        return entry

    def _lookup(self, model, message: str, *criteria) -> Any:
        row = self.session.query(model).filter(*criteria).first()
        if row is None:
            raise ValidationError(message=message)
        return row

    def _tag(self, name: str) -> Tag:
        return self._lookup(Tag, f"Unknown tag in fixture: {name}", Tag.name == name)

    def _book(self, title: str) -> Book:
        return self._lookup(Book, f"Unknown book in fixture: {title}", Book.title == title)

    def _positional(self, rows: List[Any], ref: Any, kind: str) -> Any:
        if not isinstance(ref, int) or not 0 <= ref < len(rows):
            raise ValidationError(message=f"Unknown {kind} position in fixture: {ref}")
        return rows[ref]

    def _target(self, content_type: ContentType, ref: Any) -> Any:
        if content_type is ContentType.BOOK:
            return self._book(ref)
        if content_type is ContentType.ESSAY:
            return self._lookup(
                Essay,
                f"Unknown essay in fixture: {ref}",
                Essay.slug.in_([str(ref), slugify(str(ref))]),
            )
        if content_type is ContentType.COLLECTION:
            return self._lookup(
                Collection, f"Unknown collection in fixture: {ref}", Collection.name == ref
            )
        if content_type is ContentType.QUOTE:
            return self._positional(self._quotes, ref, "quote")
        return self._positional(self._notes, ref, "note")

    def _add_item(self, collection: Collection, item: Dict[str, Any]) -> None:
        try:
            content_type = ContentType(str(item["type"]).upper())
        except (KeyError, ValueError) as e:
            raise ValidationError(message=f"Invalid collection item in fixture: {item}") from e

        target = self._target(content_type, item.get("ref"))
        self.db.collections.add_item(
            {
                "collection_id": collection.id,
                "content_type": content_type,
                "content_id": target.id,
                "note": item.get("note"),
                "order": item.get("order"),
            }
        )
