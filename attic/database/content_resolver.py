#!/usr/bin/env python3
"""
content_resolver.py
--------------------
Resolution of polymorphic collection references.

A CollectionItem points at its content through a ``(content_type,
content_id)`` pair rather than a foreign key, because the target may live
in any of five tables. The database cannot enforce that reference, so this
module does it at the application layer:

    - resolve(): fetch the referenced row and project it into a summary
    - exists(): check the target before an item is inserted
    - detach(): delete every item pointing at a row that is being deleted

Dangling references left behind by older data resolve to None; readers
embed an empty projection instead of failing.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type, Union

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from attic.core.logging_manager import AtticLogger, safe_logger
from attic.database.models import (
    Book,
    Collection,
    CollectionItem,
    ContentType,
    Essay,
    Note,
    Quote,
)
from attic.schemas.content import (
    BookSummary,
    CollectionSummary,
    ContentSummary,
    EssaySummary,
    NoteSummary,
    QuoteSummary,
)

ContentModel = Union[Essay, Book, Quote, Note, Collection]

#: Table behind each content type
CONTENT_MODELS: Dict[ContentType, Type[ContentModel]] = {
    ContentType.ESSAY: Essay,
    ContentType.BOOK: Book,
    ContentType.QUOTE: Quote,
    ContentType.NOTE: Note,
    ContentType.COLLECTION: Collection,
}

#: Summary projection built for each content type
SUMMARY_BUILDERS: Dict[ContentType, Callable[[ContentModel], ContentSummary]] = {
    ContentType.ESSAY: EssaySummary.model_validate,
    ContentType.BOOK: BookSummary.model_validate,
    ContentType.QUOTE: QuoteSummary.model_validate,
    ContentType.NOTE: NoteSummary.model_validate,
    ContentType.COLLECTION: CollectionSummary.model_validate,
}


@dataclass(frozen=True)
class ContentRef:
    """
    Typed reference to one piece of content.

    Attributes:
        content_type: Which table the id belongs to
        content_id: Primary key in that table
    """

    content_type: ContentType
    content_id: int

    def __post_init__(self) -> None:
        # Accept raw strings such as "BOOK" from callers outside the API layer
        object.__setattr__(self, "content_type", ContentType(self.content_type))

    @classmethod
    def of(cls, item: CollectionItem) -> "ContentRef":
        return cls(item.content_type, item.content_id)

    @property
    def model(self) -> Type[ContentModel]:
        return CONTENT_MODELS[self.content_type]

    def __str__(self) -> str:
        return f"{self.content_type.value}:{self.content_id}"


class ContentResolver:
    """Fetches, projects and detaches polymorphic collection content."""

    def __init__(self, session: Session, logger: Optional[AtticLogger] = None):
        self.session = session
        self.logger = logger

    def fetch(self, ref: ContentRef) -> Optional[ContentModel]:
        """Return the ORM row behind ``ref`` or None."""
        return self.session.get(ref.model, ref.content_id)

    def exists(self, ref: ContentRef) -> bool:
        return self.fetch(ref) is not None

    def resolve(self, ref: ContentRef) -> Optional[ContentSummary]:
        """
        Project the referenced row into its summary model.

        Args:
            ref: Content reference

        Returns:
            Summary projection, or None when the row no longer exists
        """
        row = self.fetch(ref)
        if row is None:
            safe_logger(self.logger).log_debug(
                "Dangling collection reference", {"ref": str(ref)}
            )
            return None
        return SUMMARY_BUILDERS[ref.content_type](row)

    def detach(self, ref: ContentRef) -> int:
        """
        Delete every collection item pointing at ``ref``.

        Called by content deletes inside their transaction so that no item
        is left referencing a removed row.

        Returns:
            Number of items removed
        """
        items = (
            self.session.query(CollectionItem)
            .filter_by(content_type=ref.content_type, content_id=ref.content_id)
            .all()
        )
        owners = {item.collection for item in items}
        for item in items:
            self.session.delete(item)
        if items:
            self.session.flush()
            for owner in owners:
                self.session.expire(owner, ["items"])
        return len(items)
