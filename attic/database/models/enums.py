"""
Enumeration Types
------------------

Enum classes for the Attic database models.

Enums:
    - BookStatus: Reading state of a book
    - PublishStatus: Draft/published state of essays and notes
    - ContentType: Discriminator of a polymorphic collection item
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class BookStatus(str, Enum):
    """
    Reading state of a book.

    WANT_TO_READ -> CURRENTLY_READING -> READ is derived from progress;
    DNF is only ever set explicitly.
    """

    WANT_TO_READ = "WANT_TO_READ"
    CURRENTLY_READING = "CURRENTLY_READING"
    READ = "READ"
    DNF = "DNF"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available status choices."""
        return [status.value for status in cls]

    @classmethod
    def from_progress(cls, progress: int) -> "BookStatus":
        """Derive the status implied by a reading progress percentage."""
        if progress <= 0:
            return cls.WANT_TO_READ
        if progress >= 100:
            return cls.READ
        return cls.CURRENTLY_READING


class PublishStatus(str, Enum):
    """Draft/published state shared by essays and notes."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available status choices."""
        return [status.value for status in cls]


class ContentType(str, Enum):
    """
    Content kinds a collection item can point at.

    Each value selects the table that CollectionItem.content_id refers to.
    """

    ESSAY = "ESSAY"
    BOOK = "BOOK"
    QUOTE = "QUOTE"
    NOTE = "NOTE"
    COLLECTION = "COLLECTION"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available content type choices."""
        return [content_type.value for content_type in cls]
