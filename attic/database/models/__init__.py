"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Attic content database.

This package provides a modular organization of database models:
- base: Base class and timestamp mixin
- enums: Enumeration types
- associations: Tag join tables, one per content kind
- entities: Tag, Essay, Book, Quote, Note
- collections: Collection and the polymorphic CollectionItem

Usage:
    from attic.database.models import Book, Tag, CollectionItem
"""
# Base classes
from .base import Base, TimestampMixin, UTCDateTime, utc_now

# Enumerations
from .enums import BookStatus, ContentType, PublishStatus

# Association tables
from .associations import (
    TAG_JOIN_TABLES,
    book_tags,
    collection_tags,
    essay_tags,
    note_tags,
    quote_tags,
)

# Entity models
from .entities import DEFAULT_TAG_COLOR, Book, Essay, Note, Quote, Tag

# Collections
from .collections import Collection, CollectionItem

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "utc_now",
    # Enums
    "BookStatus",
    "ContentType",
    "PublishStatus",
    # Association tables
    "TAG_JOIN_TABLES",
    "book_tags",
    "collection_tags",
    "essay_tags",
    "note_tags",
    "quote_tags",
    # Entities
    "DEFAULT_TAG_COLOR",
    "Tag",
    "Essay",
    "Book",
    "Quote",
    "Note",
    # Collections
    "Collection",
    "CollectionItem",
]
