#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the Attic database.

Each manager handles CRUD operations for one content kind and inherits
from BaseManager.

Available Managers:
    BaseManager: Base class with pagination, lookup and update helpers
    TagManager: Tag registry, renames and merges
    EssayManager: Essays addressed by slug
    BookManager: Books, reading progress and highlights
    QuoteManager: Quotes, optionally linked to books
    NoteManager: Notes, including bulk status/tag updates
    CollectionManager: Collections and their polymorphic items

Usage:
    from attic.database.managers import BookManager

    books = BookManager(session, logger)
"""
from .base_manager import BaseManager, Page
from .tag_manager import TagManager
from .essay_manager import EssayManager
from .book_manager import BookManager
from .quote_manager import QuoteManager
from .note_manager import NoteManager
from .collection_manager import CollectionManager

__all__ = [
    "BaseManager",
    "Page",
    "TagManager",
    "EssayManager",
    "BookManager",
    "QuoteManager",
    "NoteManager",
    "CollectionManager",
]
