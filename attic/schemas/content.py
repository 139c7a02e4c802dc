"""
Summary projections of collection content.

One model per content kind, exposing only the fields needed to display the
item inside a collection. ContentResolver builds these from ORM rows.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Optional, Union

# --- Local imports ---
from attic.database.models.enums import BookStatus, PublishStatus
from .common import AtticModel


class EssaySummary(AtticModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    published_at: datetime
    read_time: Optional[int] = None
    cover_image: Optional[str] = None
    slug: str


class BookSummary(AtticModel):
    id: int
    title: str
    author: str
    cover_image: Optional[str] = None
    description: Optional[str] = None
    status: BookStatus
    rating: Optional[int] = None
    pages: Optional[int] = None


class QuoteBookSummary(AtticModel):
    title: str
    author: str


class QuoteSummary(AtticModel):
    id: int
    content: str
    author: Optional[str] = None
    source: Optional[str] = None
    book: Optional[QuoteBookSummary] = None


class NoteSummary(AtticModel):
    id: int
    title: Optional[str] = None
    content: str
    status: PublishStatus
    created_at: datetime


class CollectionSummary(AtticModel):
    id: int
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    is_public: bool
    item_count: int


ContentSummary = Union[EssaySummary, BookSummary, QuoteSummary, NoteSummary, CollectionSummary]
