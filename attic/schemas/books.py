"""Book procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from typing import List, Literal, Optional

# --- Third party imports ---
from pydantic import Field, field_validator

# --- Local imports ---
from attic.database.models.enums import BookStatus
from .common import (
    AtticModel,
    ListOut,
    PaginationInput,
    SortOrder,
    TagRef,
    Timestamped,
    check_url,
)


def check_published_year(value: Optional[int]) -> Optional[int]:
    """Publication year cannot lie in the future."""
    if value is not None and value > date.today().year:
        raise ValueError("publishedYear cannot be in the future")
    return value


class CreateBookInput(AtticModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    isbn: Optional[str] = None
    cover_image: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)
    pages: Optional[int] = Field(None, gt=0)
    published_year: Optional[int] = Field(None, ge=1)
    language: str = "en"
    status: BookStatus = BookStatus.WANT_TO_READ
    notes: Optional[str] = Field(None, max_length=5000)
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)
    check_year = field_validator("published_year")(check_published_year)


class UpdateBookInput(AtticModel):
    id: int
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    isbn: Optional[str] = None
    cover_image: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)
    pages: Optional[int] = Field(None, gt=0)
    published_year: Optional[int] = Field(None, ge=1)
    language: Optional[str] = None
    status: Optional[BookStatus] = None
    notes: Optional[str] = Field(None, max_length=5000)
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)
    check_year = field_validator("published_year")(check_published_year)


class ReadingProgressInput(AtticModel):
    id: int
    progress: int = Field(..., ge=0, le=100)
    status: Optional[BookStatus] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = Field(None, max_length=5000)


class HighlightInput(AtticModel):
    text: str = Field(..., min_length=1)
    page: int = Field(..., gt=0)
    note: Optional[str] = None


class AddHighlightInput(AtticModel):
    book_id: int
    highlight: HighlightInput


class BookListInput(PaginationInput):
    status: Optional[BookStatus] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    tag_id: Optional[int] = None
    search: Optional[str] = None
    sort_by: Literal["title", "author", "rating", "finishedAt", "createdAt"] = "createdAt"
    sort_order: SortOrder = "desc"


class ReadingStatsInput(AtticModel):
    year: Optional[int] = None


class HighlightOut(AtticModel):
    id: str
    text: str
    page: int
    note: Optional[str] = None
    created_at: datetime


class BookQuoteOut(AtticModel):
    id: int
    content: str
    page: Optional[int] = None
    created_at: datetime


class BookSummaryOut(Timestamped):
    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    cover_image: Optional[str] = None
    description: Optional[str] = None
    pages: Optional[int] = None
    published_year: Optional[int] = None
    language: str
    status: BookStatus
    progress: int
    rating: Optional[int] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    notes: Optional[str] = None
    tags: List[TagRef] = []


class BookOut(BookSummaryOut):
    highlights: List[HighlightOut] = []
    quotes: List[BookQuoteOut] = []


class BookListOut(ListOut):
    books: List[BookSummaryOut]


class ReadingStatsOut(AtticModel):
    total_books: int
    books_read: int
    currently_reading: int
    want_to_read: int
    pages_read: int
    average_rating: Optional[float] = None
    books_this_year: int
