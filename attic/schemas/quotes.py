"""Quote procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Literal, Optional

# --- Third party imports ---
from pydantic import Field

# --- Local imports ---
from .common import AtticModel, ListOut, PaginationInput, SortOrder, TagRef, Timestamped


class CreateQuoteInput(AtticModel):
    content: str = Field(..., min_length=1, max_length=2000)
    author: Optional[str] = Field(None, max_length=100)
    source: Optional[str] = Field(None, max_length=200)
    context: Optional[str] = Field(None, max_length=1000)
    page: Optional[int] = Field(None, gt=0)
    book_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None


class UpdateQuoteInput(AtticModel):
    id: int
    content: Optional[str] = Field(None, min_length=1, max_length=2000)
    author: Optional[str] = Field(None, max_length=100)
    source: Optional[str] = Field(None, max_length=200)
    context: Optional[str] = Field(None, max_length=1000)
    page: Optional[int] = Field(None, gt=0)
    book_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None


class QuoteListInput(PaginationInput):
    book_id: Optional[int] = None
    tag_id: Optional[int] = None
    search: Optional[str] = None
    sort_by: Literal["createdAt", "author", "source"] = "createdAt"
    sort_order: SortOrder = "desc"


class QuotesByBookInput(PaginationInput):
    book_id: int


class RandomQuoteInput(AtticModel):
    tag_id: Optional[int] = None


class QuoteBookRef(AtticModel):
    id: int
    title: str
    author: str


class QuoteOut(Timestamped):
    id: int
    content: str
    author: Optional[str] = None
    source: Optional[str] = None
    context: Optional[str] = None
    page: Optional[int] = None
    book: Optional[QuoteBookRef] = None
    tags: List[TagRef] = []


class QuoteListOut(ListOut):
    quotes: List[QuoteOut]
