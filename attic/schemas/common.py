"""
Shared schema building blocks.

Every procedure model derives from ``AtticModel``, which accepts both the
camelCase wire names (``coverImage``) and the Python attribute names
(``cover_image``) on input, reads ORM objects through ``from_attributes``
and serializes back to camelCase.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Dict, Literal, Optional
from urllib.parse import urlparse

# --- Third party imports ---
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

SortOrder = Literal["asc", "desc"]

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class AtticModel(BaseModel):
    """Base model for all procedure inputs and outputs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def check_url(value: Optional[str]) -> Optional[str]:
    """Reject strings that are not absolute http(s) URLs."""
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return value


# ----- Inputs -----


class IdInput(AtticModel):
    id: int


class PaginationInput(AtticModel):
    """1-based page number and bounded page size."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=50)


class TagSlugInput(PaginationInput):
    tag_slug: str = Field(..., min_length=1)


# ----- Outputs -----


class TagRef(AtticModel):
    """Tag as embedded in content projections."""

    id: int
    name: str
    slug: str
    color: Optional[str] = None


class TagCounts(AtticModel):
    """Number of rows per content kind carrying a tag."""

    essays: int = 0
    books: int = 0
    quotes: int = 0
    notes: int = 0
    collections: int = 0

    @property
    def total(self) -> int:
        return self.essays + self.books + self.quotes + self.notes + self.collections


class ListOut(AtticModel):
    """Pagination envelope shared by every list operation."""

    total: int
    page: int
    limit: int
    total_pages: int


class SuccessOut(AtticModel):
    success: bool = True
    message: str


class Timestamped(AtticModel):
    created_at: datetime
    updated_at: datetime


def counts_from(usage: Optional[Dict[str, int]]) -> TagCounts:
    """Build TagCounts from a ``{kind: count}`` mapping."""
    return TagCounts(**(usage or {}))


def describe_errors(error: ValidationError) -> str:
    """Condense a pydantic error into one display line."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid input data"
