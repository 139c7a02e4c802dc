"""Essay procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import List, Optional, Union

# --- Third party imports ---
from pydantic import Field, field_validator

# --- Local imports ---
from attic.database.models.enums import PublishStatus
from .common import AtticModel, ListOut, PaginationInput, TagRef, Timestamped, check_url


class CreateEssayInput(AtticModel):
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    read_time: Optional[int] = Field(None, gt=0)
    cover_image: Optional[str] = None
    status: PublishStatus = PublishStatus.PUBLISHED
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)


class UpdateEssayInput(AtticModel):
    id: int
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=500)
    read_time: Optional[int] = Field(None, gt=0)
    cover_image: Optional[str] = None
    status: Optional[PublishStatus] = None
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)


class EssayIdentifierInput(AtticModel):
    """Essay addressed by slug or id."""

    identifier: Union[int, str]


class EssayListInput(PaginationInput):
    status: Optional[PublishStatus] = None
    tag_id: Optional[int] = None
    search: Optional[str] = None


class EssaySummaryOut(Timestamped):
    id: int
    slug: str
    title: str
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    read_time: Optional[int] = None
    cover_image: Optional[str] = None
    status: PublishStatus
    published_at: datetime
    tags: List[TagRef] = []


class EssayOut(EssaySummaryOut):
    content: str


class EssayListOut(ListOut):
    essays: List[EssaySummaryOut]
