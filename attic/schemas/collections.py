"""Collection procedure schemas."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import List, Literal, Optional

# --- Third party imports ---
from pydantic import Field, field_validator

# --- Local imports ---
from attic.database.models.enums import ContentType
from .common import (
    AtticModel,
    ListOut,
    PaginationInput,
    SortOrder,
    TagRef,
    Timestamped,
    check_url,
)
from .content import ContentSummary


class CreateCollectionInput(AtticModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cover_image: Optional[str] = None
    is_public: bool = True
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)


class UpdateCollectionInput(AtticModel):
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cover_image: Optional[str] = None
    is_public: Optional[bool] = None
    tag_ids: Optional[List[int]] = None

    check_cover_image = field_validator("cover_image")(check_url)


class GetCollectionInput(AtticModel):
    id: int
    include_items: bool = True


class CollectionListInput(PaginationInput):
    is_public: Optional[bool] = None
    tag_id: Optional[int] = None
    search: Optional[str] = None
    sort_by: Literal["name", "createdAt", "updatedAt"] = "updatedAt"
    sort_order: SortOrder = "desc"


class AddItemInput(AtticModel):
    collection_id: int
    content_type: ContentType
    content_id: int
    note: Optional[str] = Field(None, max_length=500)
    order: Optional[int] = None


class RemoveItemInput(AtticModel):
    item_id: int


class ItemOrder(AtticModel):
    item_id: int
    order: int


class ReorderItemsInput(AtticModel):
    collection_id: int
    items: List[ItemOrder]


class ItemCount(AtticModel):
    items: int


class CollectionItemOut(AtticModel):
    id: int
    content_type: ContentType
    content_id: int
    order: int
    note: Optional[str] = None
    created_at: datetime
    content: Optional[ContentSummary] = None


class CollectionSummaryOut(Timestamped):
    id: int
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    is_public: bool
    tags: List[TagRef] = []
    counts: Optional[ItemCount] = Field(None, alias="_count")


class CollectionOut(CollectionSummaryOut):
    items: List[CollectionItemOut] = []


class CollectionListOut(ListOut):
    collections: List[CollectionSummaryOut]


class AddItemOut(AtticModel):
    success: bool = True
    message: str
    item: CollectionItemOut
