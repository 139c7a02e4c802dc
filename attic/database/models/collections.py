"""
Collection Models
------------------

Curated, ordered groupings of heterogeneous content.

Models:
    - Collection: Named container with tags and ordered items
    - CollectionItem: Polymorphic (content_type, content_id) membership row

CollectionItem.content_id points into one of five tables selected by
content_type. No database constraint can span those tables, so existence
is checked by ContentResolver when an item is added and dangling items are
tolerated on read.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import List, Optional

# --- Third party imports ---
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import collection_tags
from .base import Base, TimestampMixin, UTCDateTime, utc_now
from .entities import Tag
from .enums import ContentType


class Collection(Base, TimestampMixin):
    """
    Named container of content items.

    Attributes:
        id: Primary key
        name: Display name
        description: Optional blurb
        cover_image: Image URL
        is_public: Visibility flag

    Relationships:
        items: One-to-many with CollectionItem, ordered by (order, id)
        tags: Many-to-many with Tag
    """

    __tablename__ = "collections"
    __table_args__ = (CheckConstraint("name != ''", name="ck_collection_non_empty_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500))
    cover_image: Mapped[Optional[str]] = mapped_column(String)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    items: Mapped[List["CollectionItem"]] = relationship(
        "CollectionItem",
        back_populates="collection",
        cascade="all, delete-orphan",
        order_by=lambda: [CollectionItem.order, CollectionItem.id],
    )
    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=collection_tags, back_populates="collections"
    )

    @property
    def item_count(self) -> int:
        """Number of items in this collection."""
        return len(self.items)

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name='{self.name}')>"


class CollectionItem(Base):
    """
    One piece of content placed in a collection.

    Attributes:
        id: Primary key (insertion order breaks ties on ``order``)
        collection_id: Owning collection
        content_type: Which table content_id refers to
        content_id: Id of the referenced row
        order: Display position, not necessarily contiguous or unique
        note: Curator's remark for this placement
    """

    __tablename__ = "collection_items"
    __table_args__ = (
        UniqueConstraint(
            "collection_id", "content_type", "content_id",
            name="uq_collection_item_content",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    collection_id: Mapped[int] = mapped_column(
        ForeignKey("collections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content_type: Mapped[ContentType] = mapped_column(SQLEnum(ContentType), nullable=False)
    content_id: Mapped[int] = mapped_column(Integer, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    note: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utc_now, nullable=False
    )

    collection: Mapped[Collection] = relationship(Collection, back_populates="items")

    def __repr__(self) -> str:
        return (
            f"<CollectionItem(id={self.id}, collection_id={self.collection_id}, "
            f"{self.content_type.value}:{self.content_id}, order={self.order})>"
        )
