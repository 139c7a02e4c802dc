"""
Entity Models
--------------

Models for the tag registry and the four tagged content kinds.

Models:
    - Tag: Named, colored label shared across every content kind
    - Essay: Long-form writing addressed by slug
    - Book: Reading-list entry with progress tracking and highlights
    - Quote: Excerpt, optionally linked to a Book
    - Note: Short-form writing
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import (
    JSON,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from attic.utils.slugify import content_preview
from .associations import book_tags, collection_tags, essay_tags, note_tags, quote_tags
from .base import Base, TimestampMixin, UTCDateTime, utc_now
from .enums import BookStatus, PublishStatus

if TYPE_CHECKING:
    from .collections import Collection

DEFAULT_TAG_COLOR = "#6366f1"


class Tag(Base):
    """
    Label applied to essays, books, quotes, notes and collections.

    Attributes:
        id: Primary key
        name: Display name (unique, case-sensitive)
        slug: URL identifier derived from name (unique)
        color: Hex color like ``#6366f1``
        created_at: Creation timestamp

    Relationships:
        essays, books, quotes, notes, collections: Many-to-many via join tables
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="ck_tag_non_empty_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    color: Mapped[Optional[str]] = mapped_column(String(7), default=DEFAULT_TAG_COLOR)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utc_now, nullable=False
    )

    essays: Mapped[List["Essay"]] = relationship(
        "Essay", secondary=essay_tags, back_populates="tags"
    )
    books: Mapped[List["Book"]] = relationship(
        "Book", secondary=book_tags, back_populates="tags"
    )
    quotes: Mapped[List["Quote"]] = relationship(
        "Quote", secondary=quote_tags, back_populates="tags"
    )
    notes: Mapped[List["Note"]] = relationship(
        "Note", secondary=note_tags, back_populates="tags"
    )
    collections: Mapped[List["Collection"]] = relationship(
        "Collection", secondary=collection_tags, back_populates="tags"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}', slug='{self.slug}')>"


class Essay(Base, TimestampMixin):
    """
    Long-form piece of writing.

    Attributes:
        id: Primary key
        slug: URL identifier derived from title (unique, at most 50 chars)
        title, subtitle, content, excerpt: Text fields
        read_time: Estimated minutes to read
        cover_image: Image URL
        status: DRAFT or PUBLISHED
        published_at: Publication timestamp
    """

    __tablename__ = "essays"
    __table_args__ = (CheckConstraint("title != ''", name="ck_essay_non_empty_title"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subtitle: Mapped[Optional[str]] = mapped_column(String(500))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(String(500))
    read_time: Mapped[Optional[int]] = mapped_column(Integer)
    cover_image: Mapped[Optional[str]] = mapped_column(String)
    status: Mapped[PublishStatus] = mapped_column(
        SQLEnum(PublishStatus), default=PublishStatus.PUBLISHED, nullable=False
    )
    published_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=utc_now, nullable=False
    )

    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=essay_tags, back_populates="essays"
    )

    def __repr__(self) -> str:
        return f"<Essay(id={self.id}, slug='{self.slug}')>"


class Book(Base, TimestampMixin):
    """
    Book on the reading list.

    Progress and status are kept consistent by BookManager.update_progress:
    progress 0 means WANT_TO_READ, 1-99 CURRENTLY_READING, 100 READ, while
    DNF is only set explicitly.

    Attributes:
        id: Primary key
        title, author: Required text
        isbn: Unique when present
        pages, published_year: Optional integers
        language: ISO code, defaults to "en"
        status: BookStatus
        progress: Percentage read, 0-100
        rating: 1-5 or None
        started_at: First time progress became positive
        finished_at: Time progress reached 100 (cleared on reopening)
        highlights: Ordered JSON list of {id, text, page, note, createdAt}
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_book_progress_range"),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_book_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    author: Mapped[str] = mapped_column(String(100), nullable=False)
    isbn: Mapped[Optional[str]] = mapped_column(String, unique=True)
    cover_image: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    pages: Mapped[Optional[int]] = mapped_column(Integer)
    published_year: Mapped[Optional[int]] = mapped_column(Integer)
    language: Mapped[str] = mapped_column(String(10), default="en", nullable=False)
    status: Mapped[BookStatus] = mapped_column(
        SQLEnum(BookStatus), default=BookStatus.WANT_TO_READ, nullable=False, index=True
    )
    progress: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[Optional[int]] = mapped_column(Integer)
    started_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime)
    finished_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    highlights: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)

    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=book_tags, back_populates="books"
    )
    quotes: Mapped[List["Quote"]] = relationship("Quote", back_populates="book")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', status={self.status.value})>"


class Quote(Base, TimestampMixin):
    """
    Excerpt worth keeping, optionally tied to a book.

    Attributes:
        id: Primary key
        content: Quoted text
        author, source, context: Attribution details
        page: Page number in the source
        book_id: Optional FK to Book (SET NULL when the book is deleted)
    """

    __tablename__ = "quotes"
    __table_args__ = (CheckConstraint("content != ''", name="ck_quote_non_empty_content"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(String(2000), nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(100))
    source: Mapped[Optional[str]] = mapped_column(String(200))
    context: Mapped[Optional[str]] = mapped_column(String(1000))
    page: Mapped[Optional[int]] = mapped_column(Integer)
    book_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("books.id", ondelete="SET NULL"), index=True
    )

    book: Mapped[Optional[Book]] = relationship(Book, back_populates="quotes")
    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=quote_tags, back_populates="quotes"
    )

    def __repr__(self) -> str:
        return f"<Quote(id={self.id}, book_id={self.book_id})>"


class Note(Base, TimestampMixin):
    """Short note; title is optional."""

    __tablename__ = "notes"
    __table_args__ = (CheckConstraint("content != ''", name="ck_note_non_empty_content"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[PublishStatus] = mapped_column(
        SQLEnum(PublishStatus), default=PublishStatus.DRAFT, nullable=False
    )

    tags: Mapped[List[Tag]] = relationship(
        Tag, secondary=note_tags, back_populates="notes"
    )

    @property
    def content_preview(self) -> str:
        """Shortened content for list views."""
        return content_preview(self.content)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
