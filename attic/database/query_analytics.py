#!/usr/bin/env python3
"""
query_analytics.py
------------------
Aggregate queries over the content store.

Provides:
    - Reading statistics for the book list
    - Per-kind tag usage counts, most-used and unused tags

Tag usage is computed as a batch: one grouped count per join table (five
queries regardless of vocabulary size) merged in memory with the tag list.
Ranking then happens in Python over every tag, which is fine for a
personal vocabulary of a few thousand tags but is not meant for larger
ones.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.orm import Session

# --- Local imports ---
from attic.core.logging_manager import AtticLogger
from attic.database.models import TAG_JOIN_TABLES, Book, BookStatus, Tag, utc_now
from .decorators import handle_db_errors, log_database_operation

#: Usage breakdown keys, in display order
USAGE_KINDS = tuple(TAG_JOIN_TABLES)


def empty_usage() -> Dict[str, int]:
    return {kind: 0 for kind in USAGE_KINDS}


class QueryAnalytics:
    """
    Handles aggregate queries and statistics.

    Every result is recomputed from the tables on each call; nothing is
    cached between calls.
    """

    def __init__(self, session: Session, logger: Optional[AtticLogger] = None) -> None:
        """
        Initialize query analytics.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for query operations
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Reading statistics
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_reading_stats")
    def get_reading_stats(
        self, year: Optional[int] = None, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Compute reading statistics as of now.

        Args:
            year: Calendar year for ``booksThisYear`` (defaults to the current year)
            now: Reference time used to pick the default year

        Returns:
            Dictionary with keys total_books, books_read, currently_reading,
            want_to_read, pages_read, average_rating and books_this_year.
            ``average_rating`` is None when no READ book has a rating.
        """
        year = year or (now or utc_now()).year
        year_start = datetime(year, 1, 1, tzinfo=timezone.utc)
        next_year_start = datetime(year + 1, 1, 1, tzinfo=timezone.utc)

        def count_status(status: BookStatus) -> int:
            return self.session.query(Book).filter(Book.status == status).count()

        pages_read, average_rating = (
            self.session.query(func.sum(Book.pages), func.avg(Book.rating))
            .filter(Book.status == BookStatus.READ)
            .one()
        )

        books_this_year = (
            self.session.query(Book)
            .filter(Book.finished_at >= year_start, Book.finished_at < next_year_start)
            .count()
        )

        return {
            "total_books": self.session.query(Book).count(),
            "books_read": count_status(BookStatus.READ),
            "currently_reading": count_status(BookStatus.CURRENTLY_READING),
            "want_to_read": count_status(BookStatus.WANT_TO_READ),
            "pages_read": int(pages_read or 0),
            "average_rating": float(average_rating) if average_rating is not None else None,
            "books_this_year": books_this_year,
        }

    # -------------------------------------------------------------------------
    # Tag usage
    # -------------------------------------------------------------------------

    @handle_db_errors
    def get_usage_counts(
        self, tag_ids: Optional[Iterable[int]] = None
    ) -> Dict[int, Dict[str, int]]:
        """
        Count join rows per tag and content kind.

        Args:
            tag_ids: Restrict to these tags; None means every tag

        Returns:
            ``{tag_id: {"essays": n, "books": n, ...}}``. Tags without any
            join row are absent unless listed in ``tag_ids``.
        """
        wanted = list(tag_ids) if tag_ids is not None else None
        usage: Dict[int, Dict[str, int]] = {}
        if wanted is not None:
            if not wanted:
                return usage
            usage = {tag_id: empty_usage() for tag_id in wanted}

        for kind, table in TAG_JOIN_TABLES.items():
            stmt = select(table.c.tag_id, func.count()).group_by(table.c.tag_id)
            if wanted is not None:
                stmt = stmt.where(table.c.tag_id.in_(wanted))
            for tag_id, count in self.session.execute(stmt):
                usage.setdefault(tag_id, empty_usage())[kind] = count

        return usage

    def _usage_snapshot(self) -> List[Dict[str, Any]]:
        """Every tag with its usage breakdown and total."""
        usage = self.get_usage_counts()
        snapshot = []
        for tag in self.session.query(Tag).all():
            breakdown = usage.get(tag.id, empty_usage())
            snapshot.append(
                {
                    "tag": tag,
                    "total_usage": sum(breakdown.values()),
                    "usage_breakdown": breakdown,
                }
            )
        return snapshot

    @handle_db_errors
    @log_database_operation("get_tag_usage")
    def get_tag_usage(self, tag_id: int) -> Optional[Dict[str, Any]]:
        """
        Usage breakdown for one tag.

        Returns:
            ``{"tag", "total_usage", "usage_breakdown"}`` or None if the tag
            does not exist
        """
        tag = self.session.get(Tag, tag_id)
        if tag is None:
            return None
        breakdown = self.get_usage_counts([tag_id])[tag_id]
        return {
            "tag": tag,
            "total_usage": sum(breakdown.values()),
            "usage_breakdown": breakdown,
        }

    @handle_db_errors
    @log_database_operation("get_most_used_tags")
    def get_most_used_tags(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Tags with at least one use, most used first."""
        used = [row for row in self._usage_snapshot() if row["total_usage"] > 0]
        used.sort(key=lambda row: (-row["total_usage"], row["tag"].id))
        return used[:limit]

    @handle_db_errors
    @log_database_operation("get_unused_tags")
    def get_unused_tags(self, limit: int = 10) -> List[Tag]:
        """Tags attached to nothing, newest first."""
        unused = [row["tag"] for row in self._usage_snapshot() if row["total_usage"] == 0]
        unused.sort(key=lambda tag: (tag.created_at, tag.id), reverse=True)
        return unused[:limit]
