"""
Association Tables
-------------------

Tag join tables for the Attic database.

Each content kind has its own table mapping one content row to one tag.
The composite primary key makes a (content, tag) pair unique, and both
foreign keys cascade so deleting either side removes the join row.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base


def _tag_join_table(name: str, content_table: str) -> Table:
    """Build a (content_id, tag_id) join table for one content kind."""
    return Table(
        name,
        Base.metadata,
        Column(
            "content_id",
            Integer,
            ForeignKey(f"{content_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            "tag_id",
            Integer,
            ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )


essay_tags = _tag_join_table("essay_tags", "essays")
book_tags = _tag_join_table("book_tags", "books")
quote_tags = _tag_join_table("quote_tags", "quotes")
note_tags = _tag_join_table("note_tags", "notes")
collection_tags = _tag_join_table("collection_tags", "collections")

# Usage-breakdown key -> join table, in display order
TAG_JOIN_TABLES = {
    "essays": essay_tags,
    "books": book_tags,
    "quotes": quote_tags,
    "notes": note_tags,
    "collections": collection_tags,
}
