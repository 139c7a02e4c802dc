"""
Schemas Package
---------------

pydantic models for every procedure input and output, plus the summary
projections used for polymorphic collection content.

Usage:
    from attic.schemas import CreateBookInput, BookOut
"""
from .common import (
    AtticModel,
    IdInput,
    ListOut,
    PaginationInput,
    SuccessOut,
    TagCounts,
    TagRef,
    TagSlugInput,
)
from .content import (
    BookSummary,
    CollectionSummary,
    ContentSummary,
    EssaySummary,
    NoteSummary,
    QuoteSummary,
)
from .tags import (
    CreateTagInput,
    MergedCounts,
    MergeTagsInput,
    MergeTagsOut,
    TagIdentifierInput,
    TagLimitInput,
    TagListInput,
    TagListOut,
    TagOut,
    TagUsageInput,
    TagUsageOut,
    UpdateTagInput,
)
from .essays import (
    CreateEssayInput,
    EssayIdentifierInput,
    EssayListInput,
    EssayListOut,
    EssayOut,
    EssaySummaryOut,
    UpdateEssayInput,
)
from .books import (
    AddHighlightInput,
    BookListInput,
    BookListOut,
    BookOut,
    BookSummaryOut,
    CreateBookInput,
    HighlightInput,
    ReadingProgressInput,
    ReadingStatsInput,
    ReadingStatsOut,
    UpdateBookInput,
)
from .quotes import (
    CreateQuoteInput,
    QuoteListInput,
    QuoteListOut,
    QuoteOut,
    QuotesByBookInput,
    RandomQuoteInput,
    UpdateQuoteInput,
)
from .notes import (
    BulkUpdateNotesInput,
    BulkUpdateNotesOut,
    CreateNoteInput,
    NoteListInput,
    NoteListOut,
    NoteOut,
    NoteSummaryOut,
    ToggleNoteStatusInput,
    UpdateNoteInput,
)
from .collections import (
    AddItemInput,
    AddItemOut,
    CollectionItemOut,
    CollectionListInput,
    CollectionListOut,
    CollectionOut,
    CollectionSummaryOut,
    CreateCollectionInput,
    GetCollectionInput,
    ItemCount,
    ItemOrder,
    RemoveItemInput,
    ReorderItemsInput,
    UpdateCollectionInput,
)

__all__ = [
    # Common
    "AtticModel",
    "IdInput",
    "ListOut",
    "PaginationInput",
    "SuccessOut",
    "TagCounts",
    "TagRef",
    "TagSlugInput",
    # Content projections
    "BookSummary",
    "CollectionSummary",
    "ContentSummary",
    "EssaySummary",
    "NoteSummary",
    "QuoteSummary",
    # Tags
    "CreateTagInput",
    "MergedCounts",
    "MergeTagsInput",
    "MergeTagsOut",
    "TagIdentifierInput",
    "TagLimitInput",
    "TagListInput",
    "TagListOut",
    "TagOut",
    "TagUsageInput",
    "TagUsageOut",
    "UpdateTagInput",
    # Essays
    "CreateEssayInput",
    "EssayIdentifierInput",
    "EssayListInput",
    "EssayListOut",
    "EssayOut",
    "EssaySummaryOut",
    "UpdateEssayInput",
    # Books
    "AddHighlightInput",
    "BookListInput",
    "BookListOut",
    "BookOut",
    "BookSummaryOut",
    "CreateBookInput",
    "HighlightInput",
    "ReadingProgressInput",
    "ReadingStatsInput",
    "ReadingStatsOut",
    "UpdateBookInput",
    # Quotes
    "CreateQuoteInput",
    "QuoteListInput",
    "QuoteListOut",
    "QuoteOut",
    "QuotesByBookInput",
    "RandomQuoteInput",
    "UpdateQuoteInput",
    # Notes
    "BulkUpdateNotesInput",
    "BulkUpdateNotesOut",
    "CreateNoteInput",
    "NoteListInput",
    "NoteListOut",
    "NoteOut",
    "NoteSummaryOut",
    "ToggleNoteStatusInput",
    "UpdateNoteInput",
    # Collections
    "AddItemInput",
    "AddItemOut",
    "CollectionItemOut",
    "CollectionListInput",
    "CollectionListOut",
    "CollectionOut",
    "CollectionSummaryOut",
    "CreateCollectionInput",
    "GetCollectionInput",
    "ItemCount",
    "ItemOrder",
    "RemoveItemInput",
    "ReorderItemsInput",
    "UpdateCollectionInput",
]
