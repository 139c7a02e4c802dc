#!/usr/bin/env python3
"""
procedures.py
--------------------
Typed procedure registry.

Every operation of the content API is registered here under
``<namespace>.<name>`` (``book.updateReadingProgress``) together with its
input schema, output schema and the closed set of error kinds it may
raise. Handlers receive the AtticDB, already inside a session scope, and
the validated input; they return ORM objects or plain data which the
router validates against the output schema.

Namespaces:
    tag, essay, book, quote, note, collection

Usage:
    from attic.api.procedures import ROUTER

    procedure = ROUTER["tag.mergeTags"]
    procedure.errors   # frozenset({"SOURCE_NOT_FOUND", "TARGET_NOT_FOUND", "SAME_TAG"})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Type

# --- Third party imports ---
import pydantic
from pydantic import BaseModel, TypeAdapter

# --- Local imports ---
from attic.core.exceptions import NotFoundError, ValidationError
from attic.database.content_resolver import ContentRef
from attic.database.managers import Page
from attic.database.models import Collection, Tag
from attic.database.query_analytics import empty_usage
from attic.schemas import (
    AddHighlightInput,
    AddItemInput,
    AddItemOut,
    BookListInput,
    BookListOut,
    BookOut,
    BulkUpdateNotesInput,
    BulkUpdateNotesOut,
    CollectionItemOut,
    CollectionListInput,
    CollectionListOut,
    CollectionOut,
    CollectionSummaryOut,
    CreateBookInput,
    CreateCollectionInput,
    CreateEssayInput,
    CreateNoteInput,
    CreateQuoteInput,
    CreateTagInput,
    EssayIdentifierInput,
    EssayListInput,
    EssayListOut,
    EssayOut,
    GetCollectionInput,
    IdInput,
    ItemCount,
    MergeTagsInput,
    MergeTagsOut,
    NoteListInput,
    NoteListOut,
    NoteOut,
    QuoteListInput,
    QuoteListOut,
    QuoteOut,
    QuotesByBookInput,
    RandomQuoteInput,
    ReadingProgressInput,
    ReadingStatsInput,
    ReadingStatsOut,
    RemoveItemInput,
    ReorderItemsInput,
    SuccessOut,
    TagIdentifierInput,
    TagLimitInput,
    TagListInput,
    TagListOut,
    TagOut,
    TagSlugInput,
    TagUsageInput,
    TagUsageOut,
    ToggleNoteStatusInput,
    UpdateBookInput,
    UpdateCollectionInput,
    UpdateEssayInput,
    UpdateNoteInput,
    UpdateQuoteInput,
    UpdateTagInput,
)
from attic.schemas.common import counts_from, describe_errors

#: Error kind every procedure may raise for malformed input
VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass
class Procedure:
    """
    One registered API operation.

    Attributes:
        name: Fully qualified name, ``<namespace>.<operation>``
        input_model: pydantic model validating the payload
        output_model: Type the result is validated against; may be
            ``Optional[...]`` or ``List[...]``
        errors: Declared error kinds, VALIDATION_ERROR included
        handler: ``handler(db, params)`` run inside a session scope
    """

    name: str
    input_model: Type[BaseModel]
    output_model: Any
    errors: FrozenSet[str]
    handler: Callable[[Any, Any], Any]
    adapter: TypeAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.adapter = TypeAdapter(self.output_model)

    @property
    def namespace(self) -> str:
        return self.name.split(".", 1)[0]

    def parse(self, payload: Optional[Dict[str, Any]]) -> BaseModel:
        """
        Validate a raw payload.

        Raises:
            ValidationError: If the payload does not satisfy ``input_model``
        """
        try:
            return self.input_model.model_validate(payload or {})
        except pydantic.ValidationError as e:
            raise ValidationError(message=describe_errors(e)) from e

    def render(self, result: Any) -> Any:
        """Validate a handler result and dump it to JSON-ready data."""
        value = self.adapter.validate_python(result, from_attributes=True)
        return self.adapter.dump_python(value, mode="json", by_alias=True)


ROUTER: Dict[str, Procedure] = {}


def procedure(
    name: str,
    input_model: Type[BaseModel],
    output_model: Any,
    errors: Iterable[str] = (),
) -> Callable:
    """Register the decorated handler under ``name``."""

    def register(handler: Callable) -> Callable:
        if name in ROUTER:
            raise ValueError(f"Procedure registered twice: {name}")
        ROUTER[name] = Procedure(
            name=name,
            input_model=input_model,
            output_model=output_model,
            errors=frozenset({VALIDATION_ERROR, *errors}),
            handler=handler,
        )
        return handler

    return register


def get_procedure(name: str) -> Procedure:
    """
    Look up a procedure by its qualified name.

    Raises:
        NotFoundError: PROCEDURE_NOT_FOUND for unknown names
    """
    try:
        return ROUTER[name]
    except KeyError:
        raise NotFoundError("PROCEDURE_NOT_FOUND", f"Unknown procedure: {name}") from None


# ----- Output helpers -----


def _page(key: str, page: Page, items: Optional[List[Any]] = None) -> Dict[str, Any]:
    return {
        key: page.items if items is None else items,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "total_pages": page.total_pages,
    }


def _deleted(kind: str) -> Dict[str, Any]:
    return {"success": True, "message": f"{kind} deleted successfully"}


def _tags_with_counts(db, tags: List[Tag]) -> List[TagOut]:
    usage = db.analytics.get_usage_counts([tag.id for tag in tags])
    return [
        TagOut.model_validate(tag).model_copy(
            update={"counts": counts_from(usage.get(tag.id, empty_usage()))}
        )
        for tag in tags
    ]


def _usage_out(row: Dict[str, Any]) -> TagUsageOut:
    return TagUsageOut(
        tag=TagOut.model_validate(row["tag"]).model_copy(
            update={"counts": counts_from(row["usage_breakdown"])}
        ),
        total_usage=row["total_usage"],
        usage_breakdown=counts_from(row["usage_breakdown"]),
    )


def _collection_summary(collection: Collection) -> CollectionSummaryOut:
    return CollectionSummaryOut.model_validate(collection).model_copy(
        update={"counts": ItemCount(items=collection.item_count)}
    )


def _collection_out(db, collection: Collection, include_items: bool = True) -> CollectionOut:
    items = []
    if include_items:
        items = [
            CollectionItemOut.model_validate(item).model_copy(update={"content": content})
            for item, content in db.collections.resolved_items(collection)
        ]
    return CollectionOut.model_validate(collection).model_copy(
        update={"counts": ItemCount(items=collection.item_count), "items": items}
    )


# -------------------------------------------------------------------------
# tag
# -------------------------------------------------------------------------


@procedure("tag.createTag", CreateTagInput, TagOut, errors=["NAME_EXISTS"])
def create_tag(db, params: CreateTagInput):
    return _tags_with_counts(db, [db.tags.create(params)])[0]


@procedure("tag.getTag", TagIdentifierInput, Optional[TagOut])
def get_tag(db, params: TagIdentifierInput):
    tag = db.tags.get(params.identifier)
    return _tags_with_counts(db, [tag])[0] if tag else None


@procedure("tag.getTags", TagListInput, TagListOut)
def get_tags(db, params: TagListInput):
    page = db.tags.list(params)
    return _page("tags", page, _tags_with_counts(db, page.items))


@procedure("tag.updateTag", UpdateTagInput, TagOut, errors=["NOT_FOUND", "NAME_EXISTS"])
def update_tag(db, params: UpdateTagInput):
    return _tags_with_counts(db, [db.tags.update(params)])[0]


@procedure("tag.deleteTag", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_tag(db, params: IdInput):
    db.tags.delete(params.id)
    return _deleted("Tag")


@procedure("tag.getTagUsage", TagUsageInput, Optional[TagUsageOut])
def get_tag_usage(db, params: TagUsageInput):
    row = db.analytics.get_tag_usage(params.tag_id)
    return _usage_out(row) if row else None


@procedure("tag.getMostUsedTags", TagLimitInput, List[TagUsageOut])
def get_most_used_tags(db, params: TagLimitInput):
    return [_usage_out(row) for row in db.analytics.get_most_used_tags(params.limit)]


@procedure("tag.getUnusedTags", TagLimitInput, List[TagOut])
def get_unused_tags(db, params: TagLimitInput):
    return _tags_with_counts(db, db.analytics.get_unused_tags(params.limit))


@procedure(
    "tag.mergeTags",
    MergeTagsInput,
    MergeTagsOut,
    errors=["SOURCE_NOT_FOUND", "TARGET_NOT_FOUND", "SAME_TAG"],
)
def merge_tags(db, params: MergeTagsInput):
    result = db.tags.merge(params.source_tag_id, params.target_tag_id)
    return {
        "success": True,
        "message": f'Successfully merged "{result["source"]}" into "{result["target"]}"',
        "merged_count": result["merged_count"],
    }


# -------------------------------------------------------------------------
# essay
# -------------------------------------------------------------------------


@procedure("essay.createEssay", CreateEssayInput, EssayOut, errors=["SLUG_EXISTS", "TAG_NOT_FOUND"])
def create_essay(db, params: CreateEssayInput):
    return db.essays.create(params)


@procedure("essay.getEssay", EssayIdentifierInput, Optional[EssayOut])
def get_essay(db, params: EssayIdentifierInput):
    return db.essays.get(params.identifier)


@procedure("essay.getEssays", EssayListInput, EssayListOut)
def get_essays(db, params: EssayListInput):
    return _page("essays", db.essays.list(params))


@procedure(
    "essay.updateEssay",
    UpdateEssayInput,
    EssayOut,
    errors=["NOT_FOUND", "SLUG_EXISTS", "TAG_NOT_FOUND"],
)
def update_essay(db, params: UpdateEssayInput):
    return db.essays.update(params)


@procedure("essay.deleteEssay", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_essay(db, params: IdInput):
    db.essays.delete(params.id)
    return _deleted("Essay")


@procedure("essay.getEssaysByTag", TagSlugInput, EssayListOut)
def get_essays_by_tag(db, params: TagSlugInput):
    return _page("essays", db.essays.list_by_tag(params))


# -------------------------------------------------------------------------
# book
# -------------------------------------------------------------------------


@procedure("book.createBook", CreateBookInput, BookOut, errors=["ISBN_EXISTS", "TAG_NOT_FOUND"])
def create_book(db, params: CreateBookInput):
    return db.books.create(params)


@procedure("book.getBook", IdInput, Optional[BookOut])
def get_book(db, params: IdInput):
    return db.books.get(params.id)


@procedure("book.getBooks", BookListInput, BookListOut)
def get_books(db, params: BookListInput):
    return _page("books", db.books.list(params))


@procedure(
    "book.updateBook",
    UpdateBookInput,
    BookOut,
    errors=["NOT_FOUND", "ISBN_EXISTS", "TAG_NOT_FOUND"],
)
def update_book(db, params: UpdateBookInput):
    return db.books.update(params)


@procedure("book.updateReadingProgress", ReadingProgressInput, BookOut, errors=["NOT_FOUND"])
def update_reading_progress(db, params: ReadingProgressInput):
    return db.books.update_progress(params)


@procedure("book.addHighlight", AddHighlightInput, BookOut, errors=["NOT_FOUND"])
def add_highlight(db, params: AddHighlightInput):
    return db.books.add_highlight(params)


@procedure("book.getReadingStats", ReadingStatsInput, ReadingStatsOut)
def get_reading_stats(db, params: ReadingStatsInput):
    return db.analytics.get_reading_stats(year=params.year)


@procedure("book.deleteBook", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_book(db, params: IdInput):
    db.books.delete(params.id)
    return _deleted("Book")


# -------------------------------------------------------------------------
# quote
# -------------------------------------------------------------------------


@procedure("quote.createQuote", CreateQuoteInput, QuoteOut, errors=["BOOK_NOT_FOUND", "TAG_NOT_FOUND"])
def create_quote(db, params: CreateQuoteInput):
    return db.quotes.create(params)


@procedure("quote.getQuote", IdInput, Optional[QuoteOut])
def get_quote(db, params: IdInput):
    return db.quotes.get(params.id)


@procedure("quote.getQuotes", QuoteListInput, QuoteListOut)
def get_quotes(db, params: QuoteListInput):
    return _page("quotes", db.quotes.list(params))


@procedure(
    "quote.updateQuote",
    UpdateQuoteInput,
    QuoteOut,
    errors=["NOT_FOUND", "BOOK_NOT_FOUND", "TAG_NOT_FOUND"],
)
def update_quote(db, params: UpdateQuoteInput):
    return db.quotes.update(params)


@procedure("quote.deleteQuote", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_quote(db, params: IdInput):
    db.quotes.delete(params.id)
    return _deleted("Quote")


@procedure("quote.getQuotesByBook", QuotesByBookInput, QuoteListOut)
def get_quotes_by_book(db, params: QuotesByBookInput):
    return _page("quotes", db.quotes.list_by_book(params))


@procedure("quote.getQuotesByTag", TagSlugInput, QuoteListOut)
def get_quotes_by_tag(db, params: TagSlugInput):
    return _page("quotes", db.quotes.list_by_tag(params))


@procedure("quote.getRandomQuote", RandomQuoteInput, Optional[QuoteOut])
def get_random_quote(db, params: RandomQuoteInput):
    return db.quotes.random(params.tag_id)


# -------------------------------------------------------------------------
# note
# -------------------------------------------------------------------------


@procedure("note.createNote", CreateNoteInput, NoteOut, errors=["TAG_NOT_FOUND"])
def create_note(db, params: CreateNoteInput):
    return db.notes.create(params)


@procedure("note.getNote", IdInput, Optional[NoteOut])
def get_note(db, params: IdInput):
    return db.notes.get(params.id)


@procedure("note.getNotes", NoteListInput, NoteListOut)
def get_notes(db, params: NoteListInput):
    return _page("notes", db.notes.list(params))


@procedure("note.updateNote", UpdateNoteInput, NoteOut, errors=["NOT_FOUND", "TAG_NOT_FOUND"])
def update_note(db, params: UpdateNoteInput):
    return db.notes.update(params)


@procedure("note.deleteNote", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_note(db, params: IdInput):
    db.notes.delete(params.id)
    return _deleted("Note")


@procedure("note.getNotesByTag", TagSlugInput, NoteListOut)
def get_notes_by_tag(db, params: TagSlugInput):
    return _page("notes", db.notes.list_by_tag(params))


@procedure("note.toggleNoteStatus", ToggleNoteStatusInput, NoteOut, errors=["NOT_FOUND"])
def toggle_note_status(db, params: ToggleNoteStatusInput):
    return db.notes.toggle_status(params)


@procedure("note.bulkUpdateNotes", BulkUpdateNotesInput, BulkUpdateNotesOut, errors=["TAG_NOT_FOUND"])
def bulk_update_notes(db, params: BulkUpdateNotesInput):
    return db.notes.bulk_update(params)


# -------------------------------------------------------------------------
# collection
# -------------------------------------------------------------------------


@procedure("collection.createCollection", CreateCollectionInput, CollectionOut, errors=["TAG_NOT_FOUND"])
def create_collection(db, params: CreateCollectionInput):
    return _collection_out(db, db.collections.create(params))


@procedure("collection.getCollection", GetCollectionInput, Optional[CollectionOut])
def get_collection(db, params: GetCollectionInput):
    collection = db.collections.get(params.id)
    if collection is None:
        return None
    return _collection_out(db, collection, include_items=params.include_items)


@procedure("collection.getCollections", CollectionListInput, CollectionListOut)
def get_collections(db, params: CollectionListInput):
    page = db.collections.list(params)
    return _page("collections", page, [_collection_summary(c) for c in page.items])


@procedure(
    "collection.updateCollection",
    UpdateCollectionInput,
    CollectionOut,
    errors=["NOT_FOUND", "TAG_NOT_FOUND"],
)
def update_collection(db, params: UpdateCollectionInput):
    return _collection_out(db, db.collections.update(params))


@procedure(
    "collection.addItemToCollection",
    AddItemInput,
    AddItemOut,
    errors=["COLLECTION_NOT_FOUND", "CONTENT_NOT_FOUND", "ITEM_EXISTS"],
)
def add_item_to_collection(db, params: AddItemInput):
    item = db.collections.add_item(params)
    content = db.resolver.resolve(ContentRef.of(item))
    return {
        "success": True,
        "message": "Item added to collection successfully",
        "item": CollectionItemOut.model_validate(item).model_copy(
            update={"content": content}
        ),
    }


@procedure("collection.removeItemFromCollection", RemoveItemInput, SuccessOut, errors=["NOT_FOUND"])
def remove_item_from_collection(db, params: RemoveItemInput):
    db.collections.remove_item(params.item_id)
    return {"success": True, "message": "Item removed from collection successfully"}


@procedure(
    "collection.reorderCollectionItems",
    ReorderItemsInput,
    SuccessOut,
    errors=["COLLECTION_NOT_FOUND", "ITEM_NOT_IN_COLLECTION"],
)
def reorder_collection_items(db, params: ReorderItemsInput):
    db.collections.reorder_items(params)
    return {"success": True, "message": "Items reordered successfully"}


@procedure("collection.deleteCollection", IdInput, SuccessOut, errors=["NOT_FOUND"])
def delete_collection(db, params: IdInput):
    db.collections.delete(params.id)
    return _deleted("Collection")


@procedure("collection.getCollectionsByTag", TagSlugInput, CollectionListOut)
def get_collections_by_tag(db, params: TagSlugInput):
    page = db.collections.list_by_tag(params)
    return _page("collections", page, [_collection_summary(c) for c in page.items])
