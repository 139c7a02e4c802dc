#!/usr/bin/env python3
"""
collection_manager.py
--------------------
Manages Collections and their polymorphic, ordered items.

A collection item references its content by ``(content_type, content_id)``.
The reference is validated through ContentResolver when the item is
added; on read, an item whose content has since disappeared is returned
with an empty projection instead of failing the whole collection.

Item order:
    - ``order`` decides display position; ties fall back to insertion order
    - a new item without an explicit order goes after the current maximum
    - removing an item never renumbers the others

Usage:
    collections = CollectionManager(session, logger)

    c = collections.create({"name": "Stoic reading"})
    collections.add_item({"collectionId": c.id, "contentType": "BOOK", "contentId": 3})
    for item, content in collections.resolved_items(c):
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional, Tuple, Union

# --- Third party imports ---
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

# --- Local imports ---
from attic.core.exceptions import ConflictError, MissingReferenceError, NotFoundError
from attic.core.logging_manager import safe_logger
from attic.database.content_resolver import ContentRef, ContentResolver
from attic.database.decorators import handle_db_errors, log_database_operation
from attic.database.models import Collection, CollectionItem, ContentType
from attic.schemas.collections import (
    AddItemInput,
    CollectionListInput,
    CreateCollectionInput,
    ReorderItemsInput,
    UpdateCollectionInput,
)
from attic.schemas.common import TagSlugInput
from attic.schemas.content import ContentSummary
from .base_manager import BaseManager, Page

SEARCH_FIELDS = ("name", "description")

SORT_COLUMNS = {
    "name": Collection.name,
    "createdAt": Collection.created_at,
    "updatedAt": Collection.updated_at,
}


class CollectionManager(BaseManager):
    """Manages Collection and CollectionItem table operations."""

    content_type = ContentType.COLLECTION

    @property
    def resolver(self) -> ContentResolver:
        return ContentResolver(self.session, self.logger)

    def _collection_query(self):
        return self.session.query(Collection).options(
            selectinload(Collection.tags), selectinload(Collection.items)
        )

    def _require_collection(self, collection_id: int) -> Collection:
        return self._require(
            Collection, collection_id,
            kind="COLLECTION_NOT_FOUND", message="Collection not found",
        )

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_collection")
    def create(self, data: Union[CreateCollectionInput, Dict[str, Any]]) -> Collection:
        data = self._coerce(CreateCollectionInput, data)
        collection = Collection(**data.model_dump(exclude={"tag_ids"}))
        self._set_tags(collection, data.tag_ids)
        self.session.add(collection)
        self.session.flush()
        return collection

    @handle_db_errors
    @log_database_operation("get_collection")
    def get(self, collection_id: int) -> Optional[Collection]:
        return self._get_by_id(Collection, collection_id)

    def resolved_items(
        self, collection: Collection
    ) -> List[Tuple[CollectionItem, Optional[ContentSummary]]]:
        """
        Pair each item of ``collection`` with its content projection.

        Items come in display order. Dangling references pair with None.
        """
        resolver = self.resolver
        return [(item, resolver.resolve(ContentRef.of(item))) for item in collection.items]

    @handle_db_errors
    @log_database_operation("list_collections")
    def list(
        self, params: Union[CollectionListInput, Dict[str, Any], None] = None
    ) -> Page[Collection]:
        """
        List collections with filtering, sorting and pagination.

        Args:
            params: CollectionListInput or mapping (page, limit, isPublic,
                tagId, search, sortBy, sortOrder)
        """
        params = self._coerce(CollectionListInput, params or {})
        query = self._filter(
            self._collection_query(),
            Collection.is_public == params.is_public if params.is_public is not None else None,
            self._tagged_with(Collection, params.tag_id),
            self._search(Collection, SEARCH_FIELDS, params.search),
        )
        query = self._order(
            query, Collection, SORT_COLUMNS[params.sort_by], params.sort_order
        )
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("list_collections_by_tag")
    def list_by_tag(self, params: Union[TagSlugInput, Dict[str, Any]]) -> Page[Collection]:
        params = self._coerce(TagSlugInput, params)
        tag = self._tag_by_slug(params.tag_slug)
        if tag is None:
            return Page(page=params.page, limit=params.limit)

        query = self._collection_query().filter(self._tagged_with(Collection, tag.id))
        query = self._order(query, Collection, Collection.updated_at, "desc")
        return self._paginate(query, params.page, params.limit)

    @handle_db_errors
    @log_database_operation("update_collection")
    def update(self, data: Union[UpdateCollectionInput, Dict[str, Any]]) -> Collection:
        """
        Update collection fields.

        Raises:
            NotFoundError: NOT_FOUND if the collection does not exist
        """
        data = self._coerce(UpdateCollectionInput, data)
        collection = self._require(Collection, data.id, message="Collection not found")
        updates = data.model_dump(exclude_unset=True, exclude={"id", "tag_ids"})
        self._assign_fields(collection, updates, required=("name", "is_public"))
        self._set_tags(collection, data.tag_ids)
        self.session.flush()
        return collection

    @handle_db_errors
    @log_database_operation("delete_collection")
    def delete(self, collection_id: int) -> None:
        """
        Delete a collection with its own items.

        Items of other collections that point at this one are removed too.

        Raises:
            NotFoundError: NOT_FOUND if the collection does not exist
        """
        collection = self._require(Collection, collection_id, message="Collection not found")
        self._delete_content(collection)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def _next_order(self, collection_id: int) -> int:
        current = self.session.execute(
            select(func.max(CollectionItem.order)).where(
                CollectionItem.collection_id == collection_id
            )
        ).scalar()
        return 1 if current is None else current + 1

    @handle_db_errors
    @log_database_operation("add_collection_item")
    def add_item(self, data: Union[AddItemInput, Dict[str, Any]]) -> CollectionItem:
        """
        Place a piece of content in a collection.

        Args:
            data: AddItemInput or mapping (collectionId, contentType,
                contentId, note?, order?)

        Returns:
            Created CollectionItem

        Raises:
            NotFoundError: COLLECTION_NOT_FOUND
            MissingReferenceError: CONTENT_NOT_FOUND if the target row is absent
            ConflictError: ITEM_EXISTS if the content is already in the collection
        """
        data = self._coerce(AddItemInput, data)
        collection = self._require_collection(data.collection_id)

        ref = ContentRef(data.content_type, data.content_id)
        if self.resolver.resolve(ref) is None:
            raise MissingReferenceError("CONTENT_NOT_FOUND", "Content not found")

        duplicate = (
            self.session.query(CollectionItem)
            .filter_by(
                collection_id=collection.id,
                content_type=ref.content_type,
                content_id=ref.content_id,
            )
            .first()
        )
        if duplicate is not None:
            raise ConflictError("ITEM_EXISTS", "Item already exists in collection")

        order = data.order if data.order is not None else self._next_order(collection.id)
        item = CollectionItem(
            collection=collection,
            content_type=ref.content_type,
            content_id=ref.content_id,
            note=data.note,
            order=order,
        )
        self.session.add(item)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Added {ref} to collection {collection.id}",
            {"item_id": item.id, "order": order},
        )
        return item

    @handle_db_errors
    @log_database_operation("remove_collection_item")
    def remove_item(self, item_id: int) -> None:
        """
        Remove one item; the remaining items keep their order values.

        Raises:
            NotFoundError: NOT_FOUND if no item has this id
        """
        item = self._require(
            CollectionItem, item_id, message="Item not found in collection"
        )
        collection = item.collection
        self.session.delete(item)
        self.session.flush()
        self.session.expire(collection, ["items"])

    @handle_db_errors
    @log_database_operation("reorder_collection_items")
    def reorder_items(self, data: Union[ReorderItemsInput, Dict[str, Any]]) -> None:
        """
        Assign new order values to items of one collection.

        Every item id must belong to the collection; the whole request is
        rejected before any write otherwise. Duplicate order values are
        allowed and fall back to insertion order.

        Raises:
            NotFoundError: COLLECTION_NOT_FOUND, or ITEM_NOT_IN_COLLECTION
                if an item id is unknown or belongs to another collection
        """
        data = self._coerce(ReorderItemsInput, data)
        collection = self._require_collection(data.collection_id)

        requested = {entry.item_id for entry in data.items}
        owned = {
            item.id: item
            for item in self.session.query(CollectionItem).filter(
                CollectionItem.collection_id == collection.id,
                CollectionItem.id.in_(requested),
            )
        }
        foreign = sorted(requested - owned.keys())
        if foreign:
            raise NotFoundError(
                "ITEM_NOT_IN_COLLECTION",
                f"Item not found in collection: {', '.join(map(str, foreign))}",
            )

        for entry in data.items:
            owned[entry.item_id].order = entry.order
        self.session.flush()
        self.session.expire(collection, ["items"])
