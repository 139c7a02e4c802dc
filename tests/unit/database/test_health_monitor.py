"""Tests for orphaned collection item detection."""
import pytest
from unittest.mock import MagicMock

from attic.core.logging_manager import AtticLogger
from attic.database.health_monitor import HealthMonitor
from attic.database.models import CollectionItem, ContentType


@pytest.fixture
def collection_with_orphans(collection_manager, note_manager, db_session):
    collection = collection_manager.create({"name": "Box"})
    note = note_manager.create({"content": "still here"})
    collection_manager.add_item(
        {"collectionId": collection.id, "contentType": "NOTE", "contentId": note.id}
    )
    db_session.add_all(
        [
            CollectionItem(collection=collection, content_type=ContentType.BOOK, content_id=404),
            CollectionItem(collection=collection, content_type=ContentType.NOTE, content_id=405),
        ]
    )
    db_session.flush()
    return collection


class TestHealthMonitor:
    """Tests for find_orphaned_items() and prune_orphaned_items()."""

    def test_clean_store(self, health):
        assert health.find_orphaned_items() == []
        assert health.prune_orphaned_items() == {"dry_run": True, "orphaned_items": []}

    def test_finds_orphans(self, health, collection_with_orphans):
        orphans = health.find_orphaned_items()

        assert [(o.content_type, o.content_id) for o in orphans] == [
            (ContentType.BOOK, 404),
            (ContentType.NOTE, 405),
        ]

    def test_dry_run_keeps_rows(self, health, collection_with_orphans, db_session):
        report = health.prune_orphaned_items(dry_run=True)

        assert report["dry_run"] is True
        assert [row["content_id"] for row in report["orphaned_items"]] == [404, 405]
        assert report["orphaned_items"][0]["content_type"] == "BOOK"
        assert db_session.query(CollectionItem).count() == 3

    def test_prune_deletes_only_orphans(self, health, collection_with_orphans, db_session):
        report = health.prune_orphaned_items(dry_run=False)

        assert len(report["orphaned_items"]) == 2
        assert [item.content_id for item in collection_with_orphans.items] == [1]
        assert db_session.query(CollectionItem).count() == 1

    def test_prune_logs_warning(self, db_session, collection_with_orphans):
        logger = MagicMock(spec=AtticLogger)

        HealthMonitor(db_session, logger).prune_orphaned_items(dry_run=False)

        logger.log_warning.assert_called_once()
        assert "Pruned 2" in logger.log_warning.call_args[0][0]
