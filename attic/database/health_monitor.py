#!/usr/bin/env python3
"""
health_monitor.py
-----------------
Maintenance checks for the polymorphic collection references.

Collection items point at their content through ``(content_type,
content_id)``, which no foreign key can guard. Content deletes detach their
items in the same transaction, but rows written by other tools or older
data can still leave items pointing at nothing. This module finds and
removes those.

Usage:
    with db.session_scope():
        report = db.health.prune_orphaned_items(dry_run=True)
        print(report["orphaned_items"])

CLI Integration:
    attic prune-orphans --dry-run
    attic prune-orphans
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import select
from sqlalchemy.orm import Session

# --- Local imports ---
from attic.core.logging_manager import AtticLogger, safe_logger
from attic.database.models import CollectionItem
from .content_resolver import CONTENT_MODELS
from .decorators import handle_db_errors, log_database_operation


class HealthMonitor:
    """Detects and prunes collection items whose content no longer exists."""

    def __init__(self, session: Session, logger: Optional[AtticLogger] = None) -> None:
        """
        Initialize health monitor.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for health operations
        """
        self.session = session
        self.logger = logger

    @handle_db_errors
    @log_database_operation("find_orphaned_items")
    def find_orphaned_items(self) -> List[CollectionItem]:
        """
        Collection items whose target row is missing.

        One anti-join per content type, ordered by item id.
        """
        orphans: List[CollectionItem] = []
        for content_type, model in CONTENT_MODELS.items():
            existing = select(model.id)
            orphans.extend(
                self.session.query(CollectionItem)
                .filter(
                    CollectionItem.content_type == content_type,
                    CollectionItem.content_id.not_in(existing),
                )
                .all()
            )
        return sorted(orphans, key=lambda item: item.id)

    @handle_db_errors
    @log_database_operation("prune_orphaned_items")
    def prune_orphaned_items(self, dry_run: bool = True) -> Dict[str, Any]:
        """
        Report and optionally delete orphaned collection items.

        Args:
            dry_run: Only report when True

        Returns:
            ``{"dry_run": bool, "orphaned_items": [{id, collection_id,
            content_type, content_id}, ...]}``
        """
        orphans = self.find_orphaned_items()
        report = [
            {
                "id": item.id,
                "collection_id": item.collection_id,
                "content_type": item.content_type.value,
                "content_id": item.content_id,
            }
            for item in orphans
        ]

        if orphans and not dry_run:
            owners = {item.collection for item in orphans}
            for item in orphans:
                self.session.delete(item)
            self.session.flush()
            for owner in owners:
                self.session.expire(owner, ["items"])

        if orphans:
            safe_logger(self.logger).log_warning(
                f"{'Found' if dry_run else 'Pruned'} {len(orphans)} orphaned collection item(s)",
                {"dry_run": dry_run, "item_ids": [row["id"] for row in report]},
            )
        return {"dry_run": dry_run, "orphaned_items": report}
