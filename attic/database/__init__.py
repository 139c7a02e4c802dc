#!/usr/bin/env python3
"""
Attic Database Package
----------------------
Database management for the Attic content store, with specialized
modules for:
- Core database operations and session handling
- Entity managers per content kind
- Polymorphic content resolution
- Query analytics (reading statistics, tag usage)
- Health monitoring (orphaned collection items)
- YAML fixture seeding
"""

from .manager import AtticDB
from attic.core.exceptions import (
    AtticError,
    ConflictError,
    DatabaseError,
    MissingReferenceError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from .content_resolver import ContentRef, ContentResolver
from .health_monitor import HealthMonitor
from .query_analytics import QueryAnalytics
from .decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)

__all__ = [
    # Main manager
    "AtticDB",
    # Exceptions
    "AtticError",
    "ConflictError",
    "DatabaseError",
    "MissingReferenceError",
    "NotFoundError",
    "PreconditionError",
    "ValidationError",
    # Core modules
    "ContentRef",
    "ContentResolver",
    "HealthMonitor",
    "QueryAnalytics",
    # Decorators
    "DatabaseOperation",
    "handle_db_errors",
    "log_database_operation",
]
