"""
Attic
=====

A personal content store ("a digital attic") for essays, books, quotes,
notes, tags and curated collections.

Main Components:
    - database: SQLAlchemy ORM, entity managers, content resolver and analytics
    - schemas: pydantic input/output models for every procedure
    - api: Typed procedure registry and the ``call`` dispatcher
    - core: Logging, exceptions, paths
    - utils: Slug and preview helpers

Primary Interfaces:
    - attic.database.manager.AtticDB: Main database interface
    - attic.api.router.call: Run a named procedure with a JSON payload
    - attic.database.cli: Command line interface

Example Usage:
    >>> from attic import AtticDB
    >>> from attic.api import call
    >>> db = AtticDB(":memory:")
    >>> db.initialize_schema()
    >>> call(db, "tag.createTag", {"name": "Philosophy"})["slug"]
    'philosophy'
"""

__version__ = "1.0.0"
__author__ = "Attic Project"

from attic.database.manager import AtticDB
from attic.core.paths import DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "AtticDB",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
