#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Attic content store.

Provides the AtticDB class for interacting with the SQLite database.
Handles:
    - Initialization of the database engine and sessionmaker
    - Schema creation from the ORM models
    - Transactional session scopes with logging
    - Per-session entity managers, content resolver, analytics and
      health monitor

Key Features:
    - Transaction management with automatic rollback
    - Foreign keys enforced on every SQLite connection
    - In-memory stores (``":memory:"``) sharing one connection, for tests
    - Optional rotating-file logging

Usage:
    db = AtticDB("data/attic.db", log_dir="logs")
    with db.session_scope():
        tag = db.tags.create({"name": "Stoicism"})
        book = db.books.create({"title": "Meditations", "author": "Marcus Aurelius",
                                "tagIds": [tag.id]})

Notes
==============
- Manager properties are valid only inside ``session_scope`` and raise
  DatabaseError elsewhere
- Objects stay readable after commit (``expire_on_commit=False``)
- All datetime fields are UTC-aware
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

# --- Third party imports ---
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from attic.core.exceptions import DatabaseError
from attic.core.logging_manager import AtticLogger
from .content_resolver import ContentResolver
from .decorators import handle_db_errors, log_database_operation, log_failure
from .health_monitor import HealthMonitor
from .managers import (
    BookManager,
    CollectionManager,
    EssayManager,
    NoteManager,
    QuoteManager,
    TagManager,
)
from .models import Base
from .query_analytics import QueryAnalytics

MEMORY = ":memory:"

#: Session-bound helpers exposed as properties, keyed by property name
SESSION_COMPONENTS = {
    "tags": TagManager,
    "essays": EssayManager,
    "books": BookManager,
    "quotes": QuoteManager,
    "notes": NoteManager,
    "collections": CollectionManager,
    "resolver": ContentResolver,
    "analytics": QueryAnalytics,
    "health": HealthMonitor,
}


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Database Manager -----
class AtticDB:
    """
    Main database manager for the Attic content store.

    Attributes:
        - db_path (Path | None): SQLite file, None for an in-memory store
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - logger (AtticLogger | None): Operation logger when log_dir is given
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path] = MEMORY,
        log_dir: Optional[Union[str, Path]] = None,
        echo: bool = False,
    ) -> None:
        """
        Initialize database engine and session factory.

        A fresh store gets its schema created immediately.

        Args:
            db_path: Path to the SQLite file, or ``":memory:"``
            log_dir: Directory for log files (optional)
            echo: Echo SQL statements
        """
        self.in_memory = str(db_path) == MEMORY
        self.db_path = None if self.in_memory else Path(db_path).expanduser().resolve()
        self.echo = echo

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger: Optional[AtticLogger] = AtticLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.log_dir = None
            self.logger = None

        self._components: Dict[str, Any] = {}
        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start", {"db_path": str(self.db_path or MEMORY)}
                )

            if self.in_memory:
                self.engine: Engine = create_engine(
                    "sqlite://",
                    echo=self.echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
                is_fresh = True
            else:
                is_fresh = not self.db_path.exists()
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=self.echo,
                    pool_pre_ping=True,
                )
            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if is_fresh:
                self.initialize_schema()

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """Create every table that does not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        if self.logger:
            self.logger.log_operation(
                "schema_ready", {"tables": sorted(Base.metadata.tables)}
            )

    def table_names(self) -> list:
        return inspect(self.engine).get_table_names()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Also binds the entity managers and helpers to the session; they are
        available via properties (db.tags, db.books, db.analytics, ...).

        Usage:
            with db.session_scope() as session:
                note = db.notes.create({"content": "..."})
        """
        if self._components:
            raise DatabaseError("A session scope is already active on this database")

        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        self._components = {
            name: component(session, self.logger)
            for name, component in SESSION_COMPONENTS.items()
        }

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                log_failure(
                    self.logger, e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._components = {}
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    def _component(self, name: str) -> Any:
        component = self._components.get(name)
        if component is None:
            raise DatabaseError(
                f"db.{name} requires an active session. "
                f"Use within session_scope: with db.session_scope(): db.{name}..."
            )
        return component

    # -------------------------------------------------------------------------
    # Session-bound Managers
    # -------------------------------------------------------------------------

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._component("tags")

    @property
    def essays(self) -> EssayManager:
        return self._component("essays")

    @property
    def books(self) -> BookManager:
        return self._component("books")

    @property
    def quotes(self) -> QuoteManager:
        return self._component("quotes")

    @property
    def notes(self) -> NoteManager:
        return self._component("notes")

    @property
    def collections(self) -> CollectionManager:
        return self._component("collections")

    @property
    def resolver(self) -> ContentResolver:
        return self._component("resolver")

    @property
    def analytics(self) -> QueryAnalytics:
        """
        Access QueryAnalytics for reading statistics and tag usage.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._component("analytics")

    @property
    def health(self) -> HealthMonitor:
        return self._component("health")

    # ----- Cleanup -----
    def close(self) -> None:
        """Dispose of the engine and release log handlers."""
        self.engine.dispose()
        if self.logger:
            self.logger.close()

    # ----- Context Manager Support -----
    def __enter__(self) -> "AtticDB":
        """Support for context manager usage."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Cleanup on context manager exit."""
        del exc_type, exc_val, exc_tb
        self.close()
