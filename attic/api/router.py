#!/usr/bin/env python3
"""
router.py
--------------------
Dispatch named procedure calls against an AtticDB.

A call validates its payload, runs the handler in one session scope,
validates the result against the output schema and returns plain
JSON-ready data (camelCase keys, ISO timestamps).

Error policy:
    - malformed payloads raise ValidationError before any store access
    - declared AtticErrors propagate unchanged; they reach the debug log
      only, never errors.log
    - store failures (DatabaseError, SQLAlchemy errors) surface as the
      procedure's VALIDATION_ERROR
    - unknown procedure names raise NotFoundError("PROCEDURE_NOT_FOUND")

Usage:
    from attic.api import call

    book = call(db, "book.createBook", {"title": "Dune", "author": "Frank Herbert"})
    call(db, "book.updateReadingProgress", {"id": book["id"], "progress": 100})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy.exc import SQLAlchemyError

# --- Local imports ---
from attic.core.exceptions import AtticError, DatabaseError, ValidationError
from attic.core.logging_manager import safe_logger
from attic.database.decorators import DatabaseOperation
from attic.database.manager import AtticDB
from .procedures import ROUTER, get_procedure


def call(db: AtticDB, name: str, payload: Optional[Dict[str, Any]] = None) -> Any:
    """
    Run one procedure.

    Args:
        db: Database to run against
        name: Qualified procedure name, e.g. ``"tag.mergeTags"``
        payload: Input mapping using the camelCase wire names

    Returns:
        JSON-ready output (dict, list or None)

    Raises:
        NotFoundError: PROCEDURE_NOT_FOUND for unknown names
        ValidationError: For malformed input or store failures
        AtticError: Any declared error of the procedure
    """
    procedure = get_procedure(name)
    params = procedure.parse(payload)
    logger = safe_logger(db.logger)

    try:
        with DatabaseOperation(db.logger, f"procedure {name}"):
            with db.session_scope():
                result = procedure.handler(db, params)
                output = procedure.render(result)
    except (DatabaseError, SQLAlchemyError) as e:
        raise ValidationError(message=str(e)) from e
    except AtticError as e:
        if e.kind not in procedure.errors:
            logger.log_warning(
                f"Undeclared error kind from {name}",
                {"kind": e.kind, "declared": sorted(procedure.errors)},
            )
        raise

    return output


def procedure_names(namespace: Optional[str] = None) -> List[str]:
    """Registered procedure names, optionally restricted to one namespace."""
    return sorted(
        name for name, procedure in ROUTER.items()
        if namespace is None or procedure.namespace == namespace
    )
