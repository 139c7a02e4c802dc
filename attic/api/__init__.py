"""
API Package
-----------

Typed procedure layer over the database managers.

Usage:
    from attic.api import call, ROUTER

    call(db, "note.createNote", {"content": "..."})
"""
from .procedures import ROUTER, Procedure, get_procedure
from .router import call, procedure_names

__all__ = [
    "ROUTER",
    "Procedure",
    "call",
    "get_procedure",
    "procedure_names",
]
