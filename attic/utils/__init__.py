"""
Utilities package for Attic.

Import commonly-used utilities directly from this package:
    from attic.utils import slugify, content_preview
"""
from .slugify import content_preview, slugify

__all__ = ["slugify", "content_preview"]
