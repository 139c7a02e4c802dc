#!/usr/bin/env python3
"""
slugify.py
----------
String helpers for URL-safe identifiers and list previews.

Slugs identify essays and tags in URLs. They are a pure function of the
display name, so two different names can collide; uniqueness is checked
by the managers at create/rename time.

Usage:
    from attic.utils.slugify import slugify

    slugify("The Myth of Sisyphus")  # "the-myth-of-sisyphus"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re

SLUG_MAX_LENGTH = 50
PREVIEW_MAX_LENGTH = 150

_DISALLOWED = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Convert a title or name to a slug.

    Applies, in order:
    - Lowercase
    - Drop every character outside ``[a-z0-9 ]`` (accents and
      punctuation are removed, not transliterated)
    - Collapse runs of whitespace to a single hyphen
    - Truncate to ``max_length`` characters

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 50)

    Returns:
        Slug string, possibly empty

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("Self-Improvement")
        'selfimprovement'
        >>> slugify("  Notes   from  Underground ")
        '-notes-from-underground-'
    """
    if not text:
        return ""

    text = text.lower()
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text)
    return text[:max_length]


def content_preview(content: str, max_length: int = PREVIEW_MAX_LENGTH) -> str:
    """
    Shorten long content for list views.

    Args:
        content: Full text
        max_length: Characters kept before the ellipsis

    Returns:
        The content itself when short enough, else a trimmed prefix plus '...'

    Examples:
        >>> content_preview("short")
        'short'
        >>> content_preview("abcdef ", max_length=6)
        'abcdef...'
    """
    if len(content) <= max_length:
        return content
    return content[:max_length].strip() + "..."
