"""Content processing utilities - deep helper module.

Turns raw document content into a short plain-text excerpt for list,
card and embed views.
"""

import re
from typing import Optional

COLLECTION_EXCERPT_LENGTH = 150
"""Excerpt length for the full collection list and per-user collection page."""

EMBED_LIST_EXCERPT_LENGTH = 100
"""Excerpt length for the embed widget in list layout."""

EMBED_GRID_EXCERPT_LENGTH = 80
"""
Excerpt length for the embed widget in grid layout.

Grid cards are half the widget width, so they get the shortest preview.
"""

NO_PREVIEW_TEXT = "No preview available."

ELLIPSIS = "..."

# Markup symbols are deleted outright, not parsed.
_MARKUP_RE = re.compile(r"[#*_`~\[\]()]")
_NEWLINES_RE = re.compile(r"\n+")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_markup(content: str) -> str:
    """Strip markup symbols and normalize whitespace to single spaces."""
    text = _MARKUP_RE.sub("", content)
    text = _NEWLINES_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def make_excerpt(content: Optional[str], max_length: int = COLLECTION_EXCERPT_LENGTH) -> str:
    """
    Generate a preview excerpt from document content.

    DEEP MODULE: Hides cleaning and truncation logic. Callers only pick a
    length; the result is at most ``max_length + 3`` characters and ends on
    a word boundary unless the first word alone is longer than the limit.

    Args:
        content: The full document content (may be None or empty)
        max_length: Maximum length before the ellipsis

    Returns:
        Plain-text preview, or ``NO_PREVIEW_TEXT`` when there is no content
    """
    if not content:
        return NO_PREVIEW_TEXT

    clean = clean_markup(content)
    if len(clean) <= max_length:
        return clean

    truncated = clean[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS
