"""Presentation services."""

from .collection_service import CollectionService
from .content_utils import make_excerpt

__all__ = ["CollectionService", "make_excerpt"]
