"""Pydantic schemas for API payloads and view models."""

from .document import (
    PublicDocument,
    CollectionResponse,
    UserCollectionResponse,
    DocumentCard,
    CollectionView,
    EmbedWidget,
)

__all__ = [
    "PublicDocument",
    "CollectionResponse",
    "UserCollectionResponse",
    "DocumentCard",
    "CollectionView",
    "EmbedWidget",
]
