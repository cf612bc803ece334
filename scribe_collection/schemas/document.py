"""Document schemas.

Wire payloads from the document-listing API use camelCase keys
(``createdAt``); Python code uses snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, List


class PublicDocument(BaseModel):
    """A publicly visible document as returned by the listing API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    created_at: datetime = Field(alias="createdAt")
    author: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    username: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        # Some backends emit integer primary keys.
        return str(v) if isinstance(v, int) else v


class CollectionResponse(BaseModel):
    """Schema for ``GET /api/collection``."""
    documents: List[PublicDocument] = []
    count: int = 0


class UserCollectionResponse(CollectionResponse):
    """Schema for ``GET /api/collection/{username}``."""
    username: str


class DocumentCard(BaseModel):
    """Display-ready view of one document in a list, card or embed."""
    id: str
    title: str
    author_name: str
    url: str
    excerpt: str
    published: str  # Relative time label, e.g. "3 days ago"


class CollectionView(BaseModel):
    """A rendered collection page: heading, count line and cards."""
    title: str
    subtitle: str
    count_text: Optional[str] = None  # None when the collection is empty
    empty_message: str
    cards: List[DocumentCard] = []


class EmbedWidget(BaseModel):
    """Compact collection view for the iframe embed widget."""
    username: str
    layout: str
    count_text: str
    cards: List[DocumentCard] = []
    show_view_all: bool = False
    view_all_text: Optional[str] = None
    view_all_url: str
    empty_message: str = "No documents published yet."
