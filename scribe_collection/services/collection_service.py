"""Collection presentation service.

Builds display-ready cards and page views from public documents: author
names, document links, relative timestamps and count labels. Fetching is
delegated to the API client; everything else here is pure.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..api_client import CollectionClient
from ..exceptions import ValidationError
from ..schemas.document import CollectionView, DocumentCard, PublicDocument
from .content_utils import COLLECTION_EXCERPT_LENGTH, make_excerpt

logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "Anonymous"

_MINUTES_IN_DAY = 1440
_MINUTES_IN_MONTH = 43200
_MINUTES_IN_TWO_MONTHS = 86400


def author_display_name(doc: PublicDocument) -> str:
    """Author name, falling back to the owner's handle, then "Anonymous"."""
    return doc.author or doc.username or ANONYMOUS_AUTHOR


def document_url(doc: PublicDocument, base_url: str = "") -> str:
    """Link to a document.

    Pretty ``/{username}/{slug}`` URLs need both parts; anything else is
    addressed by ID.
    """
    if doc.username and doc.slug:
        return f"{base_url}/{doc.username}/{doc.slug}"
    return f"{base_url}/documents/{doc.id}"


def count_label(count: int, verb: str) -> str:
    """``count_label(1, "published")`` -> ``"1 document published"``."""
    noun = "document" if count == 1 else "documents"
    return f"{count} {noun} {verb}"


def _round(x: float) -> int:
    # Half up, like the JS frontend; built-in round() is half-to-even.
    return math.floor(x + 0.5)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def _month_difference(later: datetime, earlier: datetime) -> int:
    """Whole calendar months between two datetimes (``later >= earlier``)."""
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if months > 0 and (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1
    return months


def _distance_words(later: datetime, earlier: datetime) -> str:
    seconds = (later - earlier).total_seconds()
    minutes = _round(seconds / 60)

    if minutes < 2:
        return "less than a minute" if minutes == 0 else "1 minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < _MINUTES_IN_DAY:
        return "about " + _plural(_round(minutes / 60), "hour")
    if minutes < 2520:
        return "1 day"
    if minutes < _MINUTES_IN_MONTH:
        return _plural(_round(minutes / _MINUTES_IN_DAY), "day")
    if minutes < _MINUTES_IN_TWO_MONTHS:
        return "about " + _plural(_round(minutes / _MINUTES_IN_MONTH), "month")

    months = _month_difference(later, earlier)
    if months < 12:
        return _plural(_round(minutes / _MINUTES_IN_MONTH), "month")

    years = math.floor(months / 12)
    remainder = months % 12
    if remainder < 3:
        return "about " + _plural(years, "year")
    if remainder < 9:
        return "over " + _plural(years, "year")
    return "almost " + _plural(years + 1, "year")


def format_relative_time(when: datetime, now: Optional[datetime] = None) -> str:
    """Human-readable distance from *now*, e.g. ``"3 days ago"``.

    Naive datetimes are treated as UTC. Future times read ``"in ..."``.
    """
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if when <= now:
        return f"{_distance_words(now, when)} ago"
    return f"in {_distance_words(when, now)}"


def build_card(
    doc: PublicDocument,
    max_length: int = COLLECTION_EXCERPT_LENGTH,
    base_url: str = "",
    now: Optional[datetime] = None,
) -> DocumentCard:
    """Build the display card for one document."""
    return DocumentCard(
        id=doc.id,
        title=doc.title,
        author_name=author_display_name(doc),
        url=document_url(doc, base_url),
        excerpt=make_excerpt(doc.content, max_length),
        published=format_relative_time(doc.created_at, now),
    )


def build_cards(
    docs: Iterable[PublicDocument],
    max_length: int = COLLECTION_EXCERPT_LENGTH,
    base_url: str = "",
    now: Optional[datetime] = None,
) -> List[DocumentCard]:
    now = now or datetime.now(timezone.utc)
    return [build_card(doc, max_length, base_url, now) for doc in docs]


def validate_username(username: Optional[str]) -> str:
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required", field="username")
    return username


def public_collection_view(
    docs: List[PublicDocument],
    now: Optional[datetime] = None,
    base_url: str = "",
) -> CollectionView:
    """Page view for the community-wide collection."""
    return CollectionView(
        title="Collection",
        subtitle="Discover public documents shared by the community",
        count_text=count_label(len(docs), "available") if docs else None,
        empty_message="No public documents available yet.",
        cards=build_cards(docs, base_url=base_url, now=now),
    )


def user_collection_view(
    username: str,
    docs: List[PublicDocument],
    now: Optional[datetime] = None,
    base_url: str = "",
) -> CollectionView:
    """Page view for one user's public documents."""
    return CollectionView(
        title=f"@{username}",
        subtitle=f"Public documents by {username}",
        count_text=count_label(len(docs), "published") if docs else None,
        empty_message=f"@{username} hasn't published any documents yet.",
        cards=build_cards(docs, base_url=base_url, now=now),
    )


class CollectionService:
    """Fetches public documents and turns them into page views.

    Card links are prefixed with ``base_url`` (the public site origin);
    leave it empty for site-relative links.

    Errors from the API client (``UserNotFoundError``,
    ``CollectionFetchError``) propagate to the caller unchanged.
    """

    def __init__(self, client: CollectionClient, base_url: str = ""):
        self.client = client
        self.base_url = base_url

    async def public_collection(self, now: Optional[datetime] = None) -> CollectionView:
        response = await self.client.get_public_documents()
        logger.debug("Building public collection view", extra={"count": response.count})
        return public_collection_view(response.documents, now, self.base_url)

    async def user_collection(
        self, username: str, now: Optional[datetime] = None
    ) -> CollectionView:
        username = validate_username(username)
        response = await self.client.get_user_documents(username)
        logger.debug(
            "Building user collection view",
            extra={"username": username, "count": response.count},
        )
        return user_collection_view(username, response.documents, now, self.base_url)
