"""Embed widget service.

Covers both sides of the iframe widget: generating the embed snippet a
user pastes into a third-party site, and building the compact widget view
from the query parameters the iframe is loaded with.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Mapping, Optional
from urllib.parse import quote, urlencode

from ..exceptions import ValidationError
from ..schemas.document import EmbedWidget, PublicDocument
from .collection_service import build_cards, count_label, validate_username
from .content_utils import EMBED_GRID_EXCERPT_LENGTH, EMBED_LIST_EXCERPT_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_EMBED_LIMIT = 6
EMBED_LIMIT_CHOICES = (3, 4, 6, 8, 10)

IFRAME_STYLE = "border: 1px solid #e5e7eb; border-radius: 8px;"
PREVIEW_IFRAME_HEIGHT = 300


class EmbedLayout(str, Enum):
    """Widget layout."""
    LIST = "list"
    GRID = "grid"


@dataclass(frozen=True)
class EmbedOptions:
    layout: EmbedLayout = EmbedLayout.LIST
    limit: int = DEFAULT_EMBED_LIMIT


@dataclass(frozen=True)
class EmbedDimensions:
    width: int
    height: int


_DIMENSIONS = {
    EmbedLayout.LIST: EmbedDimensions(width=400, height=400),
    EmbedLayout.GRID: EmbedDimensions(width=600, height=500),
}


def embed_dimensions(layout: EmbedLayout) -> EmbedDimensions:
    return _DIMENSIONS[layout]


def excerpt_length_for(layout: EmbedLayout) -> int:
    """Grid cards are narrower than list rows and get a shorter excerpt."""
    if layout == EmbedLayout.GRID:
        return EMBED_GRID_EXCERPT_LENGTH
    return EMBED_LIST_EXCERPT_LENGTH


def _parse_int_prefix(raw: str) -> Optional[int]:
    """Leading integer of *raw* (``"8px"`` -> 8), or None when there is none."""
    raw = raw.strip()
    end = 1 if raw[:1] in ("+", "-") else 0
    while end < len(raw) and raw[end].isdigit():
        end += 1
    try:
        return int(raw[:end])
    except ValueError:
        return None


def parse_embed_params(params: Mapping[str, str]) -> EmbedOptions:
    """Read widget options from iframe query parameters.

    Never raises: unknown layouts fall back to list, and a missing,
    non-numeric or non-positive limit falls back to the default.
    """
    raw_layout = (params.get("layout") or "").strip().lower()
    try:
        layout = EmbedLayout(raw_layout) if raw_layout else EmbedLayout.LIST
    except ValueError:
        logger.debug("Unknown embed layout %r, using list", raw_layout)
        layout = EmbedLayout.LIST

    limit = _parse_int_prefix(params.get("limit") or "")
    if limit is None or limit < 1:
        limit = DEFAULT_EMBED_LIMIT

    return EmbedOptions(layout=layout, limit=limit)


def build_embed_url(base_url: str, username: str, options: EmbedOptions = EmbedOptions()) -> str:
    """URL the iframe loads. Default options are left out of the query string."""
    username = validate_username(username)
    query: dict[str, str] = {}
    if options.layout != EmbedLayout.LIST:
        query["layout"] = options.layout.value
    if options.limit != DEFAULT_EMBED_LIMIT:
        query["limit"] = str(options.limit)

    url = f"{base_url}/embed/collection/{quote(username, safe='')}"
    if query:
        url += "?" + urlencode(query)
    return url


def generate_embed_code(
    base_url: str, username: str, options: EmbedOptions = EmbedOptions()
) -> str:
    """The ``<iframe>`` snippet users paste into their own site."""
    if options.limit not in EMBED_LIMIT_CHOICES:
        raise ValidationError(
            f"Embed limit must be one of {list(EMBED_LIMIT_CHOICES)}", field="limit"
        )
    src = build_embed_url(base_url, username, options)
    dims = embed_dimensions(options.layout)
    return (
        "<iframe\n"
        f'  src="{src}"\n'
        f'  width="{dims.width}"\n'
        f'  height="{dims.height}"\n'
        '  frameborder="0"\n'
        f'  style="{IFRAME_STYLE}">\n'
        "</iframe>"
    )


def preview_iframe_src(base_url: str, username: str, options: EmbedOptions) -> str:
    """Live-preview URL shown next to the snippet; always carries both parameters."""
    username = validate_username(username)
    query = urlencode({"layout": options.layout.value, "limit": options.limit})
    return f"{base_url}/embed/collection/{quote(username, safe='')}?{query}"


def embed_notes(options: EmbedOptions) -> List[str]:
    """Bullet notes displayed under the embed snippet."""
    dims = embed_dimensions(options.layout)
    return [
        f"Widget dimensions: {dims.width}px × {dims.height}px",
        f"Shows up to {options.limit} most recent documents",
        "Links open in new tab",
        "Responsive and mobile-friendly",
    ]


def build_embed_widget(
    username: str,
    documents: List[PublicDocument],
    options: EmbedOptions = EmbedOptions(),
    base_url: str = "",
    now: Optional[datetime] = None,
) -> EmbedWidget:
    """Build the compact widget view for an iframe embed.

    Shows at most ``options.limit`` documents and links to the full
    collection page when there are more.

    Raises:
        ValidationError: Blank username or a limit below 1.
    """
    username = validate_username(username)
    if options.limit < 1:
        raise ValidationError("Embed limit must be at least 1", field="limit")
    display_limit = min(options.limit, len(documents))
    show_view_all = len(documents) > display_limit

    cards = build_cards(
        documents[:display_limit],
        max_length=excerpt_length_for(options.layout),
        base_url=base_url,
        now=now,
    )
    return EmbedWidget(
        username=username,
        layout=options.layout.value,
        count_text=count_label(len(documents), "published"),
        cards=cards,
        show_view_all=show_view_all,
        view_all_text=f"View all {len(documents)} documents →" if show_view_all else None,
        view_all_url=f"{base_url}/collection/{quote(username, safe='')}",
    )
