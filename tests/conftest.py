"""Shared test fixtures for the scribe-collection test suite.

No test touches the network: API client tests run against an
``httpx.MockTransport``.
"""

import os

# Pin settings before any package imports.
os.environ["COLLECTION_API_URL"] = "http://collection.test"
os.environ["COLLECTION_API_TOKEN"] = ""
os.environ["PUBLIC_BASE_URL"] = "https://scribe.test"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_FORMAT"] = "text"

from datetime import datetime, timezone

import httpx
import pytest

from scribe_collection.api_client import CollectionClient
from scribe_collection.schemas.document import PublicDocument

NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    """Fixed reference time so relative labels are deterministic."""
    return NOW


def make_document(
    doc_id: str = "doc-1",
    title: str = "Test Document",
    content: str | None = "# Test\n\nHello world.",
    created_at: datetime = NOW,
    **overrides,
) -> PublicDocument:
    """Factory for public documents."""
    fields = {
        "id": doc_id,
        "title": title,
        "createdAt": created_at,
        "author": "Ada Lovelace",
        "slug": "test-document",
        "content": content,
        "username": "ada",
    }
    fields.update(overrides)
    return PublicDocument.model_validate(fields)


def document_payload(doc_id: str = "doc-1", **overrides) -> dict:
    """Wire-format (camelCase) document as the listing API returns it."""
    payload = {
        "id": doc_id,
        "title": "Test Document",
        "createdAt": "2025-06-14T12:00:00Z",
        "author": None,
        "slug": "test-document",
        "content": "Some *content*.",
        "username": "ada",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_client():
    """Build a CollectionClient whose requests are answered by *handler*.

    Retry delays are zeroed so retry tests run instantly.
    """

    def _make(handler, token: str = "") -> CollectionClient:
        return CollectionClient(
            base_url="http://collection.test",
            token=token,
            transport=httpx.MockTransport(handler),
            retry_base_delay=0.0,
        )

    return _make
