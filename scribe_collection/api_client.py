"""HTTP client for the document-listing API."""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .core.config import settings
from .exceptions import CollectionFetchError, UserNotFoundError
from .schemas.document import CollectionResponse, UserCollectionResponse

logger = logging.getLogger(__name__)

# Retry configuration for transient failures (connection errors, 5xx).
MAX_RETRIES = 3
RETRY_BASE_DELAY = 1.0  # seconds; exponential: 1s, 2s, 4s


class CollectionClient:
    """Async client wrapping the public collection endpoints.

    Defaults come from settings:
        COLLECTION_API_URL     : Base URL (default: http://localhost:3000)
        COLLECTION_API_TOKEN   : Optional Bearer token
        COLLECTION_API_TIMEOUT : Request timeout in seconds (default: 30)

    ``transport`` is passed through to httpx, which lets tests substitute
    an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ) -> None:
        self.base_url = base_url if base_url is not None else settings.collection_api_url
        self.token = token if token is not None else settings.collection_api_token
        self.timeout = timeout if timeout is not None else settings.collection_api_timeout
        self.retry_base_delay = retry_base_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers: dict[str, str] = {}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an HTTP request with retry on transient failures.

        Retries on connection errors, timeouts and 5xx server errors with
        exponential backoff. Client errors (4xx) raise immediately.
        """
        client = await self._get_client()
        last_exc: Exception | None = None

        for attempt in range(MAX_RETRIES):
            try:
                resp = await client.request(method, path, **kwargs)
                if resp.status_code < 500:
                    resp.raise_for_status()
                    return resp
                # 5xx: retry
                last_exc = httpx.HTTPStatusError(
                    f"Server error {resp.status_code}",
                    request=resp.request,
                    response=resp,
                )
            except httpx.HTTPStatusError:
                raise
            except (httpx.ConnectError, httpx.TimeoutException) as exc:
                last_exc = exc

            if attempt < MAX_RETRIES - 1:
                delay = self.retry_base_delay * (2 ** attempt)
                logger.warning(
                    "Request %s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                    method, path, attempt + 1, MAX_RETRIES, delay, last_exc,
                )
                await asyncio.sleep(delay)

        raise last_exc  # type: ignore[misc]

    async def get_public_documents(self) -> CollectionResponse:
        """All public documents. Maps to GET /api/collection."""
        try:
            resp = await self._request_with_retry("GET", "/api/collection")
            return CollectionResponse.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching public documents: %s", e)
            raise CollectionFetchError("Failed to fetch public documents", e) from e

    async def get_user_documents(self, username: str) -> UserCollectionResponse:
        """One user's public documents. Maps to GET /api/collection/{username}.

        Raises:
            UserNotFoundError: The API answered 404.
            CollectionFetchError: Any other failure.
        """
        path = f"/api/collection/{quote(username, safe='')}"
        try:
            resp = await self._request_with_retry("GET", path)
            return UserCollectionResponse.model_validate(resp.json())
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise UserNotFoundError(username) from e
            logger.error("Error fetching user public documents: %s", e)
            raise CollectionFetchError("Failed to fetch user documents", e) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching user public documents: %s", e)
            raise CollectionFetchError("Failed to fetch user documents", e) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
