"""HTTP fetching with retries for remote documents."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from docweave.config import (
    DOCWEAVE_FETCH_BACKOFF_S,
    DOCWEAVE_FETCH_MAX_RETRIES,
    DOCWEAVE_FETCH_TIMEOUT_S,
    DOCWEAVE_USER_AGENT,
)
from docweave.exceptions import DocumentNotFoundError, FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


def make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(DOCWEAVE_FETCH_TIMEOUT_S),
        headers={"User-Agent": DOCWEAVE_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def _get_text(http_client: httpx.AsyncClient, url: str) -> str:
    last_exc: Exception | None = None
    for attempt in range(DOCWEAVE_FETCH_MAX_RETRIES + 1):
        try:
            response = await http_client.get(url)
        except httpx.RequestError as exc:
            last_exc = exc
        else:
            if response.status_code == 404:
                raise DocumentNotFoundError(f"Document not found at {url}")
            if response.status_code not in RETRY_STATUS_CODES:
                try:
                    response.raise_for_status()
                except httpx.HTTPStatusError as exc:
                    raise FetchError(f"HTTP {response.status_code} from {url}") from exc
                return response.text
            last_exc = FetchError(f"HTTP {response.status_code} from {url}")

        if attempt < DOCWEAVE_FETCH_MAX_RETRIES:
            backoff = DOCWEAVE_FETCH_BACKOFF_S * (2**attempt)
            logger.debug("Retrying %s in %.2fs after: %s", url, backoff, last_exc)
            await asyncio.sleep(backoff)

    raise FetchError(f"Failed to fetch {url}: {last_exc}")


async def fetch_text(url: str, *, client: httpx.AsyncClient | None = None) -> str:
    """Fetch a text resource, retrying transient failures with backoff.

    Args:
        url: The URL to fetch.
        client: Optional shared client for connection pooling. If omitted,
            a client is created for this request.

    Raises:
        DocumentNotFoundError: On a 404 response.
        FetchError: On other client errors, or once retries are exhausted.
    """
    if client is not None:
        return await _get_text(client, url)
    async with make_client() as new_client:
        return await _get_text(new_client, url)
