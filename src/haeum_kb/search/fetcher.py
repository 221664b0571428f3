"""HTTP fetching of the manifest and documents."""

import asyncio
import logging

import httpx

from haeum_kb.search.errors import DocumentFetchError, ManifestFetchError
from haeum_kb.search.manifest import parse_manifest
from haeum_kb.search.models import ManifestEntry

logger = logging.getLogger(__name__)

# Manifest and documents must never come from a cache
NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}

DEFAULT_BACKOFF = 0.6  # seconds
BACKOFF_FACTOR = 1.5


class FetchError(Exception):
    """A GET failed after all attempts."""


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    retries: int = 0,
    backoff: float | None = None,
) -> httpx.Response:
    """
    GET a URL, retrying failed attempts with exponential backoff.

    Any transport error or non-2xx status counts as a failed attempt.

    Args:
        client: HTTP client, possibly with a base_url for relative URLs
        url: Absolute or client-relative URL
        retries: Extra attempts after the first one
        backoff: Delay before the first retry (default DEFAULT_BACKOFF);
            grows by BACKOFF_FACTOR

    Raises:
        FetchError: If every attempt failed.
    """
    if backoff is None:
        backoff = DEFAULT_BACKOFF

    last_error = ""
    for attempt in range(retries + 1):
        try:
            response = await client.get(url, headers=NO_STORE_HEADERS)
            if response.is_success:
                return response
            last_error = f"HTTP {response.status_code}"
        except httpx.TimeoutException:
            last_error = "Request timed out"
        except (httpx.RequestError, httpx.InvalidURL) as e:
            last_error = str(e) or type(e).__name__

        if attempt < retries:
            delay = backoff * BACKOFF_FACTOR**attempt
            logger.debug(
                "Fetch of %s failed (%s), retrying in %.2fs", url, last_error, delay
            )
            await asyncio.sleep(delay)

    raise FetchError(last_error)


async def fetch_manifest(
    client: httpx.AsyncClient,
    url: str,
    retries: int = 0,
) -> list[ManifestEntry]:
    """
    Fetch and validate the manifest.

    Raises:
        ManifestFetchError: If it cannot be fetched or is not a valid array.
    """
    try:
        response = await fetch_with_retry(client, url, retries=retries)
    except FetchError as e:
        raise ManifestFetchError(f"Failed to load manifest {url}: {e}") from e

    try:
        return parse_manifest(response.json())
    except ValueError as e:
        raise ManifestFetchError(f"Invalid manifest {url}: {e}") from e


async def fetch_document(
    client: httpx.AsyncClient,
    url: str,
    retries: int = 0,
) -> str:
    """
    Fetch a document body as UTF-8 text.

    Raises:
        DocumentFetchError: If the document cannot be fetched.
    """
    try:
        response = await fetch_with_retry(client, url, retries=retries)
    except FetchError as e:
        raise DocumentFetchError(url, str(e)) from e

    response.encoding = "utf-8"
    return response.text
