from __future__ import annotations

import asyncio

import httpx

from .exceptions import FeedFetchError

DEFAULT_TIMEOUT_MS = 8000


async def fetch_feed(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> bytes:
    """
    Fetch a single feed URL and return the raw response body.

    One attempt only. The deadline covers the whole request; when it passes,
    the request coroutine is cancelled so the underlying connection is released.

    Raises FeedFetchError on DNS/connection problems, non-2xx status or timeout.
    """
    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError as e:
        raise FeedFetchError(f"Timed out after {timeout_ms} ms: {url}", url=url) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e!r})", url=url) from e

    if not response.is_success:
        raise FeedFetchError(
            f"Unexpected status {response.status_code}: {url}",
            url=url,
            status_code=response.status_code,
        )
    return response.content
