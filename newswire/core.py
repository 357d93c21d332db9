from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence

import httpx

from . import __version__
from .exceptions import FeedFetchError
from .fetcher import DEFAULT_TIMEOUT_MS, fetch_feed
from .logging import get_logger
from .models import NewsItem
from .parser import ITEMS_PER_FEED, parse_feed, parse_pub_date
from .registry import DEFAULT_SOURCES, FEED_REGISTRY, resolve_sources

logger = get_logger(__name__)

MAX_ITEMS = 50
DEFAULT_USER_AGENT = f"Mozilla/5.0 (compatible; newswire/{__version__})"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class AggregateOptions:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    per_feed_limit: int = ITEMS_PER_FEED
    max_items: int = MAX_ITEMS
    user_agent: str = DEFAULT_USER_AGENT
    default_sources: Sequence[str] = field(default_factory=lambda: DEFAULT_SOURCES)

    @classmethod
    def from_env(cls) -> "AggregateOptions":
        return cls(
            timeout_ms=_env_int("NEWSWIRE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            per_feed_limit=_env_int("NEWSWIRE_PER_FEED_LIMIT", ITEMS_PER_FEED),
            max_items=_env_int("NEWSWIRE_MAX_ITEMS", MAX_ITEMS),
            user_agent=os.getenv("NEWSWIRE_USER_AGENT") or DEFAULT_USER_AGENT,
        )


@dataclass
class SourceResult:
    """Outcome of one source pipeline: either items or the error that ended it."""
    source: str
    items: List[NewsItem] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class NewsAggregator:
    """
    High-level API: fetch the requested feeds concurrently and return one merged,
    newest-first list of NewsItem.

    Pipeline per source: fetch (bounded by timeout) → parse → gate → normalize.
    Sources are isolated from each other; a failing source contributes nothing
    and never fails the call.
    """

    def __init__(
        self,
        options: Optional[AggregateOptions] = None,
        *,
        registry: Mapping[str, str] = FEED_REGISTRY,
    ) -> None:
        self.options = options or AggregateOptions()
        self.registry = registry

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self.options.user_agent},
            timeout=httpx.Timeout(self.options.timeout_ms / 1000),
            follow_redirects=True,
        )

    async def _fetch_source(self, client: httpx.AsyncClient, source: str, url: str) -> bytes:
        logger.debug("feed_fetch_started", source=source, url=url)
        return await fetch_feed(client, url, timeout_ms=self.options.timeout_ms)

    async def _run_source(self, client: httpx.AsyncClient, source: str, url: str) -> SourceResult:
        try:
            content = await self._fetch_source(client, source, url)
        except FeedFetchError as e:
            logger.warning("feed_fetch_failed", source=source, url=url, status_code=e.status_code, error=str(e))
            return SourceResult(source, error=e)
        except Exception as e:
            logger.warning("feed_fetch_failed", source=source, url=url, error=str(e))
            return SourceResult(source, error=e)

        try:
            items = parse_feed(content, source, limit=self.options.per_feed_limit)
        except Exception as e:
            logger.warning("feed_parse_failed", source=source, error=str(e))
            return SourceResult(source, error=e)
        return SourceResult(source, items=items)

    async def aggregate(self, sources: Optional[Iterable[str]] = None) -> List[NewsItem]:
        selected = resolve_sources(sources, self.registry, default=self.options.default_sources)
        if not selected:
            return []

        async with self._client() as client:
            # Wait for every source; exceptions are returned, not raised.
            outcomes = await asyncio.gather(
                *(self._run_source(client, key, url) for key, url in selected),
                return_exceptions=True,
            )

        items: List[NewsItem] = []
        failed = 0
        for (key, _), outcome in zip(selected, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("feed_task_failed", source=key, error=repr(outcome))
                failed += 1
                continue
            if not outcome.ok:
                failed += 1
                continue
            items.extend(outcome.items)

        # Sort newest first; order of task completion plays no part.
        items.sort(key=lambda it: parse_pub_date(it.pub_date), reverse=True)
        items = items[: self.options.max_items]

        logger.info(
            "news_aggregated",
            sources=[k for k, _ in selected],
            failed_sources=failed,
            items_returned=len(items),
        )
        return items

    def fetch(self, sources: Optional[Iterable[str]] = None) -> List[NewsItem]:
        """Blocking wrapper around `aggregate` for scripts."""
        return asyncio.run(self.aggregate(sources))
