from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple


FEED_REGISTRY: Mapping[str, str] = MappingProxyType({
    "malaysiakini": "https://www.malaysiakini.com/rss/en/news.rss",
    "thestar": "https://www.thestar.com.my/rss/news/nation/",
    "bernama": "https://www.bernama.com/en/rss/news_malaysia.php",
    "nst": "https://www.nst.com.my/rss",
    "malay_mail": "https://www.malaymail.com/feed/malaysia",
    # International
    "bbc": "https://feeds.bbci.co.uk/news/world/rss.xml",
    "reuters": "https://www.reutersagency.com/feed/",
    "aljazeera": "https://www.aljazeera.com/xml/rss/all.xml",
})

DEFAULT_SOURCES: Tuple[str, ...] = ("thestar", "bernama", "bbc")


def parse_sources_param(value: Optional[str]) -> Optional[List[str]]:
    """Split a `sources=a,b,c` query value. Returns None when it names nothing."""
    if not value:
        return None
    keys = [k.strip() for k in value.split(",")]
    keys = [k for k in keys if k]
    return keys or None


def resolve_sources(
    keys: Optional[Iterable[str]],
    registry: Mapping[str, str] = FEED_REGISTRY,
    *,
    default: Iterable[str] = DEFAULT_SOURCES,
) -> List[Tuple[str, str]]:
    """
    Map source keys to (key, url) pairs.

    Falls back to `default` when no keys are given. Unknown keys are dropped;
    caller order is kept and repeated keys are not collapsed.
    """
    selected = list(keys) if keys is not None else []
    if not selected:
        selected = list(default)
    return [(k, registry[k]) for k in selected if k in registry]
