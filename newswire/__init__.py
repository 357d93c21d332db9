"""
newswire

Fetches a set of RSS/Atom news feeds concurrently and returns one merged list of
normalized news items.

Core ideas:
- Input: source keys from a fixed feed registry (e.g. "bbc", "thestar")
- Process: fetch (with timeout) → parse → gate → normalize → merge → sort (newest first) → cap
- Output: List[NewsItem]

Example
-------
from newswire import NewsAggregator

aggregator = NewsAggregator()
news = aggregator.fetch(["bbc", "aljazeera"])

for item in news:
    print(item.pub_date, item.source, item.title)
"""
__version__ = "0.1.0"

from .models import NewsItem
from .core import AggregateOptions, NewsAggregator
from .registry import DEFAULT_SOURCES, FEED_REGISTRY

__all__ = [
    "NewsItem",
    "NewsAggregator",
    "AggregateOptions",
    "FEED_REGISTRY",
    "DEFAULT_SOURCES",
]
