from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import feedparser
from dateutil import parser as date_parser

from .classifier import is_news_entry
from .exceptions import FeedParseError
from .logging import get_logger
from .models import NewsItem
from .normalizer import to_news_item

logger = get_logger(__name__)

ITEMS_PER_FEED = 10
NO_TITLE = "No title"
MISSING_HREF = "#"
OLDEST = datetime.min.replace(tzinfo=timezone.utc)

_IMG_SRC_RE = re.compile(r'<img[^>]+src="([^">]+)"')


class FeedShape(Enum):
    RSS = "rss"
    ATOM = "atom"
    UNRECOGNIZED = "unrecognized"


def detect_shape(parsed: Dict[str, Any]) -> FeedShape:
    """Classify a feedparser result by its detected version (e.g. "rss20", "atom10")."""
    version = parsed.get("version") or ""
    if version.startswith("rss"):
        return FeedShape.RSS
    if version.startswith("atom"):
        return FeedShape.ATOM
    return FeedShape.UNRECOGNIZED


def load_entries(content: bytes) -> Tuple[FeedShape, List[Dict[str, Any]]]:
    """
    Parse raw feed bytes and return the document shape with its raw entries.

    Raises FeedParseError when the document is malformed (bozo) or is neither
    RSS nor Atom.
    """
    try:
        feed = feedparser.parse(content)
    except Exception as e:
        raise FeedParseError(f"Failed to parse feed ({e})") from e

    if feed.get("bozo"):
        exc = feed.get("bozo_exception")
        # A declared-vs-actual encoding mismatch still yields a sound document.
        if not isinstance(exc, feedparser.CharacterEncodingOverride):
            msg = "Invalid RSS/Atom document"
            if exc:
                msg += f" ({exc})"
            raise FeedParseError(msg)

    shape = detect_shape(feed)
    if shape is FeedShape.UNRECOGNIZED:
        raise FeedParseError(f"Unrecognized feed format: {feed.get('version')!r}")

    entries = feed.get("entries")
    if not isinstance(entries, list):
        raise FeedParseError("Feed has no entries collection")
    return shape, entries


def _first_str(*values: Any) -> Optional[str]:
    for v in values:
        if isinstance(v, str) and v.strip():
            return v.strip()
    return None


def _content_value(entry: Dict[str, Any]) -> Optional[str]:
    # content:encoded (RSS) and <content> (Atom) both land in entry["content"]
    content = entry.get("content")
    if isinstance(content, list):
        for block in content:
            if isinstance(block, dict):
                value = _first_str(block.get("value"))
                if value:
                    return value
    return None


def _resolve_title(entry: Dict[str, Any]) -> str:
    title = entry.get("title")
    if not isinstance(title, str):
        return NO_TITLE
    return title.strip()


def _resolve_rss_link(entry: Dict[str, Any]) -> str:
    return _first_str(entry.get("link")) or ""


def _resolve_atom_link(entry: Dict[str, Any]) -> str:
    # feedparser copies <id> into "link" (guidislink) when no alternate link exists
    if not entry.get("guidislink"):
        link = _first_str(entry.get("link"))
        if link:
            return link

    links = entry.get("links")
    if isinstance(links, dict):
        links = [links]
    if isinstance(links, list) and links:
        candidates = [l for l in links if isinstance(l, dict)]
        for l in candidates:
            if l.get("rel", "alternate") == "alternate":
                href = _first_str(l.get("href"))
                if href:
                    return href
        for l in candidates:
            href = _first_str(l.get("href"))
            if href:
                return href
        return MISSING_HREF

    return _first_str(entry.get("id")) or ""


def _now_iso() -> str:
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def _resolve_pub_date(entry: Dict[str, Any]) -> str:
    # feedparser files <pubDate> and <published> under "published"
    for key in ("published", "updated"):
        value = _first_str(entry.get(key))
        if value:
            return value
    return _now_iso()


def _first_ref_url(refs: Any, attr: str) -> Optional[str]:
    if isinstance(refs, dict):
        refs = [refs]
    if isinstance(refs, list) and refs and isinstance(refs[0], dict):
        return _first_str(refs[0].get(attr))
    return None


def _image_from_html(*fragments: Optional[str]) -> Optional[str]:
    for html in fragments:
        if not html:
            continue
        m = _IMG_SRC_RE.search(html)
        if m:
            return m.group(1)
    return None


def _resolve_image(entry: Dict[str, Any], description: str, content: Optional[str]) -> Optional[str]:
    """
    Priority: media:content -> media:thumbnail -> enclosure -> first <img> in the
    raw description/content. Stops at the first hit.
    """
    return (
        _first_ref_url(entry.get("media_content"), "url")
        or _first_ref_url(entry.get("media_thumbnail"), "url")
        or _first_ref_url(entry.get("enclosures"), "href")
        or _image_from_html(description, content)
    )


def _resolve_category(entry: Dict[str, Any]) -> Optional[str]:
    # Only a single, attribute-free <category> counts as a plain string.
    tags = entry.get("tags")
    if not isinstance(tags, list) or len(tags) != 1:
        return None
    tag = tags[0]
    if not isinstance(tag, dict) or tag.get("scheme"):
        return None
    return _first_str(tag.get("term"))


def parse_entry(entry: Dict[str, Any], shape: FeedShape) -> Dict[str, Any]:
    """
    Map a raw feedparser entry to a dict with the common fields.
    Fields: title, description (raw HTML), link, pub_date, image_url, category
    """
    content = _content_value(entry)
    description = _first_str(entry.get("summary"), entry.get("description")) or content or ""

    if shape is FeedShape.ATOM:
        link = _resolve_atom_link(entry)
        category = None
    else:
        link = _resolve_rss_link(entry)
        category = _resolve_category(entry)

    return {
        "title": _resolve_title(entry),
        "description": description,
        "link": link,
        "pub_date": _resolve_pub_date(entry),
        "image_url": _resolve_image(entry, description, content),
        "category": category,
    }


def parse_pub_date(value: Any) -> datetime:
    """
    Best-effort conversion of a feed date string to an aware UTC datetime.

    Naive results are taken as UTC. Anything unparsable maps to OLDEST so it
    sorts last; this function never raises.
    """
    if not isinstance(value, str) or not value.strip():
        return OLDEST
    try:
        dt = date_parser.parse(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError, TypeError):
        return OLDEST


def parse_feed(content: bytes, source: str, *, limit: int = ITEMS_PER_FEED) -> List[NewsItem]:
    """
    Turn raw feed bytes into NewsItems tagged with `source`.

    Only the first `limit` entries are considered. A feed that cannot be parsed
    yields an empty list; an entry that cannot be converted is skipped.
    """
    try:
        shape, entries = load_entries(content)
    except FeedParseError as e:
        logger.warning("feed_parse_failed", source=source, error=str(e))
        return []

    items: List[NewsItem] = []
    for raw in entries[:limit]:
        try:
            entry = parse_entry(raw, shape)
            if not is_news_entry(entry):
                continue
            items.append(to_news_item(entry, source))
        except Exception as e:
            logger.warning("feed_entry_skipped", source=source, error=str(e))
            continue
    return items
