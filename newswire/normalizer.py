from __future__ import annotations

import re
from typing import Any, Dict

from .models import NewsItem

MAX_DESCRIPTION_CHARS = 200
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
# Applied in order; "&amp;lt;" therefore ends up as "<".
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def clean_description(raw: Any) -> str:
    """
    Reduce an HTML description to short plain text.

    Tags are removed with a literal pattern, a handful of common entities are
    decoded, and the result is capped at MAX_DESCRIPTION_CHARS. The ellipsis is
    appended when the raw description was longer than the cap.
    """
    if not isinstance(raw, str):
        return ""
    text = _TAG_RE.sub("", raw)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    text = text.strip()[:MAX_DESCRIPTION_CHARS]
    if len(raw) > MAX_DESCRIPTION_CHARS:
        text += ELLIPSIS
    return text


def to_news_item(entry: Dict[str, Any], source: str) -> NewsItem:
    """
    Convert a parsed entry dict into a NewsItem.
    Requires:
    - link (non-empty)
    Optional:
    - image_url, category
    """
    link = entry.get("link") or ""
    if not link:
        raise ValueError("Entry lacks required field for NewsItem: link")

    return NewsItem(
        title=entry.get("title") or "",
        description=clean_description(entry.get("description")),
        link=link,
        pub_date=entry.get("pub_date") or "",
        source=source,
        image_url=entry.get("image_url"),
        category=entry.get("category"),
    )
