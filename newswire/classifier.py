from __future__ import annotations

from typing import Any, Dict


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_news_entry(entry: Dict[str, Any]) -> bool:
    """
    Retention gate for an entry dict produced by `newswire.parser.parse_entry`.

    Only structural checks: the link must resolve to a non-empty string and the
    title must be a non-empty value. A missing title has already been replaced
    by a placeholder upstream, so in practice only an explicitly empty title or
    an unresolved link drops the item.
    """
    if not _non_empty(entry.get("link")):
        return False
    if not _non_empty(entry.get("title")):
        return False
    return True
