from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NewsItem:
    """
    Canonical news record produced from any RSS/Atom item.

    WARNING: Do not change fields lightly. `to_dict()` is the JSON contract
    consumed by the news page.
    """
    title: str
    description: str
    link: str
    pub_date: str
    source: str
    image_url: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "pubDate": self.pub_date,
            "source": self.source,
        }
        if self.image_url is not None:
            out["imageUrl"] = self.image_url
        if self.category is not None:
            out["category"] = self.category
        return out
