from __future__ import annotations

from typing import Optional


class NewswireError(Exception):
    """Base class for errors raised inside the aggregation pipeline."""


class FeedFetchError(NewswireError):
    """Raised when a feed cannot be fetched (network, status or deadline)."""

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FeedParseError(NewswireError):
    """Raised when a whole feed document cannot be parsed into entries."""
