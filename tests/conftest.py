from __future__ import annotations

import pytest

from feeds import ATOM_FEED, MALFORMED_FEED, RSS_FEED


@pytest.fixture
def rss_feed() -> bytes:
    return RSS_FEED


@pytest.fixture
def atom_feed() -> bytes:
    return ATOM_FEED


@pytest.fixture
def malformed_feed() -> bytes:
    return MALFORMED_FEED
