from __future__ import annotations

import os

os.environ.setdefault("LOG_TO_FILE", "false")

from typing import Sequence

import pytest

from internboard.models import Listing
from internboard.sources.base import FeedError, ListingSource
from internboard.storage import MemoryStore

NOW = 1_760_000_000  # fixed "now" in epoch seconds
DAY = 86400


def make_listing(
    title: str = "Software Engineer Intern",
    company: str = "Acme",
    locations: Sequence[str] = ("Remote",),
    **kwargs,
) -> Listing:
    kwargs.setdefault("url", f"https://jobs.example/{company}/{title}".replace(" ", "-"))
    kwargs.setdefault("date_posted", NOW - DAY)
    kwargs.setdefault("date_updated", NOW - DAY)
    return Listing(company=company, title=title, locations=list(locations), **kwargs)


class FakeSource(ListingSource):
    def __init__(self, listings: Sequence[Listing] = (), error: str | None = None) -> None:
        self.listings = list(listings)
        self.error = error
        self.calls = 0

    def fetch(self) -> list[Listing]:
        self.calls += 1
        if self.error:
            raise FeedError(self.error)
        return list(self.listings)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock():
    return lambda: float(NOW)
