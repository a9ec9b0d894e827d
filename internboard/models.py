"""Data models for listings and their derived annotations."""
from __future__ import annotations

from dataclasses import dataclass, field


def listing_key(company: str, title: str) -> str:
    """Join key shared by favourites and swipe bookkeeping."""
    return f"{company}-{title}"


def normalize_locations(value: object) -> list[str]:
    """Feed locations arrive as a string or a list of strings; always return a list."""
    if value is None:
        return []
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple)):
        items = [v for v in value if isinstance(v, str)]
    else:
        return []
    return [v.strip() for v in items if v.strip()]


@dataclass
class Listing:
    company: str
    title: str
    locations: list[str]
    url: str = ""
    date_posted: int = 0
    date_updated: int = 0
    active: bool = True
    sponsorship: str | None = None
    terms: list[str] = field(default_factory=list)
    is_visible: bool = True
    raw: dict = field(default_factory=dict)

    @property
    def key(self) -> str:
        return listing_key(self.company, self.title)

    @property
    def is_eligible(self) -> bool:
        """Only active, visible listings go any further than ingestion."""
        return self.active is True and self.is_visible is not False

    def joined_locations(self, sep: str = ", ") -> str:
        return sep.join(self.locations)


@dataclass
class AnnotatedListing:
    listing: Listing
    score: int
    region_eligible: bool

    @property
    def key(self) -> str:
        return self.listing.key
