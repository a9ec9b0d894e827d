"""SimplifyJobs internship feed: the public listings.json on GitHub (no key required).

Repo: https://github.com/SimplifyJobs/Summer2026-Internships
"""
from __future__ import annotations

import requests

from internboard.log import get_logger
from internboard.models import Listing, normalize_locations
from internboard.sources.base import FeedError, ListingSource

log = get_logger(__name__)


def _as_int(value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def _to_listing(hit: object, index: int) -> Listing:
    if not isinstance(hit, dict):
        raise FeedError(f"Entry {index} is not an object: {type(hit).__name__}")
    company = hit.get("company_name")
    title = hit.get("title")
    if not isinstance(company, str) or not isinstance(title, str):
        raise FeedError(f"Entry {index} is missing company_name or title")

    sponsorship = hit.get("sponsorship")
    terms = hit.get("terms") or []
    return Listing(
        company=company,
        title=title,
        locations=normalize_locations(hit.get("locations")),
        url=hit.get("url") or "",
        date_posted=_as_int(hit.get("date_posted")),
        date_updated=_as_int(hit.get("date_updated")),
        active=hit.get("active") is True,
        sponsorship=sponsorship if isinstance(sponsorship, str) and sponsorship else None,
        terms=[t for t in terms if isinstance(t, str)] if isinstance(terms, list) else [],
        is_visible=hit.get("is_visible") is not False,
        raw=hit,
    )


def parse_listings(data: object) -> list[Listing]:
    """Whole payload or nothing; one bad entry fails the fetch."""
    if not isinstance(data, list):
        raise FeedError(f"Unexpected feed payload shape: {type(data).__name__}")
    return [_to_listing(hit, i) for i, hit in enumerate(data)]


class SimplifySource(ListingSource):
    def __init__(self, url: str, timeout: float = 30) -> None:
        self.url = url
        self.timeout = timeout

    def fetch(self) -> list[Listing]:
        log.info("Fetching listings from %s", self.url)
        try:
            r = requests.get(self.url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise FeedError(f"Failed to fetch job listings: {exc}") from exc

        try:
            data = r.json()
        except ValueError as exc:
            raise FeedError(f"Feed returned invalid JSON: {exc}") from exc

        listings = parse_listings(data)
        log.info("Feed returned %d listings", len(listings))
        return listings
