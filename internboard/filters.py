"""Composite filter and sort over annotated listings."""
from __future__ import annotations

import time
import unicodedata
from dataclasses import dataclass, replace
from typing import Collection, Iterable

from internboard.classifier import JOB_TYPES, REGIONS, matches_job_type, region_matches
from internboard.models import AnnotatedListing

SPONSORSHIP_OPTIONS: tuple[str, ...] = ("all", "sponsors", "no-sponsors")
POSTED_WITHIN_OPTIONS: tuple = ("all", 7, 30, 90)
SORT_KEYS: tuple[str, ...] = ("match", "date", "company")

_DAY_SECONDS = 86400


@dataclass(frozen=True)
class FilterConfig:
    """User-chosen predicates for the list view. Every field narrows conjunctively."""

    search_text: str = ""
    min_score: int = 0
    job_type: str = "software"
    region: str = "all"
    sponsorship: str = "all"
    posted_within: int | str = "all"
    favorites_only: bool = False
    sort_key: str = "match"

    def __post_init__(self) -> None:
        if not 0 <= self.min_score <= 100:
            raise ValueError(f"min_score must be between 0 and 100, got {self.min_score}")
        if self.job_type not in JOB_TYPES:
            raise ValueError(f"Unknown job type: {self.job_type}")
        if self.region not in REGIONS:
            raise ValueError(f"Unknown region: {self.region}")
        if self.sponsorship not in SPONSORSHIP_OPTIONS:
            raise ValueError(f"Unknown sponsorship option: {self.sponsorship}")
        if self.posted_within not in POSTED_WITHIN_OPTIONS:
            raise ValueError(f"posted_within must be one of {POSTED_WITHIN_OPTIONS}, got {self.posted_within!r}")
        if self.sort_key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {self.sort_key}")

    @classmethod
    def from_dict(cls, data: dict) -> FilterConfig:
        """Build from profile.yaml `default_filters`; unknown keys are ignored."""
        known = {f for f in cls.__dataclass_fields__}
        values = {k: v for k, v in (data or {}).items() if k in known}
        if "posted_within" in values and str(values["posted_within"]).isdigit():
            values["posted_within"] = int(values["posted_within"])
        if "min_score" in values:
            values["min_score"] = int(values["min_score"])
        return cls(**values)

    def cleared(self) -> FilterConfig:
        """Drop every narrowing predicate but keep job type and sort order."""
        return replace(
            self,
            search_text="",
            min_score=0,
            region="all",
            sponsorship="all",
            posted_within="all",
            favorites_only=False,
        )


def _matches_search(item: AnnotatedListing, needle: str) -> bool:
    if not needle:
        return True
    l = item.listing
    return (
        needle in l.title.lower()
        or needle in l.company.lower()
        or needle in l.joined_locations().lower()
    )


def _matches_sponsorship(item: AnnotatedListing, option: str) -> bool:
    if option == "all":
        return True
    sponsors = "sponsor" in (item.listing.sponsorship or "").lower()
    return sponsors if option == "sponsors" else not sponsors


def _matches_recency(item: AnnotatedListing, posted_within: int | str, now: float) -> bool:
    if posted_within == "all":
        return True
    return now - item.listing.date_posted <= int(posted_within) * _DAY_SECONDS


def _company_sort_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def sort_listings(listings: Iterable[AnnotatedListing], sort_key: str = "match") -> list[AnnotatedListing]:
    if sort_key == "match":
        return sorted(listings, key=lambda a: -a.score)
    if sort_key == "date":
        return sorted(listings, key=lambda a: -a.listing.date_posted)
    if sort_key == "company":
        return sorted(listings, key=lambda a: _company_sort_key(a.listing.company))
    raise ValueError(f"Unknown sort key: {sort_key}")


def apply_filters(
    listings: Iterable[AnnotatedListing],
    config: FilterConfig,
    favorites: Collection[str] = (),
    now: float | None = None,
) -> list[AnnotatedListing]:
    now = time.time() if now is None else now
    needle = config.search_text.lower()
    result = [
        a for a in listings
        if a.region_eligible
        and matches_job_type(a.listing, config.job_type)
        and _matches_search(a, needle)
        and a.score >= config.min_score
        and region_matches(a.listing.locations, config.region)
        and _matches_sponsorship(a, config.sponsorship)
        and _matches_recency(a, config.posted_within, now)
        and (not config.favorites_only or a.key in favorites)
    ]
    return sort_listings(result, config.sort_key)
