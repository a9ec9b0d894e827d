"""
List view controller.

Runs: fetch → annotate → filter/sort against the active FilterConfig, with
favourites toggled in place. A failed fetch leaves the board empty with an
error message; refresh() is the retry.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from internboard.classifier import annotate_all
from internboard.favorites import FavoritesStore
from internboard.filters import FilterConfig, apply_filters
from internboard.log import get_logger
from internboard.models import AnnotatedListing, Listing
from internboard.sources.base import FeedError, ListingSource

log = get_logger(__name__)

STRONG_MATCH_SCORE = 50


@dataclass(frozen=True)
class BoardStats:
    loaded: int  # region-eligible listings from the last fetch, before filters
    total: int
    top_score: int | None
    strong_matches: int


class ListBoard:
    def __init__(
        self,
        source: ListingSource,
        favorites: FavoritesStore,
        keywords: Sequence[str] | None = None,
        filters: FilterConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.favorites = favorites
        self.keywords = keywords
        self.filters = filters or FilterConfig()
        self.clock = clock
        self.listings: list[AnnotatedListing] = []
        self.loading = False
        self.error: str | None = None
        self.last_updated: datetime | None = None
        self._generation = 0

    def begin_fetch(self) -> int:
        self._generation += 1
        self.loading = True
        return self._generation

    def complete_fetch(self, token: int, listings: Sequence[Listing]) -> bool:
        if token != self._generation:
            log.debug("Discarding superseded fetch %d (latest %d)", token, self._generation)
            return False
        # replaced wholesale, never merged with the previous fetch
        self.listings = annotate_all(listings, self.keywords)
        self.loading = False
        self.error = None
        self.last_updated = datetime.fromtimestamp(self.clock(), tz=timezone.utc)
        return True

    def fail_fetch(self, token: int, message: str) -> bool:
        if token != self._generation:
            return False
        self.listings = []
        self.loading = False
        self.error = message
        return True

    def refresh(self) -> bool:
        token = self.begin_fetch()
        try:
            listings = self.source.fetch()
        except FeedError as exc:
            log.error("Board fetch failed: %s", exc)
            self.fail_fetch(token, str(exc))
            return False
        self.complete_fetch(token, listings)
        log.info("Board refreshed — %d listings, %d visible", len(self.listings), len(self.visible()))
        return True

    def set_filters(self, **changes: Any) -> FilterConfig:
        """Apply filter changes; switching job type triggers a fresh fetch."""
        new = replace(self.filters, **changes)
        job_type_changed = new.job_type != self.filters.job_type
        self.filters = new
        if job_type_changed:
            log.info("Job type → %s, refetching", new.job_type)
            self.refresh()
        return new

    def clear_filters(self) -> FilterConfig:
        self.filters = self.filters.cleared()
        return self.filters

    def visible(self) -> list[AnnotatedListing]:
        return apply_filters(
            self.listings,
            self.filters,
            favorites=self.favorites.keys(),
            now=self.clock(),
        )

    def toggle_favorite(self, key: str) -> bool:
        return self.favorites.toggle(key)

    def stats(self) -> BoardStats:
        shown = self.visible()
        return BoardStats(
            loaded=sum(1 for a in self.listings if a.region_eligible),
            total=len(shown),
            top_score=max((a.score for a in shown), default=None),
            strong_matches=sum(1 for a in shown if a.score >= STRONG_MATCH_SCORE),
        )
