"""Swipe triage: like/pass/undo over a ranked queue with persisted history.

State is derived, never stored separately:

  LOADING    a fetch is outstanding
  ERROR      the last fetch failed; refresh() to retry
  REVIEWING  cursor < len(queue)
  EXHAUSTED  cursor == len(queue)

``decided`` is always computed from ``history``, so the two cannot drift.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from internboard.classifier import annotate_all, matches_job_type
from internboard.favorites import FavoritesStore
from internboard.filters import sort_listings
from internboard.log import get_logger
from internboard.models import AnnotatedListing, Listing
from internboard.sources.base import FeedError, ListingSource
from internboard.storage import KeyValueStore, load_json, load_key_list, save_json

log = get_logger(__name__)

LIKED_KEY = "swipeLikedJobs"
PASSED_KEY = "swipePassedJobs"
HISTORY_KEY = "swipeHistory"


class SessionState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    REVIEWING = "reviewing"
    EXHAUSTED = "exhausted"


class Decision(str, Enum):
    LIKE = "like"
    PASS = "pass"


# matched case-insensitively: browsers send "ArrowLeft", shortcut hooks "arrowleft"
_KEY_BINDINGS: dict[str, Decision] = {
    "arrowleft": Decision.PASS,
    "left": Decision.PASS,
    "arrowright": Decision.LIKE,
    "right": Decision.LIKE,
}

# shortcut bound to each decision button in the UI
SHORTCUTS: dict[Decision, str] = {
    Decision.PASS: "arrowleft",
    Decision.LIKE: "arrowright",
}


@dataclass(frozen=True)
class HistoryEntry:
    job_key: str
    action: Decision
    timestamp: int  # epoch milliseconds
    added_favorite: bool = False

    def to_dict(self) -> dict:
        return {
            "jobKey": self.job_key,
            "action": self.action.value,
            "timestamp": self.timestamp,
            "addedFavorite": self.added_favorite,
        }

    @classmethod
    def from_dict(cls, data: object) -> HistoryEntry | None:
        if not isinstance(data, dict):
            return None
        key = data.get("jobKey")
        try:
            action = Decision(data.get("action"))
        except ValueError:
            return None
        if not isinstance(key, str):
            return None
        ts = data.get("timestamp")
        added = data.get("addedFavorite")
        if not isinstance(added, bool):
            # entries written before the flag existed: every like added a favourite
            added = action is Decision.LIKE
        return cls(
            job_key=key,
            action=action,
            timestamp=ts if isinstance(ts, int) else 0,
            added_favorite=added and action is Decision.LIKE,
        )


@dataclass(frozen=True)
class SwipeStats:
    liked: int
    passed: int
    remaining: int


class SwipeSession:
    def __init__(
        self,
        source: ListingSource,
        store: KeyValueStore,
        favorites: FavoritesStore | None = None,
        keywords: Sequence[str] | None = None,
        job_type: str = "all",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.store = store
        self.favorites = favorites or FavoritesStore(store)
        self.keywords = keywords
        self.job_type = job_type
        self.clock = clock
        self.error: str | None = None

        self._queue: tuple[AnnotatedListing, ...] = ()
        self._cursor = 0
        self._loading = True
        self._generation = 0
        self._history: list[HistoryEntry] = self._load_history()

    # ── persisted state ───────────────────────────────────────────────

    def _load_history(self) -> list[HistoryEntry]:
        raw = load_json(self.store, HISTORY_KEY, [])
        parsed = [HistoryEntry.from_dict(d) for d in raw] if isinstance(raw, list) else []

        # keep the latest entry per key
        by_key: dict[str, HistoryEntry] = {}
        for entry in parsed:
            if entry is not None:
                by_key.pop(entry.job_key, None)
                by_key[entry.job_key] = entry
        entries = list(by_key.values())

        orphans: list[HistoryEntry] = []
        seen = set(by_key)
        for key_name, action in ((LIKED_KEY, Decision.LIKE), (PASSED_KEY, Decision.PASS)):
            for key in load_key_list(self.store, key_name):
                if key not in seen:
                    seen.add(key)
                    orphans.append(HistoryEntry(key, action, 0, False))
        if orphans:
            log.debug("Recovered %d decisions missing from swipe history", len(orphans))
        return orphans + entries

    def _persist(self) -> None:
        liked = [e.job_key for e in self._history if e.action is Decision.LIKE]
        passed = [e.job_key for e in self._history if e.action is Decision.PASS]
        save_json(self.store, LIKED_KEY, liked)
        save_json(self.store, PASSED_KEY, passed)
        save_json(self.store, HISTORY_KEY, [e.to_dict() for e in self._history])

    # ── read-only views ───────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        if self._loading:
            return SessionState.LOADING
        if self.error is not None:
            return SessionState.ERROR
        if self._cursor >= len(self._queue):
            return SessionState.EXHAUSTED
        return SessionState.REVIEWING

    @property
    def queue(self) -> tuple[AnnotatedListing, ...]:
        return self._queue

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> AnnotatedListing | None:
        if self.state is not SessionState.REVIEWING:
            return None
        return self._queue[self._cursor]

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    @property
    def decided(self) -> dict[str, Decision]:
        return {e.job_key: e.action for e in self._history}

    @property
    def remaining(self) -> int:
        return max(0, len(self._queue) - self._cursor)

    @property
    def progress(self) -> float:
        if not self._queue:
            return 0.0
        return self._cursor / len(self._queue) * 100

    @property
    def stats(self) -> SwipeStats:
        decided = self.decided
        liked = sum(1 for d in decided.values() if d is Decision.LIKE)
        return SwipeStats(liked=liked, passed=len(decided) - liked, remaining=self.remaining)

    # ── fetch lifecycle ───────────────────────────────────────────────

    def begin_fetch(self) -> int:
        """Enter LOADING; the returned token must accompany the completion."""
        self._generation += 1
        self._loading = True
        return self._generation

    def complete_fetch(self, token: int, listings: Sequence[Listing]) -> bool:
        if token != self._generation:
            log.debug("Discarding superseded fetch %d (latest %d)", token, self._generation)
            return False
        decided = self.decided
        ranked = sort_listings(
            (
                a for a in annotate_all(listings, self.keywords)
                if a.region_eligible and matches_job_type(a.listing, self.job_type)
            ),
            "match",
        )
        queue: list[AnnotatedListing] = []
        seen: set[str] = set()
        for item in ranked:
            if item.key in decided or item.key in seen:
                continue
            seen.add(item.key)
            queue.append(item)

        self._queue = tuple(queue)
        self._cursor = 0
        self._loading = False
        self.error = None
        log.info("Swipe queue ready: %d to review, %d already decided", len(queue), len(decided))
        return True

    def fail_fetch(self, token: int, message: str) -> bool:
        if token != self._generation:
            return False
        self._queue = ()
        self._cursor = 0
        self._loading = False
        self.error = message
        return True

    def refresh(self) -> SessionState:
        token = self.begin_fetch()
        try:
            listings = self.source.fetch()
        except FeedError as exc:
            log.error("Swipe session fetch failed: %s", exc)
            self.fail_fetch(token, str(exc))
            return self.state
        self.complete_fetch(token, listings)
        return self.state

    # ── commands ──────────────────────────────────────────────────────

    def decide(self, action: Decision | str) -> AnnotatedListing | None:
        action = Decision(action)
        if self.state is not SessionState.REVIEWING:
            log.debug("Ignoring %s while %s", action.value, self.state.value)
            return None

        item = self._queue[self._cursor]
        added = self.favorites.add(item.key) if action is Decision.LIKE else False
        self._history.append(
            HistoryEntry(
                job_key=item.key,
                action=action,
                timestamp=int(self.clock() * 1000),
                added_favorite=added,
            )
        )
        self._cursor += 1
        self._persist()
        log.info("%s %s (%d/%d)", action.value, item.key, self._cursor, len(self._queue))
        return item

    def undo(self) -> HistoryEntry | None:
        if self._loading or not self._history or self._cursor == 0:
            log.debug("Nothing to undo")
            return None
        entry = self._history.pop()
        if entry.added_favorite:
            self.favorites.discard(entry.job_key)
        self._cursor -= 1
        self._persist()
        log.info("Undid %s %s", entry.action.value, entry.job_key)
        return entry

    def reset(self) -> SessionState:
        """Forget every decision and the favourites that likes created, then reload.

        Listings starred by hand in the list view stay starred.
        """
        removed = 0
        for entry in self._history:
            if entry.added_favorite and self.favorites.discard(entry.job_key):
                removed += 1
        self._history = []
        self._cursor = 0
        for key_name in (LIKED_KEY, PASSED_KEY, HISTORY_KEY):
            self.store.delete(key_name)
        log.info("Swipe session reset; removed %d swipe favourites", removed)
        return self.refresh()

    def handle_key(self, key: str) -> AnnotatedListing | None:
        action = _KEY_BINDINGS.get(key.lower())
        if action is None:
            return None
        return self.decide(action)
