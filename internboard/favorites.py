"""Starred listings, shared by the list view and the swipe session."""
from __future__ import annotations

from internboard.log import get_logger
from internboard.storage import KeyValueStore, load_key_list, save_json

log = get_logger(__name__)

FAVORITES_KEY = "favoriteJobs"


class FavoritesStore:
    """Reads through to the store on every call so other writers are always visible."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def keys(self) -> set[str]:
        return set(load_key_list(self.store, FAVORITES_KEY))

    def __contains__(self, key: object) -> bool:
        return key in self.keys()

    def __len__(self) -> int:
        return len(self.keys())

    def _save(self, keys: list[str]) -> None:
        save_json(self.store, FAVORITES_KEY, keys)

    def add(self, key: str) -> bool:
        current = load_key_list(self.store, FAVORITES_KEY)
        if key in current:
            return False
        current.append(key)
        self._save(current)
        return True

    def discard(self, key: str) -> bool:
        current = load_key_list(self.store, FAVORITES_KEY)
        if key not in current:
            return False
        current.remove(key)
        self._save(current)
        return True

    def toggle(self, key: str) -> bool:
        """Flip membership and return the new state."""
        if self.discard(key):
            log.debug("Unstarred %s", key)
            return False
        self.add(key)
        log.debug("Starred %s", key)
        return True
