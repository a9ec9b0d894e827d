from abc import ABC, abstractmethod

from internboard.models import Listing


class FeedError(Exception):
    """The feed could not be fetched or did not have the expected shape."""


class ListingSource(ABC):
    @abstractmethod
    def fetch(self) -> list[Listing]:
        """Return every listing in the feed, or raise FeedError."""
