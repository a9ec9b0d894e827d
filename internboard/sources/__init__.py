from .base import FeedError, ListingSource
from .mock import MockSource
from .simplify import SimplifySource

from internboard.config import DEFAULT_FEED_URL
from internboard.log import get_logger

log = get_logger(__name__)

__all__ = [
    "FeedError", "ListingSource", "MockSource", "SimplifySource",
    "get_source",
]


def get_source(env_getter) -> ListingSource:
    if env_getter("USE_MOCK_FEED").lower() in ("1", "true", "yes"):
        log.info("USE_MOCK_FEED set — using MockSource")
        return MockSource()

    url = env_getter("FEED_URL") or DEFAULT_FEED_URL
    timeout = float(env_getter("REQUEST_TIMEOUT") or 30)
    log.info("Registered source: SimplifyJobs feed")
    return SimplifySource(url, timeout=timeout)
