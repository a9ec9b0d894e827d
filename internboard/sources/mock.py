"""Mock listing source for offline use and demos."""
from __future__ import annotations

import time

from internboard.log import get_logger
from internboard.models import Listing
from internboard.sources.base import ListingSource

log = get_logger(__name__)

_DAY = 86400


class MockSource(ListingSource):
    def __init__(self, now: float | None = None) -> None:
        self.now = int(now if now is not None else time.time())

    def fetch(self) -> list[Listing]:
        log.info("MockSource generating sample listings")
        now = self.now
        return [
            Listing(
                company="Stripe",
                title="Software Engineer Intern, Backend",
                locations=["Seattle, WA", "San Francisco, CA"],
                url="https://example.com/listing/1",
                date_posted=now - 2 * _DAY,
                date_updated=now - 1 * _DAY,
                sponsorship="Offers Sponsorship",
                terms=["Summer 2026"],
            ),
            Listing(
                company="Jane Street",
                title="Quantitative Trading Intern",
                locations=["New York, NY", "London, UK"],
                url="https://example.com/listing/2",
                date_posted=now - 10 * _DAY,
                date_updated=now - 10 * _DAY,
                sponsorship="Does Not Offer Sponsorship",
                terms=["Summer 2026"],
            ),
            Listing(
                company="Mercado Libre",
                title="Mobile Developer Intern (Android/iOS)",
                locations=["Buenos Aires, Argentina"],
                url="https://example.com/listing/3",
                date_posted=now - 40 * _DAY,
                date_updated=now - 5 * _DAY,
                terms=["Summer 2026"],
            ),
            Listing(
                company="Notion",
                title="Product Manager Intern",
                locations=["Remote in USA"],
                url="https://example.com/listing/4",
                date_posted=now - 5 * _DAY,
                date_updated=now - 5 * _DAY,
            ),
            Listing(
                company="Sony",
                title="Software Engineer Intern",
                locations=["Tokyo, Japan"],
                url="https://example.com/listing/5",
                date_posted=now - 3 * _DAY,
                date_updated=now - 3 * _DAY,
            ),
            Listing(
                company="Datadog",
                title="Data Engineer Intern - Cloud Platform",
                locations=["Paris, France"],
                url="https://example.com/listing/6",
                date_posted=now - 100 * _DAY,
                date_updated=now - 60 * _DAY,
                active=False,
            ),
        ]
