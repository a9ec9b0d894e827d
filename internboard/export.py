"""Export the filtered list view as CSV."""
from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from internboard.log import get_logger
from internboard.models import AnnotatedListing

log = get_logger(__name__)

HEADERS: list[str] = [
    "Company", "Title", "Location", "Match Score",
    "Date Posted", "Sponsorship", "URL",
]


def format_posted_date(timestamp: int) -> str:
    """Epoch seconds → "Oct 5, 2025" (UTC)."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{dt:%b} {dt.day}, {dt.year}"


def _row(item: AnnotatedListing) -> list[str]:
    l = item.listing
    return [
        l.company,
        l.title,
        l.joined_locations("; "),
        str(item.score),
        format_posted_date(l.date_posted),
        l.sponsorship or "N/A",
        l.url,
    ]


def write_rows(f, listings: Iterable[AnnotatedListing]) -> int:
    writer = csv.writer(f)
    writer.writerow(HEADERS)
    count = 0
    for item in listings:
        writer.writerow(_row(item))
        count += 1
    return count


def to_csv_text(listings: Iterable[AnnotatedListing]) -> str:
    buf = io.StringIO()
    write_rows(buf, listings)
    return buf.getvalue()


def write_csv(listings: Iterable[AnnotatedListing], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        count = write_rows(f, listings)
    log.info("Exported %d listings → %s", count, path)
    return path


def default_export_name(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"internships_{now.strftime('%Y-%m-%d')}.csv"
