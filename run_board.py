#!/usr/bin/env python3
"""Fetch the feed, apply the profile's default filters and export the result as CSV.

Usage:
  python run_board.py                 # profile defaults, exports/internships_<date>.csv
  python run_board.py --all-types     # ignore the job-type filter
  python run_board.py --out my.csv
"""
from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from internboard.log import get_logger

log = get_logger(__name__)


def _arg_value(flag: str) -> str | None:
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def main() -> int:
    from internboard.board import ListBoard
    from internboard.config import EXPORTS_DIR, ensure_dirs, get_env, get_state_path, load_profile
    from internboard.export import default_export_name, write_csv
    from internboard.favorites import FavoritesStore
    from internboard.filters import FilterConfig
    from internboard.sources import get_source
    from internboard.storage import JsonFileStore

    ensure_dirs()
    profile = load_profile()
    filters = FilterConfig.from_dict(profile.get("default_filters", {}))
    if "--all-types" in sys.argv:
        filters = replace(filters, job_type="all")

    board = ListBoard(
        source=get_source(get_env),
        favorites=FavoritesStore(JsonFileStore(get_state_path())),
        keywords=profile.get("resume_keywords"),
        filters=filters,
    )
    if not board.refresh():
        log.error("Could not load listings: %s", board.error)
        return 1

    visible = board.visible()
    out = Path(_arg_value("--out") or EXPORTS_DIR / default_export_name())
    write_csv(visible, out)

    stats = board.stats()
    log.info("Run complete.")
    log.info("  Listings loaded: %d", stats.loaded)
    log.info("  Listings shown: %d", stats.total)
    log.info("  Top match: %s", f"{stats.top_score}%" if stats.top_score is not None else "N/A")
    log.info("  Strong matches (>=50%%): %d", stats.strong_matches)
    log.info("  Export: %s", out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
