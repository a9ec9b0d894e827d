"""Streamlit UI: filterable internship list and swipe triage."""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st
from streamlit_shortcuts import shortcut_button

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from internboard.board import ListBoard
from internboard.cards import card_html
from internboard.classifier import JOB_TYPES, REGIONS
from internboard.config import ensure_dirs, get_env, get_state_path, load_profile
from internboard.export import default_export_name, to_csv_text
from internboard.favorites import FavoritesStore
from internboard.filters import POSTED_WITHIN_OPTIONS, SORT_KEYS, SPONSORSHIP_OPTIONS, FilterConfig
from internboard.log import get_logger
from internboard.sources import get_source
from internboard.storage import JsonFileStore
from internboard.swipe import SHORTCUTS, Decision, SessionState, SwipeSession

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

_JOB_TYPE_LABELS: dict[str, str] = {
    "all": "All roles",
    "software": "Software Engineering",
    "quant": "Quant / Trading",
    "pm": "Product Management",
    "other": "Other",
}

_REGION_LABELS: dict[str, str] = {
    "all": "All supported regions",
    "remote": "Remote",
    "us": "United States",
    "europe": "Europe",
    "argentina": "Argentina",
}

_SORT_LABELS: dict[str, str] = {
    "match": "Best match",
    "date": "Newest",
    "company": "Company A–Z",
}

_CSS = """
<style>
.listing-card {
    padding: 0.9rem 1.1rem;
    margin-bottom: 0.6rem;
    background: rgba(255,255,255,0.65);
    border-left: 4px solid var(--tier);
    border-radius: 10px;
    box-shadow: 0 4px 16px rgba(0,0,0,0.05);
}
.score-badge {
    float: right;
    padding: 0.15rem 0.6rem;
    border-radius: 999px;
    color: white;
    background: var(--tier);
    font-weight: 600;
    font-size: 0.85rem;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _store() -> JsonFileStore:
    if "_store" not in st.session_state:
        ensure_dirs()
        st.session_state["_store"] = JsonFileStore(get_state_path())
    return st.session_state["_store"]


def _profile() -> dict:
    if "_profile" not in st.session_state:
        st.session_state["_profile"] = load_profile()
    return st.session_state["_profile"]


def _board() -> ListBoard:
    if "board" not in st.session_state:
        profile = _profile()
        board = ListBoard(
            source=get_source(get_env),
            favorites=FavoritesStore(_store()),
            keywords=profile.get("resume_keywords"),
            filters=FilterConfig.from_dict(profile.get("default_filters", {})),
        )
        board.refresh()
        st.session_state["board"] = board
    return st.session_state["board"]


def _session() -> SwipeSession:
    if "swipe" not in st.session_state:
        session = SwipeSession(
            source=get_source(get_env),
            store=_store(),
            keywords=_profile().get("resume_keywords"),
        )
        session.refresh()
        st.session_state["swipe"] = session
    return st.session_state["swipe"]


# ── Page: Listings ───────────────────────────────────────────────────────


def page_listings() -> None:
    board = _board()
    st.header("Summer 2026 Internships")
    st.caption("Filtered for US, Europe, Argentina & Remote • Matched to your resume")

    top = st.columns([3, 1])
    if board.last_updated:
        top[0].caption(f"Last updated: {board.last_updated:%Y-%m-%d %H:%M} UTC")
    if top[1].button("🔄 Refresh", use_container_width=True, disabled=board.loading):
        board.refresh()

    f = board.filters
    with st.expander("Filters", expanded=True):
        c1, c2, c3 = st.columns(3)
        job_type = c1.selectbox(
            "Job type", JOB_TYPES, index=JOB_TYPES.index(f.job_type),
            format_func=_JOB_TYPE_LABELS.get,
        )
        region = c2.selectbox(
            "Region", REGIONS, index=REGIONS.index(f.region),
            format_func=_REGION_LABELS.get,
        )
        sort_key = c3.selectbox(
            "Sort by", SORT_KEYS, index=SORT_KEYS.index(f.sort_key),
            format_func=_SORT_LABELS.get,
        )
        c4, c5, c6 = st.columns(3)
        sponsorship = c4.selectbox(
            "Sponsorship", SPONSORSHIP_OPTIONS, index=SPONSORSHIP_OPTIONS.index(f.sponsorship),
        )
        posted_within = c5.selectbox(
            "Posted within", POSTED_WITHIN_OPTIONS, index=POSTED_WITHIN_OPTIONS.index(f.posted_within),
            format_func=lambda v: "Any time" if v == "all" else f"{v} days",
        )
        favorites_only = c6.checkbox("⭐ Favorites only", value=f.favorites_only)
        search_text = st.text_input(
            "Search", value=f.search_text,
            placeholder="Search by title, company, or location...",
        )
        min_score = st.slider("Minimum match score (%)", 0, 100, f.min_score, step=5)

    board.set_filters(
        job_type=job_type, region=region, sort_key=sort_key,
        sponsorship=sponsorship, posted_within=posted_within,
        favorites_only=favorites_only, search_text=search_text, min_score=min_score,
    )

    if board.error:
        st.error(board.error)
        if st.button("Retry"):
            board.refresh()
            st.rerun()
        return

    visible = board.visible()
    stats = board.stats()
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total jobs", stats.loaded)
    m2.metric("Showing", stats.total)
    m3.metric("Top match", f"{stats.top_score}%" if stats.top_score is not None else "N/A")
    m4.metric("Strong matches (50%+)", stats.strong_matches)

    st.download_button(
        "⬇️ Export CSV",
        data=to_csv_text(visible),
        file_name=default_export_name(),
        mime="text/csv",
        disabled=not visible,
    )

    if not visible:
        st.info("No internships match your filters.")
        if st.button("Clear Filters"):
            board.clear_filters()
            st.rerun()
        return

    favorites = board.favorites.keys()
    for item in visible:
        left, right = st.columns([12, 1])
        left.markdown(card_html(item), unsafe_allow_html=True)
        if item.listing.url:
            left.link_button("Apply Now", item.listing.url)
        star = "⭐" if item.key in favorites else "☆"
        if right.button(star, key=f"fav-{item.key}"):
            board.toggle_favorite(item.key)
            st.rerun()


# ── Page: Swipe ──────────────────────────────────────────────────────────


def page_swipe() -> None:
    session = _session()
    st.header("Job Swipe")

    c1, c2, c3 = st.columns(3)
    if c1.button("↩️ Undo", disabled=not session.history or session.cursor == 0, use_container_width=True):
        session.undo()
        st.rerun()
    if c2.button("🔄 Refresh", use_container_width=True):
        session.refresh()
        st.rerun()
    with c3.popover("🗑️ Reset All", use_container_width=True):
        st.warning("Clears every like, pass and swipe-added favourite. This cannot be undone.")
        if st.button("Yes, reset everything", type="primary"):
            session.reset()
            st.rerun()

    st.progress(int(session.progress))
    stats = session.stats
    m1, m2, m3 = st.columns(3)
    m1.metric("Liked", stats.liked)
    m2.metric("Passed", stats.passed)
    m3.metric("Remaining", stats.remaining)

    state = session.state
    if state is SessionState.LOADING:
        st.info("Loading listings…")
        return
    if state is SessionState.ERROR:
        st.error(session.error)
        return
    if state is SessionState.EXHAUSTED:
        st.success("You've reviewed all available jobs. Check your liked jobs on the Listings page!")
        return

    item = session.current
    st.markdown(card_html(item), unsafe_allow_html=True)
    if item.listing.terms:
        st.caption(" · ".join(item.listing.terms))
    if item.listing.url:
        st.link_button("View Full Description & Apply", item.listing.url)

    # ← pass, → like
    b1, b2 = st.columns(2)
    with b1:
        if shortcut_button("✖ Pass", SHORTCUTS[Decision.PASS], use_container_width=True):
            session.handle_key(SHORTCUTS[Decision.PASS])
            st.rerun()
    with b2:
        if shortcut_button("❤ Like", SHORTCUTS[Decision.LIKE], type="primary", use_container_width=True):
            session.handle_key(SHORTCUTS[Decision.LIKE])
            st.rerun()


# ── Main ─────────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)


def _wrap_listings():
    _inject_css()
    page_listings()


def _wrap_swipe():
    _inject_css()
    page_swipe()


pages = [
    st.Page(_wrap_listings, title="Listings", icon="📋", url_path="listings", default=True),
    st.Page(_wrap_swipe, title="Swipe", icon="💘", url_path="swipe"),
]

nav = st.navigation(pages)
nav.run()
