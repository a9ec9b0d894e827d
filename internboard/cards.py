"""HTML listing cards for the Streamlit pages.

Feed text is third-party input; every value is escaped before it reaches
markup rendered with ``unsafe_allow_html``.
"""
from __future__ import annotations

from html import escape

from internboard.classifier import score_tier
from internboard.export import format_posted_date
from internboard.models import AnnotatedListing

TIER_COLORS: dict[str, str] = {
    "strong": "#10b981",
    "fair": "#f59e0b",
    "weak": "#6b7280",
}


def card_html(item: AnnotatedListing) -> str:
    l = item.listing
    color = TIER_COLORS[score_tier(item.score)]
    sponsorship = f"<br/><small>{escape(l.sponsorship)}</small>" if l.sponsorship else ""
    return (
        f'<div class="listing-card" style="--tier:{color}">'
        f'<span class="score-badge">{item.score}% Match</span>'
        f"<strong>{escape(l.title)}</strong><br/>{escape(l.company)}<br/>"
        f"<small>📍 {escape(l.joined_locations())} · 📅 {format_posted_date(l.date_posted)}</small>"
        f"{sponsorship}</div>"
    )
