"""Tests for keyword scoring, job-type and region classification."""
from __future__ import annotations

import pytest

from internboard.classifier import (
    RESUME_KEYWORDS,
    annotate_all,
    job_type_categories,
    match_score,
    matches_job_type,
    region_eligible,
    region_matches,
    score_tier,
)

from conftest import make_listing


def test_default_keyword_list_has_twenty_entries() -> None:
    assert len(RESUME_KEYWORDS) == 20


def test_match_score_counts_title_and_company() -> None:
    # "software" and "engineer" → round(min(1, 2*2/20) * 100)
    assert match_score(make_listing("Software Engineer Intern", "Acme")) == 20


def test_match_score_ignores_case() -> None:
    lower = make_listing("software engineer intern", "acme")
    mixed = make_listing("SoFtWaRe ENGINEER Intern", "ACME")
    assert match_score(lower) == match_score(mixed)


def test_match_score_counts_each_keyword_once() -> None:
    listing = make_listing("Software Software Software Intern", "Acme")
    assert match_score(listing) == 10


def test_match_score_is_capped_at_100() -> None:
    title = "Software Engineer Full Stack Frontend Backend React TypeScript JavaScript Python Java API"
    assert match_score(make_listing(title, "Acme")) == 100


def test_match_score_uses_company_name() -> None:
    assert match_score(make_listing("Intern", "Cloud Data Co")) == 20


def test_match_score_with_custom_keywords_rounds_half_up() -> None:
    # 1 of 8 → 25.0; 1 of 16 → 12.5 → 13
    assert match_score(make_listing("Rust Intern"), ["rust"] + ["x"] * 7) == 25
    assert match_score(make_listing("Rust Intern"), ["rust"] + ["y"] * 15) == 13


def test_match_score_empty_keywords_is_zero() -> None:
    assert match_score(make_listing(), []) == 0


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Software Engineer Intern", {"software"}),
        ("Backend Developer Intern", {"software"}),
        ("SWE Intern", {"software"}),
        ("Quantitative Research Intern", {"quant"}),
        ("Trading Intern", {"quant"}),
        ("Quant Developer Intern", {"software", "quant"}),
        ("Product Manager Intern", {"pm"}),
        ("Product Management Intern", {"pm"}),
        ("Product Design Intern", {"other"}),
        ("Marketing Intern", {"other"}),
    ],
)
def test_job_type_categories(title: str, expected: set[str]) -> None:
    assert job_type_categories(title) == expected


def test_matches_job_type_all_and_other() -> None:
    marketing = make_listing("Marketing Intern")
    assert matches_job_type(marketing, "all")
    assert matches_job_type(marketing, "other")
    assert not matches_job_type(marketing, "software")


@pytest.mark.parametrize(
    "locations",
    [
        ["Remote"],
        ["Remote in USA"],
        ["San Francisco, CA"],
        ["Mountain View, CA", "NYC"],
        ["Madison, WI"],
        ["London, UK"],
        ["Berlin, Germany"],
        ["Buenos Aires, Argentina"],
    ],
)
def test_region_eligible_locations(locations: list[str]) -> None:
    assert region_eligible(make_listing(locations=locations))


@pytest.mark.parametrize(
    "locations",
    [["Tokyo, Japan"], ["Pune, India"], ["Toronto, ON, Canada"], [], [""]],
)
def test_region_ineligible_locations(locations: list[str]) -> None:
    assert not region_eligible(make_listing(locations=locations))


def test_remote_listing_matches_remote_region() -> None:
    assert region_matches("Remote", "remote")
    assert region_matches("Remote", "all")
    assert region_eligible(make_listing(locations=["Remote"]))


def test_region_matches_single_region() -> None:
    assert region_matches(["Austin, TX"], "us")
    assert not region_matches(["Austin, TX"], "europe")
    assert region_matches(["Dublin, Ireland"], "europe")
    assert region_matches("Buenos Aires", "argentina")
    assert not region_matches("", "us")


def test_region_matches_rejects_unknown_region() -> None:
    with pytest.raises(ValueError):
        region_matches("Remote", "asia")


def test_score_tier_thresholds() -> None:
    assert score_tier(70) == "strong"
    assert score_tier(69) == "fair"
    assert score_tier(40) == "fair"
    assert score_tier(39) == "weak"


def test_annotate_all_drops_inactive_and_hidden() -> None:
    listings = [
        make_listing("Software Engineer Intern", "A"),
        make_listing("Software Engineer Intern", "B", active=False),
        make_listing("Software Engineer Intern", "C", is_visible=False),
        make_listing("Software Engineer Intern", "D", locations=["Tokyo, Japan"]),
    ]
    annotated = annotate_all(listings)
    assert [a.listing.company for a in annotated] == ["A", "D"]
    assert [a.region_eligible for a in annotated] == [True, False]
    assert all(a.score == 20 for a in annotated)
