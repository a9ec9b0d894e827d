"""Tests for the SimplifyJobs feed client and source selection."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from internboard.classifier import annotate_all
from internboard.config import DEFAULT_FEED_URL
from internboard.sources import FeedError, MockSource, SimplifySource, get_source
from internboard.sources.simplify import parse_listings

from conftest import NOW

FEED = [
    {
        "company_name": "Stripe",
        "title": "Software Engineer Intern",
        "locations": ["Seattle, WA", "  ", "Remote"],
        "url": "https://stripe.example/apply",
        "date_posted": 1759622400,
        "date_updated": 1759708800,
        "active": True,
        "sponsorship": "Offers Sponsorship",
        "terms": ["Summer 2026"],
        "is_visible": True,
        "id": "abc-123",
    },
    {
        "company_name": "Mercado Libre",
        "title": "Backend Developer Intern",
        "locations": "Buenos Aires, Argentina",
        "active": False,
    },
]


def _response(payload=None, status_error=None, json_error=None) -> MagicMock:
    resp = MagicMock()
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


def test_parse_normalizes_locations_and_optional_fields() -> None:
    first, second = parse_listings(FEED)

    assert first.key == "Stripe-Software Engineer Intern"
    assert first.locations == ["Seattle, WA", "Remote"]
    assert first.sponsorship == "Offers Sponsorship"
    assert first.terms == ["Summer 2026"]
    assert first.raw["id"] == "abc-123"

    assert second.locations == ["Buenos Aires, Argentina"]
    assert second.active is False
    assert second.url == ""
    assert second.sponsorship is None
    assert second.date_posted == 0
    assert second.is_visible is True


def test_parse_rejects_non_list_payload() -> None:
    with pytest.raises(FeedError):
        parse_listings({"listings": FEED})


@pytest.mark.parametrize(
    "entry",
    ["not an object", {"title": "Intern"}, {"company_name": "Acme", "title": 7}],
)
def test_parse_rejects_malformed_entry(entry) -> None:
    with pytest.raises(FeedError):
        parse_listings([FEED[0], entry])


def test_fetch_success_uses_url_and_timeout() -> None:
    with patch("internboard.sources.simplify.requests.get", return_value=_response(FEED)) as get:
        listings = SimplifySource("https://feed.example/listings.json", timeout=5).fetch()

    get.assert_called_once_with("https://feed.example/listings.json", timeout=5)
    assert [l.company for l in listings] == ["Stripe", "Mercado Libre"]


def test_fetch_non_2xx_is_feed_error() -> None:
    resp = _response(status_error=requests.HTTPError("404 Client Error"))
    with patch("internboard.sources.simplify.requests.get", return_value=resp):
        with pytest.raises(FeedError):
            SimplifySource(DEFAULT_FEED_URL).fetch()


def test_fetch_network_failure_is_feed_error() -> None:
    with patch("internboard.sources.simplify.requests.get", side_effect=requests.Timeout("timed out")):
        with pytest.raises(FeedError, match="Failed to fetch job listings"):
            SimplifySource(DEFAULT_FEED_URL).fetch()


def test_fetch_invalid_json_is_feed_error() -> None:
    resp = _response(json_error=ValueError("Expecting value"))
    with patch("internboard.sources.simplify.requests.get", return_value=resp):
        with pytest.raises(FeedError):
            SimplifySource(DEFAULT_FEED_URL).fetch()


def test_get_source_prefers_mock_when_flag_set() -> None:
    env = {"USE_MOCK_FEED": "true"}
    assert isinstance(get_source(lambda k: env.get(k, "")), MockSource)


def test_get_source_defaults_to_simplify_feed() -> None:
    source = get_source(lambda k: "")
    assert isinstance(source, SimplifySource)
    assert source.url == DEFAULT_FEED_URL
    assert source.timeout == 30


def test_get_source_reads_url_and_timeout_from_env() -> None:
    env = {"FEED_URL": "https://mirror.example/listings.json", "REQUEST_TIMEOUT": "7.5"}
    source = get_source(lambda k: env.get(k, ""))
    assert source.url == "https://mirror.example/listings.json"
    assert source.timeout == 7.5


def test_mock_source_covers_each_region_and_an_inactive_listing() -> None:
    listings = MockSource(now=NOW).fetch()
    assert len(listings) == 6
    annotated = annotate_all(listings)
    assert len(annotated) == 5
    assert [a.listing.company for a in annotated if not a.region_eligible] == ["Sony"]
