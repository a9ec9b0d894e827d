"""Score and classify listings against the resume keyword profile."""
from __future__ import annotations

import math
import re
from typing import Iterable, Sequence

from internboard.log import get_logger
from internboard.models import AnnotatedListing, Listing

log = get_logger(__name__)


# Hand-maintained; override with `resume_keywords` in config/profile.yaml.
RESUME_KEYWORDS: list[str] = [
    "software", "engineer", "full stack", "frontend", "backend",
    "react", "typescript", "javascript", "python", "java",
    "web development", "api", "database", "cloud", "aws",
    "machine learning", "data", "mobile", "android", "ios",
]

JOB_TYPES: tuple[str, ...] = ("all", "software", "quant", "pm", "other")

_SOFTWARE_TERMS: list[str] = [
    "software", "engineer", "developer", "swe",
    "frontend", "backend", "full stack", "fullstack",
]
_QUANT_TERMS: list[str] = ["quant", "quantitative", "trading"]

REGIONS: tuple[str, ...] = ("all", "remote", "us", "europe", "argentina")

US_KEYWORDS: list[str] = [
    "usa", "united states", "u.s.", "california", "texas", "new york",
    "washington", "massachusetts", "illinois", "georgia", "florida",
    "san francisco", "seattle", "austin", "boston", "chicago", "atlanta",
    "denver", "portland", "los angeles", "san diego", "miami", "dallas",
]

US_STATE_CODES: list[str] = [
    "al", "ak", "az", "ar", "ca", "co", "ct", "de", "fl", "ga",
    "hi", "id", "il", "in", "ia", "ks", "ky", "la", "me", "md",
    "ma", "mi", "mn", "ms", "mo", "mt", "ne", "nv", "nh", "nj",
    "nm", "ny", "nc", "nd", "oh", "ok", "or", "pa", "ri", "sc",
    "sd", "tn", "tx", "ut", "vt", "va", "wa", "wv", "wi", "wy",
    "dc",
]

EUROPE_KEYWORDS: list[str] = [
    "europe", "germany", "france", "uk", "united kingdom", "spain",
    "italy", "netherlands", "poland", "sweden", "switzerland",
    "london", "berlin", "paris", "amsterdam", "dublin", "zurich",
]

ARGENTINA_KEYWORDS: list[str] = ["argentina", "buenos aires"]

# "Austin, TX" but not "Pune, India"
_STATE_CODE_RE = re.compile(r",\s*(?:%s)(?![a-z])" % "|".join(US_STATE_CODES))

_TIER_STRONG = 70
_TIER_FAIR = 40


def _normalize(s: str) -> str:
    return (s or "").lower().strip()


def _joined(locations: str | Sequence[str]) -> str:
    if isinstance(locations, str):
        return locations.lower()
    return " ".join(locations).lower()


def match_score(listing: Listing, keywords: Sequence[str] = RESUME_KEYWORDS) -> int:
    """Percentage of resume keywords present in title + company, doubled and capped."""
    if not keywords:
        return 0
    text = f"{listing.title} {listing.company}".lower()
    matches = sum(1 for kw in dict.fromkeys(k.lower() for k in keywords) if kw in text)
    ratio = min(1.0, 2 * matches / len(keywords))
    # half-up rounding, not banker's
    return max(0, min(100, math.floor(ratio * 100 + 0.5)))


def job_type_categories(title: str) -> set[str]:
    """Categories are not exclusive; a title can be both software and quant."""
    t = _normalize(title)
    categories: set[str] = set()
    if any(term in t for term in _SOFTWARE_TERMS):
        categories.add("software")
    if any(term in t for term in _QUANT_TERMS):
        categories.add("quant")
    if "product" in t and ("manager" in t or "management" in t):
        categories.add("pm")
    return categories or {"other"}


def matches_job_type(listing: Listing, job_type: str) -> bool:
    if job_type == "all":
        return True
    return job_type in job_type_categories(listing.title)


def _is_remote(loc: str) -> bool:
    return "remote" in loc


def _is_us(loc: str) -> bool:
    return any(kw in loc for kw in US_KEYWORDS) or bool(_STATE_CODE_RE.search(loc))


def _is_europe(loc: str) -> bool:
    return any(kw in loc for kw in EUROPE_KEYWORDS)


def _is_argentina(loc: str) -> bool:
    return any(kw in loc for kw in ARGENTINA_KEYWORDS)


_REGION_CHECKS = {
    "remote": _is_remote,
    "us": _is_us,
    "europe": _is_europe,
    "argentina": _is_argentina,
}


def region_matches(locations: str | Sequence[str], region: str) -> bool:
    if region == "all":
        return True
    check = _REGION_CHECKS.get(region)
    if check is None:
        raise ValueError(f"Unknown region: {region}")
    loc = _joined(locations)
    return bool(loc) and check(loc)


def region_eligible(listing: Listing) -> bool:
    loc = _joined(listing.locations)
    if not loc.strip():
        return False
    return any(check(loc) for check in _REGION_CHECKS.values())


def score_tier(score: int) -> str:
    if score >= _TIER_STRONG:
        return "strong"
    if score >= _TIER_FAIR:
        return "fair"
    return "weak"


def annotate(listing: Listing, keywords: Sequence[str] = RESUME_KEYWORDS) -> AnnotatedListing:
    return AnnotatedListing(
        listing=listing,
        score=match_score(listing, keywords),
        region_eligible=region_eligible(listing),
    )


def annotate_all(
    listings: Iterable[Listing], keywords: Sequence[str] | None = None
) -> list[AnnotatedListing]:
    """Annotate every active, visible listing; the rest are dropped here."""
    keywords = RESUME_KEYWORDS if keywords is None else keywords
    all_listings = list(listings)
    result = [annotate(l, keywords) for l in all_listings if l.is_eligible]
    in_region = sum(1 for a in result if a.region_eligible)
    log.info(
        "Annotated %d listings → %d active, %d in supported regions",
        len(all_listings), len(result), in_region,
    )
    return result
