"""Pure classification rules applied to parsed listings."""
from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

RELEVANT_KEYWORDS: list[str] = [
    "marketing", "content", "social", "video", "digital",
    "creative", "communications", "community", "seo", "brand",
]

# Checked after RELEVANT_KEYWORDS and always wins
EXCLUDED_KEYWORDS: list[str] = [
    "engineer", "engineering", "developer", "scientist",
    "medical writer", "nurse", "physician", "chemist",
]

REMOTE_MARKERS: list[str] = ["remote", "work from home"]

BLOCKED_COMPANIES: list[str] = ["twine"]


def is_remote(meta: list[str], location: str) -> bool:
    text = f"{location} {' '.join(meta)}".lower()
    return any(marker in text for marker in REMOTE_MARKERS)


def is_relevant_title(title: str) -> bool:
    t = title.lower()
    if not any(k in t for k in RELEVANT_KEYWORDS):
        return False
    return not any(k in t for k in EXCLUDED_KEYWORDS)


def matches_country(inferred: str, wanted: str) -> bool:
    """Substring, so an inferred region name containing the country still passes."""
    return wanted.lower() in inferred.lower()


def is_blocked_company(company: str) -> bool:
    name = company.lower()
    return any(b in name for b in BLOCKED_COMPANIES)


def canonical_url(url: str) -> str:
    """Listing URL without query string or fragment; the dedup key."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
