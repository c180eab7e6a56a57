"""Parse the proxy's markdown rendering of a LinkedIn guest search page.

All pattern constants for the listing format live here. Output looks like::

    Markdown Content:
    *   [Title](https://www.linkedin.com/jobs/view/...)
    #### [Company](https://www.linkedin.com/company/...)

     Brussels, Brussels Region, Belgium  1 week ago
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from harvester.fetcher import CONTENT_MARKER
from harvester.log import get_logger
from harvester.models import RawListing, SearchSpec

log = get_logger(__name__)

BLOCK_DELIMITER = "\n*   "
BLOCK_PREFIX = "*   "
JOB_PATH = "linkedin.com/jobs/view"

_TITLE_LINK = re.compile(r"\*   \[([^\]]+)\]\((https?://[^)]+)\)")
_COMPANY_LINK = re.compile(r"#### \[([^\]]+)\]\((https?://[^)]+)\)")
_META_LINE = re.compile(r"\n\n ([^\n]+)\n")
_RELATIVE_AGE = re.compile(r"\b(day|hour|week|month)s?\s+ago\b", re.IGNORECASE)
_TODAY = re.compile(r"\b(today|yesterday)\b", re.IGNORECASE)
_TRAILING_REGION = re.compile(r", *([A-Za-z ]+)$")

KNOWN_COUNTRIES: list[str] = [
    "united kingdom",
    "netherlands",
    "belgium",
    "ireland",
    "italy",
    "tunisia",
    "united states",
    "france",
    "germany",
]


@dataclass
class ParseResult:
    """Listings parsed from one page; ``marker_found`` is False on format drift."""

    listings: list[RawListing] = field(default_factory=list)
    marker_found: bool = True

    def __iter__(self) -> Iterator[RawListing]:
        return iter(self.listings)

    def __len__(self) -> int:
        return len(self.listings)

    def __bool__(self) -> bool:
        return bool(self.listings)


def infer_country(location: str) -> str | None:
    lower = location.lower()
    for country in KNOWN_COUNTRIES:
        if country in lower:
            return " ".join(w[:1].upper() + w[1:] for w in country.split(" "))
    if _TRAILING_REGION.search(location):
        return location.split(",")[-1].strip()
    return None


def _split_meta(line: str) -> list[str]:
    parts = (re.sub(r"\s+", " ", p).strip() for p in line.split("  "))
    return [p for p in parts if p]


def _posted_text(tags: list[str]) -> str:
    for pattern in (_RELATIVE_AGE, _TODAY):
        for tag in tags:
            if pattern.search(tag):
                return tag
    return ""


def _split_blocks(content: str) -> list[str]:
    blocks = []
    for i, chunk in enumerate(content.split(BLOCK_DELIMITER)):
        block = chunk.strip() if i == 0 else BLOCK_PREFIX + chunk.strip()
        if block.startswith("*"):
            blocks.append(block)
    return blocks


def _parse_block(block: str, search: SearchSpec) -> RawListing | None:
    title_match = _TITLE_LINK.search(block)
    if not title_match:
        return None
    job_url = title_match.group(2)
    if JOB_PATH not in job_url:
        return None

    company_match = _COMPANY_LINK.search(block)
    if not company_match:
        return None

    meta_match = _META_LINE.search(block)
    tags = _split_meta(meta_match.group(1).strip()) if meta_match else []
    location = tags.pop(0) if tags else search.country

    return RawListing(
        title=title_match.group(1).strip(),
        company=company_match.group(1).strip(),
        listing_url=job_url,
        company_url=company_match.group(2),
        location_text=location,
        posted_text=_posted_text(tags),
        meta_tags=tags,
        inferred_country=infer_country(location) or search.country,
        search=search,
    )


def parse_listings(document: str, search: SearchSpec) -> ParseResult:
    """Extract listings from a rendered search page. Never raises."""
    if CONTENT_MARKER not in document:
        return ParseResult(marker_found=False)
    content = document.split(CONTENT_MARKER)[-1]

    listings: list[RawListing] = []
    for block in _split_blocks(content):
        listing = _parse_block(block, search)
        if listing is not None:
            listings.append(listing)
    log.debug("Parsed %d listings for %r", len(listings), search.label)
    return ParseResult(listings=listings)
