"""Data models for searches, parsed listings and persisted job records."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class SearchSpec:
    country: str
    location_query: str
    keywords: str
    label: str
    max_results: int


@dataclass
class RawListing:
    title: str
    company: str
    listing_url: str
    location_text: str
    inferred_country: str
    search: SearchSpec
    company_url: str | None = None
    posted_text: str = ""
    meta_tags: list[str] = field(default_factory=list)


class VisaStatus(str, Enum):
    SPONSORSHIP_MENTIONED = "Yes"
    SPONSORSHIP_DENIED = "No"
    NOT_MENTIONED = "Not mentioned"


@dataclass
class VisaFinding:
    status: VisaStatus
    evidence: str | None = None
    detail_text: str = ""


@dataclass(frozen=True)
class JobRecord:
    id: str
    title: str
    company: str
    apply_url: str
    location: str
    country: str
    posted: str
    meta: tuple[str, ...]
    match_reasons: tuple[str, ...]
    visa_status: VisaStatus
    search_label: str
    search_keywords: str
    source: str
    fetched_at: str
    company_url: str | None = None
    visa_evidence: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Shape read by the job browser; empty optional keys are omitted."""
        visa: dict[str, Any] = {"status": self.visa_status.value}
        if self.visa_evidence:
            visa["evidence"] = self.visa_evidence
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "applyUrl": self.apply_url,
        }
        if self.company_url:
            out["companyUrl"] = self.company_url
        out.update(
            {
                "location": self.location,
                "country": self.country,
                "posted": self.posted,
                "meta": list(self.meta),
                "matchReasons": list(self.match_reasons),
                "visa": visa,
                "searchLabel": self.search_label,
                "searchKeywords": self.search_keywords,
                "source": self.source,
                "fetchedAt": self.fetched_at,
            }
        )
        return out
