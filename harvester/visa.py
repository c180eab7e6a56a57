"""Detect visa-sponsorship language on a job detail page."""
from __future__ import annotations

import re
from typing import Callable

from harvester.fetcher import CONTENT_MARKER, DEFAULT_PROXY, fetch_rendered_text, proxy_url
from harvester.log import get_logger
from harvester.models import VisaFinding, VisaStatus

log = get_logger(__name__)

EVIDENCE_BEFORE = 160
EVIDENCE_AFTER = 200

# Evaluated in this order regardless of where each phrase sits in the text.
PHRASE_GROUPS: list[tuple[re.Pattern[str], VisaStatus]] = [
    (
        re.compile(
            r"visa (sponsorship|support|assistance|provided|relocation)"
            r"|work permit support|sponsor your visa"
        ),
        VisaStatus.SPONSORSHIP_MENTIONED,
    ),
    (
        re.compile(
            r"no visa sponsorship|without sponsorship"
            r"|must have (?:eu )?work permit|not provide sponsorship"
        ),
        VisaStatus.SPONSORSHIP_DENIED,
    ),
    (re.compile(r"work permit|right to work"), VisaStatus.NOT_MENTIONED),
]


def extract_evidence(text: str, phrase: str) -> str | None:
    """Window of text around the first occurrence of *phrase*, or None."""
    clean = re.sub(r"\s+", " ", text)
    index = clean.lower().find(phrase.lower())
    if index == -1:
        return None
    start = max(0, index - EVIDENCE_BEFORE)
    return clean[start:index + EVIDENCE_AFTER].strip()


def classify_visa(body: str) -> VisaFinding:
    lower = body.lower()
    for pattern, status in PHRASE_GROUPS:
        m = pattern.search(lower)
        if m:
            return VisaFinding(status, extract_evidence(body, m.group(0)), body)
    return VisaFinding(VisaStatus.NOT_MENTIONED, None, body)


def detect_visa(
    job_url: str,
    fetch: Callable[[str], str] = fetch_rendered_text,
    proxy_base: str = DEFAULT_PROXY,
) -> VisaFinding:
    """Fetch the detail page for *job_url* and classify it. FetchError propagates."""
    text = fetch(proxy_url(job_url, proxy_base))
    body = text.split(CONTENT_MARKER)[-1]
    finding = classify_visa(body)
    log.debug("Visa %s for %s", finding.status.value, job_url)
    return finding
