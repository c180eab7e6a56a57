"""
Harvest run: paginated searches → filter → visa enrichment → result store.

Searches run in configured order, pages in increasing offset, listings in
parse order. Everything is sequential; the only pauses are politeness delays
and the fetcher's own backoff.
"""
from __future__ import annotations

import time
from collections import Counter
from datetime import datetime, timezone
from typing import Callable

from harvester.config import Settings
from harvester.fetcher import FetchError, fetch_rendered_text, search_url
from harvester.log import get_logger, trace_logger
from harvester.models import JobRecord, RawListing, SearchSpec, VisaFinding, VisaStatus
from harvester.parser import parse_listings
from harvester.reasons import build_match_reasons
from harvester.rules import (
    canonical_url,
    is_blocked_company,
    is_relevant_title,
    is_remote,
    matches_country,
)
from harvester.store import ResultStore
from harvester.visa import detect_visa

log = get_logger(__name__)

DEFAULT_POSTED = "Recently posted"


class Harvester:
    def __init__(
        self,
        settings: Settings | None = None,
        store: ResultStore | None = None,
        fetch: Callable[[str], str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or Settings()
        self.store = store if store is not None else ResultStore()
        self.fetch = fetch or self._default_fetch
        self.sleep = sleep
        self.stats: Counter[str] = Counter()

    def _default_fetch(self, url: str) -> str:
        return fetch_rendered_text(url, timeout=self.settings.request_timeout)

    def run(self, searches: list[SearchSpec]) -> list[JobRecord]:
        for search in searches:
            if self.store.count_by_country(search.country) >= search.max_results:
                log.info("Skipping %r — %s quota already filled", search.label, search.country)
                self.stats["searches_skipped"] += 1
                continue
            self.process_search(search)
            self.sleep(self.settings.search_delay)

        log.info(
            "Run complete — accepted=%d, %s",
            len(self.store),
            ", ".join(f"{k}={v}" for k, v in sorted(self.stats.items())) or "no skips",
        )
        return self.store.sorted_records()

    def process_search(self, search: SearchSpec) -> None:
        cfg = self.settings
        trace = trace_logger(__name__, search.country, cfg.trace)
        log.info('Fetching "%s" in %s', search.keywords, search.country)

        for start in range(0, cfg.max_start + 1, cfg.page_size):
            url = search_url(search, start, cfg.proxy_base)
            try:
                text = self.fetch(url)
            except FetchError as exc:
                log.warning("Failed search fetch %s: %s", url, exc)
                break

            parsed = parse_listings(text, search)
            if not parsed.marker_found:
                trace.trace("no content marker at start=%d", start)
                break
            if not parsed:
                trace.trace("raw content snippet: %s", text[:120])
                log.info(
                    "  no parsed results for %s in %s (start=%d)",
                    search.keywords, search.country, start,
                )
                break

            for raw in parsed:
                reason = self._skip_reason(raw)
                if reason:
                    self.stats[reason] += 1
                    trace.trace("skip %s: %s => %s", reason, raw.title, raw.inferred_country)
                    continue
                if len(self.store) >= cfg.max_total_jobs:
                    trace.trace("global cap of %d reached", cfg.max_total_jobs)
                    break

                self._accept(raw)
                if self.store.count_by_country(search.country) >= search.max_results:
                    return

            self.sleep(cfg.page_delay)

    def _skip_reason(self, raw: RawListing) -> str | None:
        """First failing filter, in fixed order; None if the listing survives."""
        if "remote" in raw.title.lower():
            return "remote_title"
        if is_remote(raw.meta_tags, raw.location_text):
            return "remote_meta"
        if not is_relevant_title(raw.title):
            return "irrelevant"
        if is_blocked_company(raw.company):
            return "blocked_company"
        if canonical_url(raw.listing_url) in self.store:
            return "duplicate"
        if not matches_country(raw.inferred_country, raw.search.country):
            return "wrong_country"
        return None

    def _accept(self, raw: RawListing) -> None:
        log.info("  • %s @ %s (%s)", raw.title, raw.company, raw.location_text)
        self.sleep(self.settings.listing_delay)

        try:
            visa = detect_visa(raw.listing_url, fetch=self.fetch, proxy_base=self.settings.proxy_base)
        except FetchError as exc:
            log.warning("    visa check failed for %s: %s", raw.listing_url, exc)
            visa = VisaFinding(VisaStatus.NOT_MENTIONED)

        record = build_record(raw, visa, self.settings.source_name)
        if self.store.insert_if_absent(record):
            self.stats["accepted"] += 1
        else:
            self.stats["duplicate"] += 1


def build_record(raw: RawListing, visa: VisaFinding, source: str = "LinkedIn") -> JobRecord:
    url = canonical_url(raw.listing_url)
    return JobRecord(
        id=url,
        title=raw.title,
        company=raw.company,
        apply_url=url,
        company_url=raw.company_url,
        location=raw.location_text,
        country=raw.inferred_country,
        posted=raw.posted_text or DEFAULT_POSTED,
        meta=tuple(raw.meta_tags),
        match_reasons=tuple(build_match_reasons(raw, visa.detail_text)),
        visa_status=visa.status,
        visa_evidence=visa.evidence,
        search_label=raw.search.label,
        search_keywords=raw.search.keywords,
        source=source,
        fetched_at=datetime.now(timezone.utc).isoformat(),
    )
