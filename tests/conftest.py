"""Shared fixtures: search specs, markdown pages in the proxy's format, fake HTTP."""
from __future__ import annotations

from urllib.parse import parse_qs

import pytest

from harvester.config import Settings
from harvester.models import SearchSpec


def listing_block(
    title: str,
    url: str,
    company: str = "Acme Media",
    meta: str = "Brussels, Brussels Region, Belgium  1 week ago",
) -> str:
    return (
        f"*   [{title}]({url})\n"
        f"#### [{company}](https://be.linkedin.com/company/acme?trk=public_jobs)\n"
        f"\n"
        f" {meta}\n"
        f"\n"
        f" Be an early applicant\n"
    )


def search_page(*blocks: str) -> str:
    return (
        "Title: Jobs\n\n"
        "URL Source: https://www.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search\n\n"
        "Markdown Content:\n" + "\n".join(blocks)
    )


def detail_page(body: str) -> str:
    return f"Title: Job\n\nMarkdown Content:\n{body}\n"


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """Returns queued responses in order and records requested URLs."""

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.calls: list[str] = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeProxy:
    """Serves search pages by ``start`` offset and detail pages by job URL."""

    def __init__(self, pages: dict[int, str] | None = None, details: dict[str, str] | None = None) -> None:
        self.pages = pages or {}
        self.details = details or {}
        self.search_calls: list[int] = []
        self.detail_calls: list[str] = []

    def __call__(self, url: str) -> str:
        if "seeMoreJobPostings" in url:
            start = int(parse_qs(url.split("?", 1)[1])["start"][0])
            self.search_calls.append(start)
            return self.pages.get(start, "Markdown Content:\n")
        target = url.split("r.jina.ai/", 1)[1]
        self.detail_calls.append(target)
        value = self.details.get(target, detail_page("Join our team."))
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def belgium() -> SearchSpec:
    return SearchSpec(
        country="Belgium",
        location_query="Belgium",
        keywords="digital marketing",
        label="Digital Marketing (Belgium)",
        max_results=4,
    )


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(listing_delay=0, page_delay=0, search_delay=0)
