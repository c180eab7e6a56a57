"""Fetch pages as plain text through the r.jina.ai rendering proxy.

The proxy sometimes wraps an upstream 429 in a 200 whose body carries the
error text, so rate limits are detected both from the status code and from
marker phrases in the body.
"""
from __future__ import annotations

import re
from urllib.parse import urlencode

import requests

from harvester.log import get_logger
from harvester.models import SearchSpec
from harvester.retry import RateLimited, RetryLimitReached, retry

log = get_logger(__name__)

DEFAULT_PROXY = "https://r.jina.ai/"
SEARCH_ENDPOINT = "https://www.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search"
CONTENT_MARKER = "Markdown Content:"

MAX_RETRIES = 4
STATUS_BASE_DELAY = 3.0
BODY_BASE_DELAY = 4.0

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/129.0.0.0 Safari/537.36"
    ),
    "Accept": "text/plain, text/markdown, */*",
}

_RATE_LIMIT_BODY = re.compile(r"HTTP ERROR 429|Too Many Requests", re.IGNORECASE)


class FetchError(Exception):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class RetriesExhausted(FetchError):
    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(url, f"Exceeded retry attempts for {url} ({attempts} attempts)")
        self.attempts = attempts


class HttpError(FetchError):
    def __init__(self, url: str, status: int, reason: str = "") -> None:
        super().__init__(url, f"Failed to fetch {url}: {status} {reason}".rstrip())
        self.status = status


def proxy_url(target: str, proxy_base: str = DEFAULT_PROXY) -> str:
    return proxy_base.rstrip("/") + "/" + target


def search_url(search: SearchSpec, start: int, proxy_base: str = DEFAULT_PROXY) -> str:
    params = {
        "keywords": search.keywords,
        "location": search.location_query,
        "f_TPR": "r604800",  # posted in the last 7 days
        "f_WT": "2",
        "start": str(start),
    }
    return proxy_url(f"{SEARCH_ENDPOINT}?{urlencode(params)}", proxy_base)


@retry(max_retries=MAX_RETRIES)
def _get_once(url: str, http, timeout: float) -> str:
    try:
        r = http.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(url, f"Request to {url} failed: {exc}") from exc

    if r.status_code == 429:
        raise RateLimited(f"429 for {url}", STATUS_BASE_DELAY)
    payload = r.text
    if _RATE_LIMIT_BODY.search(payload):
        raise RateLimited(f"429 content for {url}", BODY_BASE_DELAY)
    if not 200 <= r.status_code < 300:
        raise HttpError(url, r.status_code, getattr(r, "reason", "") or "")
    return payload


def fetch_rendered_text(url: str, session=None, timeout: float = 30.0) -> str:
    """GET *url* and return the body text.

    Raises RetriesExhausted when rate limiting outlasts the retry budget and
    HttpError for any other non-2xx response.
    """
    http = session or requests
    try:
        return _get_once(url, http, timeout)
    except RetryLimitReached as exc:
        raise RetriesExhausted(url, exc.attempts) from exc
