"""Retry decorator with linear backoff for rate-limited calls — stdlib only."""
from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


class RateLimited(Exception):
    """Raised by a wrapped call when upstream throttled it.

    *base_delay* is in seconds; attempt *n* waits ``base_delay * n``.
    """

    def __init__(self, reason: str, base_delay: float) -> None:
        super().__init__(reason)
        self.reason = reason
        self.base_delay = base_delay


class RetryLimitReached(Exception):
    def __init__(self, last: RateLimited, attempts: int) -> None:
        super().__init__(f"gave up after {attempts} attempts: {last.reason}")
        self.last = last
        self.attempts = attempts


def retry(*, max_retries: int = 4) -> Callable:
    """Decorator: re-invokes the wrapped function while it raises RateLimited.

    The first call is attempt 1; up to *max_retries* further attempts follow.
    A rate limit on the final attempt raises RetryLimitReached.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except RateLimited as exc:
                    if attempt > max_retries:
                        logger.error(
                            "%s rate limited %d times, giving up (%s)",
                            fn.__qualname__,
                            attempt,
                            exc.reason,
                        )
                        raise RetryLimitReached(exc, attempt) from exc
                    delay = exc.base_delay * attempt
                    logger.warning(
                        "%s (attempt %d) – retrying in %.1fs",
                        exc.reason,
                        attempt,
                        delay,
                    )
                    time.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator
