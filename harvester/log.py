"""Centralized logging configuration — stdlib only."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(console)

    try:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = _LOG_DIR / f"harvest_{datetime.now().strftime('%Y-%m-%d')}.log"
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
        root.addHandler(fh)
    except OSError:
        pass


def trace_enabled(country: str, setting: str | None = None) -> bool:
    """True when HARVEST_TRACE ('*' or a comma list of countries) covers *country*."""
    raw = setting if setting is not None else os.environ.get("HARVEST_TRACE", "")
    wanted = {c.strip().lower() for c in raw.split(",") if c.strip()}
    if not wanted:
        return False
    return "*" in wanted or country.lower() in wanted


class TraceAdapter(logging.LoggerAdapter):
    """Skip/diagnostic channel for one search country.

    Messages go out at INFO when tracing is on for the country, DEBUG otherwise,
    so the daily log file always keeps them.
    """

    def __init__(self, logger: logging.Logger, country: str, enabled: bool) -> None:
        super().__init__(logger, {"country": country})
        self.enabled = enabled

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        return f"[{self.extra['country']}] {msg}", kwargs

    def trace(self, msg: str, *args: Any) -> None:
        self.log(logging.INFO if self.enabled else logging.DEBUG, msg, *args)


def trace_logger(name: str, country: str, setting: str | None = None) -> TraceAdapter:
    return TraceAdapter(get_logger(name), country, trace_enabled(country, setting))
