"""Load search configuration and env settings."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from harvester.log import get_logger
from harvester.models import SearchSpec

log = get_logger(__name__)

ROOT: Path = Path(__file__).resolve().parent.parent

load_dotenv(ROOT / ".env")

CONFIG_DIR: Path = ROOT / "config"
SEARCHES_PATH: Path = CONFIG_DIR / "searches.yaml"
DATA_DIR: Path = ROOT / "data"
DEFAULT_OUTPUT_PATH: Path = DATA_DIR / "jobs.json"

_REQUIRED_KEYS = ("country", "location", "keywords", "label", "max_jobs")


class ConfigError(ValueError):
    """searches.yaml is missing or malformed."""


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_float(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


@dataclass
class Settings:
    proxy_base: str = "https://r.jina.ai/"
    request_timeout: float = 30.0
    listing_delay: float = 0.8
    page_delay: float = 1.4
    search_delay: float = 2.0
    page_size: int = 25
    max_start: int = 50
    max_total_jobs: int = 200
    source_name: str = "LinkedIn"
    trace: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            proxy_base=get_env("JINA_PROXY_BASE", defaults.proxy_base),
            request_timeout=_env_float("REQUEST_TIMEOUT", defaults.request_timeout),
            listing_delay=_env_float("LISTING_DELAY", defaults.listing_delay),
            page_delay=_env_float("PAGE_DELAY", defaults.page_delay),
            search_delay=_env_float("SEARCH_DELAY", defaults.search_delay),
            max_total_jobs=int(_env_float("MAX_TOTAL_JOBS", defaults.max_total_jobs)),
            trace=get_env("HARVEST_TRACE"),
        )


def get_output_path() -> Path:
    override = get_env("HARVEST_OUTPUT")
    return Path(override) if override else DEFAULT_OUTPUT_PATH


def _to_search(entry: Any, index: int) -> SearchSpec:
    if not isinstance(entry, dict):
        raise ConfigError(f"search #{index} is not a mapping")
    missing = [k for k in _REQUIRED_KEYS if entry.get(k) in (None, "")]
    if missing:
        raise ConfigError(f"search #{index} missing {', '.join(missing)}")
    try:
        max_jobs = int(entry["max_jobs"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"search #{index} has non-integer max_jobs") from exc
    return SearchSpec(
        country=str(entry["country"]).strip(),
        location_query=str(entry["location"]).strip(),
        keywords=str(entry["keywords"]).strip(),
        label=str(entry["label"]).strip(),
        max_results=max_jobs,
    )


def load_searches(path: Path | None = None) -> list[SearchSpec]:
    """Ordered search list; order decides which search fills a country first."""
    path = path or SEARCHES_PATH
    if not path.exists():
        raise ConfigError(f"search config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("searches") if isinstance(data, dict) else data
    if not entries:
        raise ConfigError(f"no searches defined in {path}")

    searches = [_to_search(e, i) for i, e in enumerate(entries, start=1)]
    log.debug("Loaded %d searches from %s", len(searches), path.name)
    return searches
