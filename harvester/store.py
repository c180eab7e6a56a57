"""In-memory result set for one harvest run."""
from __future__ import annotations

import unicodedata
from datetime import datetime, timezone
from typing import Any

from harvester.models import JobRecord


def collation_key(text: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering, raw text breaks ties."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), text


class ResultStore:
    """Job records keyed by canonical URL, in insertion order."""

    def __init__(self) -> None:
        self._jobs: dict[str, JobRecord] = {}

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs

    def __len__(self) -> int:
        return len(self._jobs)

    def insert_if_absent(self, record: JobRecord) -> bool:
        if record.id in self._jobs:
            return False
        self._jobs[record.id] = record
        return True

    def count_by_country(self, country: str) -> int:
        wanted = country.lower()
        return sum(1 for j in self._jobs.values() if wanted in j.country.lower())

    def sorted_records(self) -> list[JobRecord]:
        return sorted(self._jobs.values(), key=lambda j: (collation_key(j.country), collation_key(j.title)))

    def to_payload(self, generated_at: datetime | None = None) -> dict[str, Any]:
        items = self.sorted_records()
        stamp = generated_at or datetime.now(timezone.utc)
        return {
            "generatedAt": stamp.isoformat(),
            "total": len(items),
            "jobs": [j.to_dict() for j in items],
        }
