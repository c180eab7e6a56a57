"""Write the harvested dataset to disk."""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from harvester.log import get_logger

log = get_logger(__name__)


def write_dataset(payload: dict[str, Any], path: Path) -> Path:
    """Replace *path* atomically; a failed write leaves the old file in place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    log.info("Saved %d jobs to %s", payload.get("total", 0), path)
    return path
