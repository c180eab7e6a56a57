#!/usr/bin/env python3
"""Entry point to run the job harvest and write the dataset."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from harvester.log import get_logger

log = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    from harvester.config import SEARCHES_PATH, Settings, get_output_path, load_searches
    from harvester.harvest import Harvester
    from harvester.output import write_dataset

    parser = argparse.ArgumentParser(description="Harvest LinkedIn job listings into a JSON dataset")
    parser.add_argument("--config", type=Path, default=SEARCHES_PATH, help="search list YAML")
    parser.add_argument("--output", type=Path, default=None, help="dataset path (default: HARVEST_OUTPUT or data/jobs.json)")
    args = parser.parse_args(argv)

    searches = load_searches(args.config)
    harvester = Harvester(Settings.from_env())
    harvester.run(searches)
    write_dataset(harvester.store.to_payload(), args.output or get_output_path())
    return 0


def run(argv: list[str] | None = None) -> int:
    """Exit status for the process: 0 on completion, 1 on any uncaught error."""
    try:
        return main(argv)
    except Exception:
        log.exception("Harvest failed")
        return 1


if __name__ == "__main__":
    sys.exit(run())
