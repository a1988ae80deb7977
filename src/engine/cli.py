"""Run a plan JSON file against a projects CSV without the bot or the LLM.

The plan file goes through the same normalizer as LLM output, so a malformed file selects the
default projects instead of failing.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from src.config.logging import configure_logging
from src.dataset.loader import load_records
from src.engine.executor import execute
from src.intent.normalize import DefaultPlan, normalize_plan

logger = logging.getLogger(__name__)


def select(*, csv_path: str, plan_path: str) -> list[str]:
    """Load both files and return the selected IDs."""

    records = load_records(csv_path)
    try:
        candidate = json.loads(Path(plan_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning("plan file is not valid JSON: %s", exc)
        candidate = None

    normalized = normalize_plan(candidate)
    if isinstance(normalized, DefaultPlan):
        logger.warning("using default plan reason=%s", normalized.reason)
    return execute(records, normalized.plan)


def main() -> None:
    """CLI entry point for offline project selection."""

    parser = argparse.ArgumentParser(description="Select project IDs from a CSV using a plan JSON.")
    parser.add_argument("--csv", required=True, help="Path to the projects CSV file.")
    parser.add_argument("--plan", required=True, help="Path to the plan JSON file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO).")
    args = parser.parse_args()

    configure_logging(args.log_level)
    ids = select(csv_path=args.csv, plan_path=args.plan)
    sys.stdout.write(",".join(ids) + "\n")


if __name__ == "__main__":
    main()
