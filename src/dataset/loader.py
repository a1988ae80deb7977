"""Load the project portfolio CSV into records.

The CSV is expected to have a header row. Empty lines are skipped, short rows are padded with empty
strings, and duplicate column names are rejected.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from src.dataset.records import Record
from src.engine.coercion import parse_amount


class DatasetError(ValueError):
    """Raised when the dataset file has an unexpected shape."""


@dataclass(frozen=True)
class DatasetSummary:
    """Aggregate facts about the dataset, used to ground the intent prompt."""

    total: int
    organizational_units: tuple[str, ...]
    strategic_categories: tuple[str, ...]
    min_benefit: int
    max_benefit: int


def load_records_from_csv_text(text: str) -> list[Record]:
    """Parse CSV text into records, preserving row and column order."""

    reader = csv.reader(io.StringIO(text))
    header: list[str] | None = None
    records: list[Record] = []

    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        if header is None:
            header = [cell.strip() for cell in row]
            duplicates = sorted({c for c in header if header.count(c) > 1})
            if duplicates:
                raise DatasetError(f"Duplicate column names: {', '.join(duplicates)}")
            continue

        cells = row + [""] * (len(header) - len(row))
        records.append(Record(data=dict(zip(header, cells))))

    if header is None:
        raise DatasetError("Dataset is empty: expected a header row")
    return records


def load_records(path: str | Path) -> list[Record]:
    """Load records from a CSV file (UTF-8, optional BOM)."""

    return load_records_from_csv_text(Path(path).read_text(encoding="utf-8-sig"))


def _distinct(values: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(v for v in values if v))


def summarize_dataset(records: Sequence[Record]) -> DatasetSummary:
    benefits = [parse_amount(r.benefit) for r in records if r.benefit]
    return DatasetSummary(
        total=len(records),
        organizational_units=_distinct([r.organizational_unit for r in records]),
        strategic_categories=_distinct([r.strategic_category for r in records]),
        min_benefit=min(benefits, default=0),
        max_benefit=max(benefits, default=0),
    )
