"""Deterministic intent executor.

The executor applies a normalized `QueryPlan` to an in-memory record set:

    filter (AND of criteria) -> sort (numeric columns only, stable) -> limit -> include/exclude

and returns the selected project IDs. It holds no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from src.dataset.records import Record, as_record
from src.engine.coercion import parse_amount
from src.engine.columns import is_numeric_column
from src.engine.criteria import matches_all
from src.intent.schema import Operation, QueryPlan, SortBy

logger = logging.getLogger(__name__)


class ExecutionError(ValueError):
    """Raised when the record set cannot be processed at all."""


def _as_records(rows: Iterable[Mapping[str, str]]) -> list[Record]:
    try:
        return [as_record(row) for row in rows]
    except TypeError as exc:
        raise ExecutionError(str(exc)) from exc


def _sort(records: list[Record], sort_by: SortBy | None) -> list[Record]:
    if sort_by is None:
        return records
    if not is_numeric_column(sort_by.column):
        # TODO: decide whether string columns should sort lexicographically; kept as a no-op.
        logger.debug("sort ignored column=%s (not numeric)", sort_by.column)
        return records

    # `sorted` is stable for both directions, ties keep dataset order.
    return sorted(
        records,
        key=lambda r: parse_amount(r.raw(sort_by.column)),
        reverse=sort_by.descending,
    )


def _unique_ids(records: Iterable[Record]) -> list[str]:
    seen: set[str] = set()
    ids: list[str] = []
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        ids.append(record.id)
    return ids


def execute(rows: Sequence[Mapping[str, str]], plan: QueryPlan) -> list[str]:
    """Execute a plan against the dataset and return the selected IDs.

    Contract:
        - An empty plan (no criteria, sort or limit) selects nothing.
        - `include` returns the matched IDs in working-set order.
        - `exclude` returns every dataset ID (in dataset order) that was not matched.
        - The result is always a subset of the dataset IDs.
    """

    if plan.is_empty:
        return []

    records = _as_records(rows)

    working_set = [r for r in records if matches_all(r, plan.criteria)]
    working_set = _sort(working_set, plan.sort_by)
    if plan.limit is not None:
        working_set = working_set[: plan.limit]

    target_ids = _unique_ids(working_set)
    if plan.operation == Operation.include:
        return target_ids

    excluded = set(target_ids)
    return [r.id for r in records if r.id not in excluded]
