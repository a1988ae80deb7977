"""Criterion evaluation against a single record.

Evaluation is pure and fail-closed. A missing column or comparison, a structured (list or object)
value, an incomparable pair of values, or an unknown comparison kind makes the criterion false
instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from src.dataset.records import Record
from src.engine.coercion import as_number, coerce_value
from src.intent.schema import ComparisonKind, Criterion

_Ordering = Callable[[Any, Any], bool]


def _ordered(project_value: str | int, comparison_value: Any, op: _Ordering) -> bool:
    """Compare per the resolved type of `project_value`.

    Numbers compare numerically; strings compare lexicographically against strings and numerically
    against numbers (when the string itself is numeric).
    """

    if isinstance(project_value, int):
        other = as_number(comparison_value)
        return other is not None and op(project_value, other)

    if isinstance(comparison_value, str):
        return op(project_value, comparison_value)

    left = as_number(project_value)
    right = as_number(comparison_value)
    if left is None or right is None:
        return False
    return op(left, right)


def _loosely_equal(project_value: str | int, comparison_value: Any) -> bool:
    left = as_number(project_value)
    right = as_number(comparison_value)
    if left is not None and right is not None:
        return left == right
    return str(project_value) == str(comparison_value)


def _contains(project_value: str | int, comparison_value: Any) -> bool:
    return str(comparison_value).lower() in str(project_value).lower()


def evaluate(record: Record, criterion: Criterion) -> bool:
    """Evaluate one criterion against one record."""

    if criterion.column is None or criterion.comparison is None:
        return False
    comparison_value = criterion.value
    if comparison_value is None or isinstance(comparison_value, (list, dict)):
        return False
    project_value = coerce_value(criterion.column, record.raw(criterion.column))
    if project_value is None:
        return False

    kind = criterion.comparison
    if kind == ComparisonKind.less_than:
        return _ordered(project_value, comparison_value, lambda a, b: a < b)
    if kind == ComparisonKind.greater_than:
        return _ordered(project_value, comparison_value, lambda a, b: a > b)
    if kind == ComparisonKind.equal_to:
        return _loosely_equal(project_value, comparison_value)
    if kind == ComparisonKind.contains:
        return _contains(project_value, comparison_value)
    return False


def matches_all(record: Record, criteria: Iterable[Criterion]) -> bool:
    """Whether the record satisfies every criterion (vacuously true for no criteria)."""

    return all(evaluate(record, criterion) for criterion in criteria)
