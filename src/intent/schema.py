"""Query plan schema (Pydantic models).

This schema is the contract between the language-model intent translation and the deterministic
intent executor. Plans come from an untrusted source, so the models are lenient about extra keys and
unknown comparison kinds. A malformed criterion or sort key degrades to one that never matches or
never sorts; only a plan whose shape cannot be read at all is left to the plan normalizer.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LIMIT = 5


class Operation(StrEnum):
    """Whether the final selection is the matched set or its complement."""

    include = "include"
    exclude = "exclude"


class ComparisonKind(StrEnum):
    """Supported criterion comparisons."""

    contains = "contains"
    greater_than = "greater_than"
    less_than = "less_than"
    equal_to = "equal_to"


class SortOrder(StrEnum):
    asc = "asc"
    desc = "desc"


class Criterion(BaseModel):
    """A single filter predicate over one column.

    Every field is optional and loosely typed: a missing column or comparison, or an unknown
    comparison kind, is valid input and evaluates to false. `value` is kept exactly as decoded.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    column: str | None = None
    comparison: str | None = None
    value: Any = None

    @field_validator("column", "comparison", mode="before")
    @classmethod
    def strip_names(cls, value: Any) -> str | None:
        if isinstance(value, str):
            return value.strip() or None
        return None


class SortBy(BaseModel):
    """Sort key and direction; any order other than `desc` sorts ascending."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)

    column: str | None = None
    order: str | None = None

    @field_validator("column", "order", mode="before")
    @classmethod
    def drop_non_string(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @property
    def descending(self) -> bool:
        return (self.order or "").lower() == SortOrder.desc


class QueryPlan(BaseModel):
    """A normalized filter + sort + limit + operation query."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    operation: Operation = Operation.include
    criteria: tuple[Criterion, ...] = Field(default_factory=tuple)
    sort_by: SortBy | None = Field(default=None, alias="sortBy")
    limit: int | None = None

    @field_validator("operation", mode="before")
    @classmethod
    def default_unknown_operation(cls, value: Any) -> Any:
        """Treat any unrecognized operation as `include`."""

        if isinstance(value, str) and value.strip().lower() in {op.value for op in Operation}:
            return value.strip().lower()
        return Operation.include

    @field_validator("criteria", mode="before")
    @classmethod
    def default_missing_criteria(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            # A non-object item is a criterion with nothing to compare: it never matches.
            return [item if isinstance(item, (Mapping, Criterion)) else {} for item in value]
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def drop_non_object_sort(cls, value: Any) -> Any:
        if isinstance(value, (Mapping, SortBy)):
            return value
        return None

    @field_validator("limit", mode="before")
    @classmethod
    def drop_unusable_limit(cls, value: Any) -> int | None:
        """Keep only positive integral limits; anything else means "no limit"."""

        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, int) and value > 0:
            return value
        return None

    @property
    def is_empty(self) -> bool:
        """No criteria, no sort and no limit: the request could not be interpreted."""

        return not self.criteria and self.sort_by is None and self.limit is None


def default_plan() -> QueryPlan:
    """The plan used whenever a candidate plan cannot be trusted."""

    return QueryPlan(operation=Operation.include, criteria=(), limit=DEFAULT_LIMIT)


def plan_from_obj(obj: Any) -> QueryPlan:
    """Validate and parse a QueryPlan from an arbitrary decoded JSON object."""

    return QueryPlan.model_validate(obj)
