"""Plan normalization at the language-model boundary.

A candidate plan is whatever JSON the language model produced. It is either accepted as a
`ValidPlan` or replaced by the default plan (`DefaultPlan`), never trusted as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from src.intent.schema import QueryPlan, default_plan, plan_from_obj

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidPlan:
    """The candidate validated into a usable plan."""

    plan: QueryPlan


@dataclass(frozen=True)
class DefaultPlan:
    """The candidate was rejected; `plan` is the default selection."""

    reason: str
    plan: QueryPlan = field(default_factory=default_plan)


NormalizedPlan = ValidPlan | DefaultPlan


def normalize_plan(candidate: Any) -> NormalizedPlan:
    """Validate a candidate plan or fall back to the default plan.

    Rules:
        - absent or non-object candidates are rejected;
        - a missing/empty `operation` is unrecoverable and rejected;
        - an unrecognized `operation` becomes `include`;
        - missing `criteria` becomes an empty list, missing `sortBy`/`limit` stay absent.
    """

    if candidate is None:
        return DefaultPlan(reason="no plan")
    if not isinstance(candidate, Mapping):
        return DefaultPlan(reason=f"plan is not an object: {type(candidate).__name__}")
    if not candidate.get("operation"):
        return DefaultPlan(reason="plan has no operation")

    try:
        return ValidPlan(plan=plan_from_obj(dict(candidate)))
    except ValidationError as exc:
        logger.debug("plan rejected errors=%s", exc.errors(include_url=False))
        return DefaultPlan(reason=f"invalid plan ({exc.error_count()} errors)")


def plan_or_default(candidate: Any) -> QueryPlan:
    """Convenience wrapper returning just the resulting QueryPlan."""

    return normalize_plan(candidate).plan
