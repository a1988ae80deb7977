"""Intent parser orchestration (LLM optional; default plan fallback)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from src.dataset.loader import DatasetSummary
from src.intent.llm_parser import LLMParserError, llm_config_from_env, parse_plan_json_via_llm
from src.intent.normalize import DefaultPlan, normalize_plan
from src.intent.schema import QueryPlan, default_plan

logger = logging.getLogger(__name__)

ParseSource = Literal["llm", "default"]


@dataclass(frozen=True)
class ParseResult:
    """Normalized plan plus information about where it came from."""

    plan: QueryPlan
    source: ParseSource


def parse_plan_with_source(
        text: str,
        summary: DatasetSummary,
        *,
        llm_enabled: bool,
        llm_api_key: str | None = None,
) -> ParseResult:
    """Turn a free-text request into a normalized QueryPlan.

    Strategy:
        1) If LLM mode is enabled, ask the LLM for plan JSON and normalize it.
        2) On any LLM failure, invalid JSON or rejected plan, use the default plan.
    """

    if not llm_enabled:
        return ParseResult(plan=default_plan(), source="default")

    try:
        cfg = llm_config_from_env(api_key=llm_api_key)
        candidate: Any = parse_plan_json_via_llm(text, summary, config=cfg)
    except LLMParserError as exc:
        # LLM failures must never crash the pipeline; fall back to the default plan.
        logger.warning("llm translation failed reason=%s", exc)
        return ParseResult(plan=default_plan(), source="default")

    normalized = normalize_plan(candidate)
    if isinstance(normalized, DefaultPlan):
        logger.info("plan replaced with default reason=%s", normalized.reason)
        return ParseResult(plan=normalized.plan, source="default")
    return ParseResult(plan=normalized.plan, source="llm")


def parse_plan(
        text: str,
        summary: DatasetSummary,
        *,
        llm_enabled: bool,
        llm_api_key: str | None = None,
) -> QueryPlan:
    """Parse text into a normalized QueryPlan (convenience wrapper)."""

    return parse_plan_with_source(
        text, summary, llm_enabled=llm_enabled, llm_api_key=llm_api_key
    ).plan
