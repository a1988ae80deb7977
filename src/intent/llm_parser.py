"""LLM-based intent translation (feature-flagged).

The LLM is only allowed to produce **plan JSON**. Its reply is free text; the first `{` through the
last `}` is taken as the candidate object and must still pass the plan normalizer.
"""

from __future__ import annotations

import http.client
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Any
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from src.dataset.loader import DatasetSummary

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class LLMParserError(RuntimeError):
    """Raised when the LLM call fails or does not return a JSON object."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the OpenAI-style Chat Completions API call."""

    api_key: str
    model: str = "gpt-4o-mini"
    api_base: str = "https://api.openai.com/v1"
    timeout_s: float = 30.0
    max_tokens: int = 512


def _load_prompt() -> str:
    prompt_path = Path(__file__).resolve().parent / "prompt_intent_v1.md"
    return prompt_path.read_text(encoding="utf-8")


def render_system_prompt(summary: DatasetSummary) -> str:
    """Fill the intent prompt template with facts about the loaded dataset."""

    return Template(_load_prompt()).safe_substitute(
        total=summary.total,
        organizational_units=", ".join(summary.organizational_units) or "-",
        strategic_categories=", ".join(summary.strategic_categories) or "-",
        min_benefit=f"${summary.min_benefit:,}",
        max_benefit=f"${summary.max_benefit:,}",
    )


def _chat_completions_url(api_base: str) -> str:
    return api_base.rstrip("/") + "/chat/completions"


def translate(user_text: str, summary: DatasetSummary, *, config: LLMConfig) -> str:
    """Ask the LLM to turn a request into plan JSON and return its raw reply text.

    The call is compatible with OpenAI-style `/v1/chat/completions` APIs.
    """

    payload = {
        "model": config.model,
        "temperature": 0,
        "max_tokens": config.max_tokens,
        "messages": [
            {"role": "system", "content": render_system_prompt(summary)},
            {"role": "user", "content": user_text},
        ],
    }

    req = Request(
        _chat_completions_url(config.api_base),
        method="POST",
        headers={
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
        data=json.dumps(payload).encode(),
    )

    try:
        with urlopen(req, timeout=config.timeout_s) as resp:  # noqa: S310 (explicit, feature-flagged network call)
            body = resp.read()
    except HTTPError as exc:
        raise LLMParserError(f"LLM HTTP error: {exc.code}") from exc
    except (OSError, http.client.HTTPException) as exc:
        raise LLMParserError("LLM connection error") from exc

    try:
        decoded = json.loads(body)
        content = decoded["choices"][0]["message"]["content"]
    except Exception as exc:  # noqa: BLE001
        raise LLMParserError("Unexpected LLM response format") from exc

    if not isinstance(content, str):
        raise LLMParserError("Unexpected LLM response format")
    return content


def extract_json_object(raw_text: str) -> Any:
    """Parse the widest `{ ... }` region of the reply.

    Raises:
        LLMParserError: If there is no braced region or it is not valid JSON.
    """

    value = (raw_text or "").strip()
    match = _JSON_OBJECT_RE.search(value)
    if match:
        value = match.group(0)

    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise LLMParserError("LLM did not return valid JSON") from exc


def parse_plan_json_via_llm(user_text: str, summary: DatasetSummary, *, config: LLMConfig) -> Any:
    """Call the LLM and return the decoded candidate plan object (not yet normalized)."""

    raw = translate(user_text, summary, config=config)
    logger.debug("llm raw reply=%r", raw)
    return extract_json_object(raw)


def llm_config_from_env(*, api_key: str | None = None) -> LLMConfig:
    """Build LLM config from environment variables.

    Environment variables (optional):
        - LLM_MODEL
        - LLM_API_BASE
        - LLM_TIMEOUT_S
        - LLM_MAX_TOKENS
    """

    key = api_key or os.getenv("LLM_API_KEY") or ""
    if not key:
        raise LLMParserError("LLM_API_KEY is required")

    timeout_s = float(os.getenv("LLM_TIMEOUT_S") or "30")
    return LLMConfig(
        api_key=key,
        model=os.getenv("LLM_MODEL") or "gpt-4o-mini",
        api_base=os.getenv("LLM_API_BASE") or "https://api.openai.com/v1",
        timeout_s=timeout_s,
        max_tokens=int(os.getenv("LLM_MAX_TOKENS") or "512"),
    )
