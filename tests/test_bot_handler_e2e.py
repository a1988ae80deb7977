"""Tests for the aiogram message handler reply contract.

Every incoming message results in exactly one reply: comma-separated project IDs, the fixed
no-selection text, or the fixed generic error text.
"""

from __future__ import annotations

import asyncio
import re
from types import SimpleNamespace
from typing import Any

import pytest

from src.bot.handlers import (
    ERROR_REPLY,
    HELP_REPLY,
    NO_SELECTION_REPLY,
    format_selection,
    handle_help,
    handle_message,
)
from src.dataset.loader import summarize_dataset
from src.dataset.records import Record
from src.intent.parser import ParseResult
from src.intent.schema import QueryPlan

_IDS_RE = re.compile(r"[^,\s]+(,[^,\s]+)*")


class _FakeMessage:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.caption = None
        self.answers: list[str] = []

    async def answer(self, text: str) -> None:
        """Record the outgoing bot reply (aiogram's `Message.answer` substitute)."""
        self.answers.append(text)


def _make_app(records: list[Record]) -> Any:
    return SimpleNamespace(
        settings=SimpleNamespace(llm_enabled=False, llm_api_key=None),
        records=tuple(records),
        summary=summarize_dataset(records),
        llm_slots=asyncio.Semaphore(1),
    )


def _patch_plan(monkeypatch: pytest.MonkeyPatch, candidate: dict[str, Any]) -> None:
    plan = QueryPlan.model_validate(candidate)
    monkeypatch.setattr(
        "src.bot.handlers.parse_plan_with_source",
        lambda *_args, **_kwargs: ParseResult(plan=plan, source="llm"),
    )


def test_format_selection() -> None:
    assert format_selection(["3", "17", "42"]) == "3,17,42"
    assert format_selection([]) == NO_SELECTION_REPLY


@pytest.mark.asyncio
async def test_handler_replies_no_selection_for_empty_text(projects: list[Record]) -> None:
    message = _FakeMessage(text=None)

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == [NO_SELECTION_REPLY]


@pytest.mark.asyncio
async def test_handler_replies_no_selection_for_unknown_command(projects: list[Record]) -> None:
    message = _FakeMessage(text="/stats")

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == [NO_SELECTION_REPLY]


@pytest.mark.asyncio
async def test_help_reply() -> None:
    message = _FakeMessage(text="/help")

    await handle_help(message)  # type: ignore[arg-type]

    assert message.answers == [HELP_REPLY]


@pytest.mark.asyncio
async def test_handler_uses_default_plan_when_llm_disabled(projects: list[Record]) -> None:
    message = _FakeMessage(text="los mejores proyectos")

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == ["1,2,3,4,5"]


@pytest.mark.asyncio
async def test_handler_replies_selected_ids(monkeypatch: pytest.MonkeyPatch, projects: list[Record]) -> None:
    _patch_plan(
        monkeypatch,
        {
            "operation": "include",
            "criteria": [{"column": "Gerencia", "comparison": "contains", "value": "operaciones"}],
            "sortBy": {"column": "Beneficios_Estimados", "order": "asc"},
        },
    )
    message = _FakeMessage(text="proyectos de operaciones")

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == ["6,1"]
    assert _IDS_RE.fullmatch(message.answers[0]) is not None


@pytest.mark.asyncio
async def test_handler_replies_no_selection_for_empty_plan(
        monkeypatch: pytest.MonkeyPatch, projects: list[Record]
) -> None:
    _patch_plan(monkeypatch, {"operation": "include", "criteria": []})
    message = _FakeMessage(text="???")

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == [NO_SELECTION_REPLY]


@pytest.mark.asyncio
async def test_handler_replies_generic_error_on_failure(
        monkeypatch: pytest.MonkeyPatch, projects: list[Record]
) -> None:
    def _boom(*_args: Any, **_kwargs: Any) -> ParseResult:
        raise RuntimeError("internal detail that must not leak")

    monkeypatch.setattr("src.bot.handlers.parse_plan_with_source", _boom)
    message = _FakeMessage(text="top 3")

    await handle_message(message, _make_app(projects))  # type: ignore[arg-type]

    assert message.answers == [ERROR_REPLY]


@pytest.mark.asyncio
async def test_handler_replies_generic_error_on_bad_dataset(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_plan(monkeypatch, {"operation": "include", "limit": 1})
    app = _make_app([])
    app.records = ("not a record",)
    message = _FakeMessage(text="top 1")

    await handle_message(message, app)  # type: ignore[arg-type]

    assert message.answers == [ERROR_REPLY]
