"""aiogram message handlers.

Hard contract: every incoming message produces exactly one reply:
    - the selected project IDs joined by commas (e.g. `3,17,42`), or
    - `NO_SELECTION_REPLY` when nothing was selected, or
    - `ERROR_REPLY` on any internal failure (details are only logged).

`/start` and `/help` get `HELP_REPLY`; any other command selects nothing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.engine.executor import ExecutionError, execute
from src.intent.parser import parse_plan_with_source

logger = logging.getLogger(__name__)

NO_SELECTION_REPLY = "No projects selected."
ERROR_REPLY = "Could not process the project selection."
HELP_REPLY = (
    "Describe the projects you want, e.g. \"3 Operaciones projects with the largest benefit\" "
    "or \"everything except Marketing\". I reply with the matching project IDs."
)


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def format_selection(ids: Sequence[str]) -> str:
    """Render selected IDs as the bot reply text."""

    if not ids:
        return NO_SELECTION_REPLY
    return ",".join(ids)


async def handle_help(message: Message) -> None:
    """Reply to `/start` and `/help` with usage instructions."""

    await message.answer(HELP_REPLY)


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply with the selected project IDs."""

    started = monotonic()
    reply = ERROR_REPLY

    # noinspection PyBroadException
    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(NO_SELECTION_REPLY)
            return

        async with app.llm_slots:
            parse_result = await asyncio.to_thread(
                parse_plan_with_source,
                raw_text,
                app.summary,
                llm_enabled=app.settings.llm_enabled,
                llm_api_key=app.settings.llm_api_key,
            )

        ids = execute(app.records, parse_result.plan)
        reply = format_selection(ids)

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled source=%s operation=%s criteria=%d selected=%d latency_ms=%d",
            parse_result.source,
            parse_result.plan.operation,
            len(parse_result.plan.criteria),
            len(ids),
            latency_ms,
        )
    except ExecutionError as exc:
        latency_ms = int((monotonic() - started) * 1000)
        logger.warning("execution failed reason=%s latency_ms=%d", exc, latency_ms)
    except Exception:
        # Handler boundary: any internal error results in the generic error reply,
        # without leaking details.
        logger.exception("handler failed")

    await message.answer(reply)
