"""Logging configuration for the portfolio bot."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_NOISY_LOGGERS: tuple[str, ...] = ("aiogram.event", "aiogram.dispatcher")


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    Logs (including raw LLM replies at DEBUG) are internal diagnostics and must never be sent back
    to the chat user.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # Keep aiogram quiet unless we are debugging the bot itself.
    if log_level != "DEBUG":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
