"""Application composition root.

This module wires together configuration, the project dataset, and the LLM concurrency limit for
the bot runtime.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from src.config.settings import Settings
from src.dataset.loader import DatasetSummary, load_records, summarize_dataset
from src.dataset.records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    records: tuple[Record, ...]
    summary: DatasetSummary
    llm_slots: asyncio.Semaphore


def create_app(settings: Settings) -> App:
    """Create the application container.

    The dataset is read once here; handlers only ever see this immutable snapshot.
    """

    records = tuple(load_records(settings.projects_csv_path))
    logger.info("dataset loaded path=%s projects=%d", settings.projects_csv_path, len(records))
    return App(
        settings=settings,
        records=records,
        summary=summarize_dataset(records),
        llm_slots=asyncio.Semaphore(settings.llm_max_concurrency),
    )
