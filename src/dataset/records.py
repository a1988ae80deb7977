"""Typed view over a project record.

A record is an ordered mapping of column name to raw string value, as produced by the CSV loader.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from src.engine.columns import (
    BENEFIT_COLUMN,
    ID_COLUMN,
    ORGANIZATIONAL_UNIT_COLUMN,
    STRATEGIC_CATEGORY_COLUMN,
)


@dataclass(frozen=True, eq=False)
class Record(Mapping[str, str]):
    """One project row.

    Lookups of columns the row does not have return `None` through `raw()`; `Mapping` access keeps
    the usual `KeyError` behavior.
    """

    data: Mapping[str, str]

    def __getitem__(self, column: str) -> str:
        return self.data[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def raw(self, column: str) -> str | None:
        return self.data.get(column)

    @property
    def id(self) -> str:
        return self.data.get(ID_COLUMN) or ""

    @property
    def organizational_unit(self) -> str:
        return self.data.get(ORGANIZATIONAL_UNIT_COLUMN) or ""

    @property
    def strategic_category(self) -> str:
        return self.data.get(STRATEGIC_CATEGORY_COLUMN) or ""

    @property
    def benefit(self) -> str:
        return self.data.get(BENEFIT_COLUMN) or ""


def as_record(row: Mapping[str, str] | Record) -> Record:
    if isinstance(row, Record):
        return row
    if not isinstance(row, Mapping):
        raise TypeError(f"record must be a mapping, got {type(row).__name__}")
    return Record(data=row)
