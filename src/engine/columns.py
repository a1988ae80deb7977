"""Recognized project columns.

Only columns listed in `NUMERIC_COLUMNS` get numeric comparison and sort semantics; every other
column is compared as an opaque string.
"""

from __future__ import annotations

ID_COLUMN = "ID"

STRATEGIC_CATEGORY_COLUMN = "Aporte_Estrategico"
ORGANIZATIONAL_UNIT_COLUMN = "Gerencia"
BENEFIT_COLUMN = "Beneficios_Estimados"

NUMERIC_COLUMNS: frozenset[str] = frozenset({BENEFIT_COLUMN})

# Columns the intent prompt advertises to the language model.
PLAN_COLUMNS: tuple[str, ...] = (
    ORGANIZATIONAL_UNIT_COLUMN,
    STRATEGIC_CATEGORY_COLUMN,
    BENEFIT_COLUMN,
)


def is_numeric_column(column: str | None) -> bool:
    return column in NUMERIC_COLUMNS
