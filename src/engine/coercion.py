"""Value coercion for criterion evaluation and sorting.

Currency-like columns are stored as formatted strings (e.g. `"$1,200,000"`). They are coerced by
dropping every non-digit character, so negative amounts and decimals are not representable.
"""

from __future__ import annotations

import re
from typing import Any

from src.engine.columns import is_numeric_column

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_NUMERIC_STRING_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

Number = int | float


def parse_amount(raw: str | None) -> int:
    """Parse a currency-like string into an integer (`0` if no digits remain)."""

    digits = _NON_DIGIT_RE.sub("", raw or "")
    if not digits:
        return 0
    return int(digits)


def coerce_value(column: str, raw: str | None) -> str | int | None:
    """Return the comparison-ready value of `raw` for `column`.

    Numeric columns always coerce to an `int` (missing values become `0`); other columns pass the
    raw string through unchanged, including `None` for a column the record does not have.
    """

    if is_numeric_column(column):
        return parse_amount(raw)
    return raw


def as_number(value: Any) -> Number | None:
    """Interpret `value` as a number if it is one or is a plain numeric string.

    Booleans are not numbers here, and formatted strings like `"$1,000"` are not numeric strings.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _NUMERIC_STRING_RE.fullmatch(text):
            return float(text) if any(c in text for c in ".eE") else int(text)
    return None
