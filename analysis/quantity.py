"""Best-effort numeric coercion for uploaded table cells.

Cells in exported spreadsheets often carry currency symbols, thousands
separators or percent signs (e.g. `$1,234.56`, `87%`). This module turns such
strings into floats.

This module is intentionally:
- pure (no Django imports),
- defensive (never raises on unknown formats),
- locale-naive (a comma is always treated as noise, never as a decimal mark).
"""

from __future__ import annotations

import math
import re
from typing import Final

_NON_NUMERIC_RE: Final = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER_RE: Final = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def try_parse_number(value: object) -> float | None:
    """Coerce a cell value into a float when possible.

    Args:
        value: Raw cell value. Usually a string; numbers pass through.

    Returns:
        The parsed float, or None when the value is absent, not-a-number, or
        has no leading numeric prefix once noise characters are removed.

    Notes:
        Every character other than digits, `.` and `-` is stripped before
        parsing, then the longest leading numeric prefix is used. Inputs like
        `1.2.3` therefore parse as `1.2` and `1-2` as `1`.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None

    cleaned = _NON_NUMERIC_RE.sub("", value)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        return None
    return float(match.group(0))
