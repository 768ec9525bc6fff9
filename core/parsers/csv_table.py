"""Best-effort CSV table parsing.

The uploaded CSV files are small spreadsheet exports (grades, attendance,
enrolment counts). Parsing follows a few guiding rules:

- Degenerate input is non-fatal and yields an empty table.
- Fields are split on every comma; quoted fields are not supported.
- Ragged rows are normalized to the header width.
"""

from __future__ import annotations

import re

from analysis.dto import EMPTY_TABLE, ParsedTable

FIELD_DELIMITER = ","

_LINE_BREAK_RE = re.compile(r"\r\n|\n")


def parse_table(text: str) -> ParsedTable:
    """Parse raw CSV text into headers and row mappings.

    Args:
        text: Raw file contents as uploaded by the user.

    Returns:
        ParsedTable with one row per non-blank data line. Input that is not a
        string, or is empty after trimming, yields an empty table.
    """

    if not isinstance(text, str):
        return EMPTY_TABLE
    trimmed = text.strip()
    if not trimmed:
        return EMPTY_TABLE

    lines = _LINE_BREAK_RE.split(trimmed)
    headers = tuple(_split_line(lines[0]))
    data_lines = [line for line in lines[1:] if line.strip()]

    rows = tuple(_build_row(headers, _split_line(line)) for line in data_lines)
    return ParsedTable(headers=headers, rows=rows, row_count=len(rows))


def _split_line(line: str) -> list[str]:
    """Split a line on the field delimiter and trim each field."""

    return [value.strip() for value in line.split(FIELD_DELIMITER)]


def _build_row(headers: tuple[str, ...], values: list[str]) -> dict[str, str]:
    """Zip header positions to values, padding short rows with empty strings.

    Extra values beyond the header count are dropped. Duplicate header names
    keep the value of their last column.
    """

    row: dict[str, str] = {}
    for index, header in enumerate(headers):
        row[header] = values[index] if index < len(values) else ""
    return row
