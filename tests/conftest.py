"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from analysis.dto import ParsedTable
from core.parsers.csv_table import parse_table

GRADES_CSV = "\n".join(
    [
        "Student,Score,Attendance",
        "Amina,87,92%",
        "Bruno,$1,234.56,80%",
        "Chen,absent,75%",
        "",
        "Dara,64.5,n/a",
    ]
)


@pytest.fixture
def grades_csv() -> str:
    """Return a small grades export with a non-numeric score and a blank line."""

    return GRADES_CSV


@pytest.fixture
def grades_table(grades_csv) -> ParsedTable:
    """Return the parsed grades export."""

    return parse_table(grades_csv)


@pytest.fixture
def csv_upload():
    """Return a factory for uploaded CSV files."""

    def _make(text: str, *, name: str = "grades.csv", content_type: str = "text/csv") -> SimpleUploadedFile:
        return SimpleUploadedFile(name, text.encode("utf-8"), content_type=content_type)

    return _make


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
