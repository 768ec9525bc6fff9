"""Targeted tests for best-effort numeric coercion."""

from __future__ import annotations

import math

import pytest

from analysis.quantity import try_parse_number

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$1,234.56", 1234.56),
        ("87%", 87.0),
        (" 42 ", 42.0),
        ("-3.5", -3.5),
        ("Score: 91", 91.0),
        (".5", 0.5),
        ("1.2.3", 1.2),
        ("1-2", 1.0),
    ],
)
def test_try_parse_number_strips_noise_characters(raw: str, expected: float) -> None:
    """Strip currency, separators and text, then parse the leading number."""

    assert try_parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc", "-", ".", "--1", "n/a", None])
def test_try_parse_number_returns_none_for_unparseable_values(raw) -> None:
    """Return None when no numeric prefix remains."""

    assert try_parse_number(raw) is None


def test_try_parse_number_passes_numbers_through() -> None:
    """Numbers are returned as floats; NaN becomes None."""

    assert try_parse_number(7) == 7.0
    assert try_parse_number(2.5) == 2.5
    assert try_parse_number(math.nan) is None
    assert try_parse_number(True) is None
    assert try_parse_number(["1"]) is None
