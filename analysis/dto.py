"""DTO types shared by the parsing and charting layers.

DTOs are plain data containers used to transport parsed tables and chart
results to the UI. They intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


PlotPoint = dict[str, Any]


@dataclass(frozen=True)
class ParsedTable:
    """A delimited-text table parsed into headers and row mappings.

    Attributes:
        headers: Header names in column order. Duplicates are allowed; the last
            column with a given name wins inside each row mapping.
        rows: One mapping per non-blank data line, in input order. Every row
            holds a string value (possibly empty) for each header.
        row_count: Number of entries in `rows`.
    """

    headers: tuple[str, ...] = ()
    rows: tuple[dict[str, str], ...] = ()
    row_count: int = 0

    @property
    def is_empty(self) -> bool:
        """Return True when the table has no headers or no data rows."""

        return not self.headers or not self.rows


EMPTY_TABLE = ParsedTable()


@dataclass(frozen=True, slots=True)
class ChartProjection:
    """Plot points projected from a table for a single chart configuration.

    Args:
        points: Kind-specific plot points in row order. Bar/line points are
            keyed by `name` and the selected Y-axis header; pie points by
            `name` and `value`.
        error: User-correctable configuration error, or None.
    """

    points: tuple[PlotPoint, ...] = ()
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ChartSuggestion:
    """A chart suggestion produced by the text-generation collaborator.

    Args:
        chart_type: Free-text chart kind label (e.g. "bar"). Not validated.
        data_groupings: Candidate field names in priority order.
        reason: Human-readable justification for the suggestion.
    """

    chart_type: str
    data_groupings: tuple[str, ...] = ()
    reason: str = ""
