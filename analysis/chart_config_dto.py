"""DTO schema for visualizer chart configurations.

A chart configuration names the chart kind and the table fields that feed it:
- bar/line charts use an X-axis (category) field and a Y-axis (value) field,
- pie charts use a category field and a value field.

Exactly one of the two field pairs is populated, selected by `chart_type`.
Helpers in this module are the only way the UI derives new configurations, so
the pair invariant holds for defaults, chart-type switches and suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from analysis.dto import ChartSuggestion

KNOWN_CHART_TYPES: tuple[str, ...] = ("bar", "line", "pie")


@dataclass(frozen=True, slots=True)
class ChartConfigDTO:
    """Chart kind plus the field selection used to project table rows.

    Args:
        chart_type: Chart kind. Usually one of `KNOWN_CHART_TYPES`; other
            strings are carried through unchanged and project to no points.
        x_axis_key: Categorical header used for bar/line labels.
        y_axis_key: Numeric header used for bar/line values.
        category_key: Categorical header used for pie slice labels.
        value_key: Numeric header used for pie slice values.
    """

    chart_type: str
    x_axis_key: str | None = None
    y_axis_key: str | None = None
    category_key: str | None = None
    value_key: str | None = None

    @property
    def primary_key(self) -> str | None:
        """Return the label field for the active chart kind."""

        return self.category_key if self.chart_type == "pie" else self.x_axis_key

    @property
    def secondary_key(self) -> str | None:
        """Return the value field for the active chart kind."""

        return self.value_key if self.chart_type == "pie" else self.y_axis_key


def build_chart_config(chart_type: str, *, primary: str | None, secondary: str | None) -> ChartConfigDTO:
    """Build a config that populates only the field pair used by `chart_type`.

    Args:
        chart_type: Requested chart kind.
        primary: Label field (X-axis or pie category).
        secondary: Value field (Y-axis or pie value).

    Returns:
        ChartConfigDTO with the inactive field pair cleared.
    """

    primary = primary or None
    secondary = secondary or None
    if chart_type == "pie":
        return ChartConfigDTO(chart_type=chart_type, category_key=primary, value_key=secondary)
    return ChartConfigDTO(chart_type=chart_type, x_axis_key=primary, y_axis_key=secondary)


def default_chart_config(headers: Sequence[str]) -> ChartConfigDTO | None:
    """Return the configuration used when a table is first loaded.

    Args:
        headers: Table headers in column order.

    Returns:
        A bar chart using the first header as X-axis and the second as Y-axis,
        or None when the table has no headers.
    """

    if not headers:
        return None
    return build_chart_config("bar", primary=_nth(headers, 0), secondary=_nth(headers, 1))


def with_chart_type(config: ChartConfigDTO | None, chart_type: str, *, headers: Sequence[str]) -> ChartConfigDTO:
    """Switch chart kind, resetting the field selection to the first headers.

    Args:
        config: Current configuration, if any.
        chart_type: Newly selected chart kind.
        headers: Table headers used to seed the new field pair.

    Returns:
        The unchanged config when the kind does not change, otherwise a new
        config whose fields are the first and second headers.
    """

    if config is not None and config.chart_type == chart_type:
        return config
    return build_chart_config(chart_type, primary=_nth(headers, 0), secondary=_nth(headers, 1))


def config_from_suggestion(suggestion: ChartSuggestion) -> ChartConfigDTO:
    """Map a chart suggestion onto a configuration.

    The first grouping becomes the label field and the second the value field.
    Suggestions with fewer than two groupings produce an under-specified
    config, which the projector reports as a configuration error.
    """

    chart_type = suggestion.chart_type.strip().lower()
    groupings = suggestion.data_groupings
    return build_chart_config(chart_type, primary=_nth(groupings, 0), secondary=_nth(groupings, 1))


def _nth(values: Sequence[str], index: int) -> str | None:
    return values[index] if len(values) > index else None
