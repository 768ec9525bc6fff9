"""Chart projection for visualizer ChartConfigDTO values.

This module consumes a ParsedTable and a ChartConfigDTO and produces
deterministic plot points that the UI can render without performing
calculations inline.
"""

from __future__ import annotations

from analysis.chart_config_dto import ChartConfigDTO
from analysis.dto import ChartProjection, ParsedTable, PlotPoint
from analysis.quantity import try_parse_number

PIE_FIELDS_REQUIRED = "For Pie charts, please select both a category and a value field."
AXIS_FIELDS_REQUIRED = "For Bar/Line charts, please select X-axis and Y-axis fields."


def project_chart_data(table: ParsedTable, config: ChartConfigDTO) -> ChartProjection:
    """Project table rows into plot points for the configured chart kind.

    Args:
        table: Parsed table supplying the rows.
        config: Chart kind and field selection.

    Returns:
        ChartProjection whose points follow row order. Rows whose value field
        does not parse as a number are dropped. A missing field selection
        yields no points and an error message. Unknown chart kinds yield no
        points and no error.
    """

    if config.chart_type == "pie":
        if not config.category_key or not config.value_key:
            return ChartProjection(points=(), error=PIE_FIELDS_REQUIRED)
        return ChartProjection(
            points=_project(table, label_key=config.category_key, value_key=config.value_key, output_key="value")
        )

    if config.chart_type in ("bar", "line"):
        if not config.x_axis_key or not config.y_axis_key:
            return ChartProjection(points=(), error=AXIS_FIELDS_REQUIRED)
        return ChartProjection(
            points=_project(
                table,
                label_key=config.x_axis_key,
                value_key=config.y_axis_key,
                output_key=config.y_axis_key,
            )
        )

    return ChartProjection()


def _project(table: ParsedTable, *, label_key: str, value_key: str, output_key: str) -> tuple[PlotPoint, ...]:
    """Build `{name, <output_key>: number}` points, skipping non-numeric rows.

    When `output_key` is `name` (a Y-axis header literally called "name"), the
    value overwrites the label, mirroring a plain mapping assignment.
    """

    points: list[PlotPoint] = []
    for row in table.rows:
        value = try_parse_number(row.get(value_key))
        if value is None:
            continue
        point: PlotPoint = {"name": row.get(label_key)}
        point[output_key] = value
        points.append(point)
    return tuple(points)
