"""Generic rendering for ChartConfigDTO-driven Chart.js payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict

from analysis.chart_config_dto import ChartConfigDTO
from analysis.dto import ChartProjection

PIE_PALETTE = ("#8884d8", "#82ca9d", "#ffc658", "#ff8042", "#0088FE", "#00C49F", "#FFBB28")
PRIMARY_COLOR = "#3366CC"

EMPTY_STATE_MESSAGE = "Select chart type and configure fields to display data."
NO_NUMERIC_DATA_MESSAGE = "The selected columns might not contain valid numeric data or data is empty."


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload for the visualizer."""

    label: str
    valueKey: str
    data: list[float]
    borderColor: str
    backgroundColor: str | list[str]
    borderWidth: int
    borderRadius: int
    pointHoverRadius: int
    tension: float


class ChartData(TypedDict):
    """The full Chart.js payload (labels + datasets) for the chart panel."""

    labels: list[str]
    datasets: list[ChartDataset]


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A rendered chart panel produced from a projection and its config.

    Args:
        chart_type: Chart.js chart type, or None when the kind is unsupported.
        data: Chart.js labels and datasets.
        error: Configuration error to show instead of the chart.
        empty_state: Neutral message shown when there is nothing to draw.
    """

    chart_type: str | None
    data: ChartData
    error: str | None = None
    empty_state: str | None = None

    @property
    def has_data(self) -> bool:
        """Return True when the payload has at least one label to plot."""

        return bool(self.data["labels"])


def render_chart_payload(projection: ChartProjection, config: ChartConfigDTO) -> RenderedChart:
    """Convert projected plot points into a Chart.js payload.

    Args:
        projection: Output of `project_chart_data` for `config`.
        config: The configuration the projection was produced from.

    Returns:
        RenderedChart. Bar/line datasets read each point's value from the
        key named after the selected Y-axis header; pie datasets read `value`.
    """

    empty: ChartData = {"labels": [], "datasets": []}
    if projection.error is not None:
        return RenderedChart(chart_type=None, data=empty, error=projection.error)

    if config.chart_type == "pie":
        value_key = "value"
        dataset_label = config.value_key or ""
    elif config.chart_type in ("bar", "line"):
        value_key = config.y_axis_key or ""
        dataset_label = value_key
    else:
        return RenderedChart(chart_type=None, data=empty, empty_state=EMPTY_STATE_MESSAGE)

    if not projection.points:
        return RenderedChart(chart_type=config.chart_type, data=empty, empty_state=NO_NUMERIC_DATA_MESSAGE)

    labels = [_label(point.get("name")) for point in projection.points]
    values = [float(point[value_key]) for point in projection.points]
    if config.chart_type == "pie":
        dataset = _pie_dataset(label=dataset_label, data=values)
    else:
        dataset = _dataset(label=dataset_label, data=values, chart_type=config.chart_type)
    return RenderedChart(chart_type=config.chart_type, data={"labels": labels, "datasets": [dataset]})


def _dataset(*, label: str, data: list[float], chart_type: str) -> ChartDataset:
    """Build a bar/line Chart.js dataset dict with consistent styling."""

    dataset: ChartDataset = {
        "label": label,
        "valueKey": label,
        "data": data,
        "borderColor": PRIMARY_COLOR,
        "backgroundColor": PRIMARY_COLOR,
        "borderWidth": 2,
    }
    if chart_type == "bar":
        dataset["borderRadius"] = 4
    else:
        dataset["pointHoverRadius"] = 8
        dataset["tension"] = 0.3
    return dataset


def _pie_dataset(*, label: str, data: list[float]) -> ChartDataset:
    """Build a pie dataset whose slice colors cycle through the palette."""

    return {
        "label": label,
        "valueKey": "value",
        "data": data,
        "backgroundColor": [PIE_PALETTE[idx % len(PIE_PALETTE)] for idx in range(len(data))],
    }


def _label(value: object) -> str:
    return "" if value is None else str(value)
