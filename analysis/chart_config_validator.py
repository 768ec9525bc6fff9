"""Validation for visualizer ChartConfigDTO values."""

from __future__ import annotations

from dataclasses import dataclass

from analysis.chart_config_dto import KNOWN_CHART_TYPES, ChartConfigDTO
from analysis.chart_config_engine import AXIS_FIELDS_REQUIRED, PIE_FIELDS_REQUIRED
from analysis.dto import ParsedTable
from analysis.quantity import try_parse_number

NO_NUMERIC_VALUES = "The selected columns might not contain valid numeric data or data is empty."


@dataclass(frozen=True, slots=True)
class ChartConfigValidationResult:
    """Validation result for ChartConfigDTO.

    Args:
        is_valid: True when no errors exist.
        errors: Fatal validation errors.
        warnings: Non-fatal warnings intended for UI display.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_config(config: ChartConfigDTO, *, table: ParsedTable) -> ChartConfigValidationResult:
    """Validate a ChartConfigDTO against the headers and rows of a table.

    Args:
        config: ChartConfigDTO from the visualizer form or a suggestion.
        table: ParsedTable the chart will be projected from.

    Returns:
        ChartConfigValidationResult containing errors and warnings. Errors
        match the messages returned by `project_chart_data`.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if config.chart_type not in KNOWN_CHART_TYPES:
        warnings.append(f"Unsupported chart type: {config.chart_type!r}.")
        return ChartConfigValidationResult(is_valid=True, warnings=tuple(warnings))

    if not config.primary_key or not config.secondary_key:
        errors.append(PIE_FIELDS_REQUIRED if config.chart_type == "pie" else AXIS_FIELDS_REQUIRED)
        return ChartConfigValidationResult(is_valid=False, errors=tuple(errors))

    headers = set(table.headers)
    for key in (config.primary_key, config.secondary_key):
        if key not in headers:
            warnings.append(f"Unknown field: {key!r}.")

    if config.secondary_key in headers and not any(
        try_parse_number(row.get(config.secondary_key)) is not None for row in table.rows
    ):
        warnings.append(NO_NUMERIC_VALUES)

    return ChartConfigValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
