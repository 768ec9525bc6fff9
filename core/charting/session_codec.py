"""Session encoding/decoding helpers for the visualizer state.

Uploaded tables, chart configurations and suggestions are kept in the Django
session between requests. The session serializer is JSON, so every value is
encoded into plain dicts/lists here and decoded back into DTOs on read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from analysis.chart_config_dto import ChartConfigDTO
from analysis.dto import ChartSuggestion, ParsedTable

UPLOAD_SESSION_KEY = "visualizer_upload"
CONFIG_SESSION_KEY = "visualizer_config"
SUGGESTIONS_SESSION_KEY = "visualizer_suggestions"


@dataclass(frozen=True, slots=True)
class UploadedTable:
    """An uploaded CSV file and its parsed table.

    Args:
        file_name: Original file name, used for display only.
        raw_text: Decoded file contents, forwarded to the suggestion service.
        table: Parsed table.
    """

    file_name: str
    raw_text: str
    table: ParsedTable


def encode_uploaded_table(upload: UploadedTable) -> dict[str, Any]:
    """Encode an UploadedTable into a JSON-serializable dictionary."""

    return {
        "file_name": upload.file_name,
        "raw_text": upload.raw_text,
        "headers": list(upload.table.headers),
        "rows": [dict(row) for row in upload.table.rows],
    }


def decode_uploaded_table(payload: dict[str, Any] | None) -> UploadedTable | None:
    """Decode an UploadedTable from a session payload.

    Args:
        payload: Payload previously produced by `encode_uploaded_table`.

    Returns:
        UploadedTable, or None when the payload is missing or malformed.
    """

    if not isinstance(payload, dict):
        return None
    headers_raw = payload.get("headers")
    rows_raw = payload.get("rows")
    if not isinstance(headers_raw, list) or not isinstance(rows_raw, list):
        return None

    headers = tuple(str(header) for header in headers_raw)
    rows = tuple(
        {str(key): str(value) for key, value in cast(dict[str, Any], row).items()}
        for row in rows_raw
        if isinstance(row, dict)
    )
    return UploadedTable(
        file_name=str(payload.get("file_name") or ""),
        raw_text=str(payload.get("raw_text") or ""),
        table=ParsedTable(headers=headers, rows=rows, row_count=len(rows)),
    )


def encode_chart_config(config: ChartConfigDTO) -> dict[str, Any]:
    """Encode a ChartConfigDTO into a JSON-serializable dictionary."""

    return {
        "chart_type": config.chart_type,
        "x_axis_key": config.x_axis_key,
        "y_axis_key": config.y_axis_key,
        "category_key": config.category_key,
        "value_key": config.value_key,
    }


def decode_chart_config(payload: dict[str, Any] | None) -> ChartConfigDTO | None:
    """Decode a ChartConfigDTO from a session payload, or None when absent."""

    if not isinstance(payload, dict) or not payload.get("chart_type"):
        return None
    return ChartConfigDTO(
        chart_type=str(payload["chart_type"]),
        x_axis_key=_optional_str(payload.get("x_axis_key")),
        y_axis_key=_optional_str(payload.get("y_axis_key")),
        category_key=_optional_str(payload.get("category_key")),
        value_key=_optional_str(payload.get("value_key")),
    )


def encode_suggestions(suggestions: tuple[ChartSuggestion, ...]) -> list[dict[str, Any]]:
    """Encode suggestions using the wire field names of the suggestion service."""

    return [
        {
            "chartType": suggestion.chart_type,
            "dataGroupings": list(suggestion.data_groupings),
            "reason": suggestion.reason,
        }
        for suggestion in suggestions
    ]


def _optional_str(value: object) -> str | None:
    """Return a non-empty string, or None."""

    if value is None or value == "":
        return None
    return str(value)
