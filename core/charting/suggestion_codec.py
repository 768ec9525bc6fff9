"""Decoding helpers for chart suggestion payloads.

The suggestion service answers with JSON shaped like::

    {"suggestions": [{"chartType": "bar", "dataGroupings": ["Name", "Score"], "reason": "..."}]}

The same shape is used when suggestions are stored in the session.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from analysis.dto import ChartSuggestion

logger = logging.getLogger(__name__)


class SuggestionServiceError(Exception):
    """Raised when chart suggestions cannot be produced."""


class SuggestionDecodeError(SuggestionServiceError):
    """Raised when a suggestion payload is not shaped like the expected JSON."""


def decode_suggestions_text(text: str) -> tuple[ChartSuggestion, ...]:
    """Decode a raw JSON suggestion response.

    Raises:
        SuggestionDecodeError: When the text is not valid JSON or lacks a
            `suggestions` list.
    """

    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SuggestionDecodeError("Suggestion response is not valid JSON.") from exc
    return decode_suggestions(payload)


def decode_suggestions(payload: Any) -> tuple[ChartSuggestion, ...]:
    """Decode a suggestion payload into ChartSuggestion DTOs.

    Args:
        payload: Parsed JSON object from the suggestion service.

    Returns:
        Suggestions in payload order. Entries without a chart type are skipped.

    Raises:
        SuggestionDecodeError: When the payload is not an object with a
            `suggestions` list.
    """

    if not isinstance(payload, dict) or not isinstance(payload.get("suggestions"), list):
        raise SuggestionDecodeError("Suggestion payload must contain a 'suggestions' list.")
    return decode_suggestion_list(payload["suggestions"])


def decode_suggestion_list(entries: Any) -> tuple[ChartSuggestion, ...]:
    """Decode a list of suggestion entries, skipping malformed ones."""

    if not isinstance(entries, list):
        return ()
    suggestions: list[ChartSuggestion] = []
    for idx, entry in enumerate(entries):
        suggestion = _decode_entry(entry)
        if suggestion is None:
            logger.warning("Skipping malformed chart suggestion at index %d", idx)
            continue
        suggestions.append(suggestion)
    return tuple(suggestions)


def _decode_entry(entry: object) -> ChartSuggestion | None:
    if not isinstance(entry, dict):
        return None
    chart_type = entry.get("chartType")
    if not isinstance(chart_type, str) or not chart_type.strip():
        return None
    groupings_raw = entry.get("dataGroupings")
    groupings = (
        tuple(str(value) for value in groupings_raw if value is not None)
        if isinstance(groupings_raw, list)
        else ()
    )
    reason = entry.get("reason")
    return ChartSuggestion(
        chart_type=chart_type.strip(),
        data_groupings=groupings,
        reason=reason if isinstance(reason, str) else "",
    )
