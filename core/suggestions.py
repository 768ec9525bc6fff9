"""Chart suggestions from a prompt-based text-generation model.

The uploaded CSV text is sent to a Gemini model together with instructions to
answer with chart types, data groupings and a justification for each. The
response is decoded into ChartSuggestion DTOs; the model's chart types and
field names are not validated here.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from django.conf import settings
from google import genai

from analysis.dto import ChartSuggestion
from core.charting.suggestion_codec import SuggestionServiceError, decode_suggestions_text

logger = logging.getLogger(__name__)

SUGGESTION_PROMPT = """You are an expert data visualization consultant. Analyze the following CSV data and suggest appropriate chart types and data groupings to create effective visualizations.

CSV Data:
{csv_data}

Consider the column headers and data types to suggest chart types (bar, line, pie) and optimal data groupings for clear and insightful visualizations. List the column names of each grouping in priority order: the category column first, then the numeric value column. Explain why each chart type is suitable for the data.

Your suggestions should be actionable and directly usable for creating visualizations.

Respond with a single JSON object of this shape and nothing else:
{{"suggestions": [{{"chartType": "bar", "dataGroupings": ["<category column>", "<value column>"], "reason": "<why>"}}]}}
"""

_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(?P<body>.*?)\s*```\s*$", re.DOTALL)


def build_suggestion_prompt(csv_text: str) -> str:
    """Return the prompt sent to the model for `csv_text`."""

    return SUGGESTION_PROMPT.format(csv_data=csv_text)


def suggest_chart_types(csv_text: str, *, client: Any | None = None) -> tuple[ChartSuggestion, ...]:
    """Ask the text-generation model for chart suggestions.

    Args:
        csv_text: Raw CSV text as uploaded by the user.
        client: Optional object exposing `models.generate_content`; a Gemini
            `genai.Client` configured from settings is used when omitted.

    Returns:
        Suggestions in the order the model returned them.

    Raises:
        SuggestionServiceError: When the model is not configured, the call
            fails, or the response cannot be decoded.
    """

    if client is None:
        client = _default_client()

    prompt = build_suggestion_prompt(csv_text)
    logger.info("Requesting chart suggestions (%d characters of CSV)", len(csv_text))
    try:
        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
            config={"response_mime_type": "application/json"},
        )
        text = response.text
    except Exception as exc:
        if settings.DEBUG:
            raise
        logger.exception("Chart suggestion request failed")
        raise SuggestionServiceError("Failed to get suggestions from the suggestion service.") from exc

    suggestions = decode_suggestions_text(_strip_code_fence(text or ""))
    logger.info("Received %d chart suggestions", len(suggestions))
    return suggestions


def _default_client() -> Any:
    """Return a Gemini client authenticated from settings."""

    api_key = getattr(settings, "GEMINI_API_KEY", "")
    if not api_key:
        raise SuggestionServiceError("GEMINI_API_KEY is not configured.")
    return genai.Client(api_key=api_key)


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, which some models add."""

    match = _CODE_FENCE_RE.match(text)
    return match.group("body") if match else text
