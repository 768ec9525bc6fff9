"""Views for CSV upload, chart configuration and chart suggestions."""

from __future__ import annotations

import logging
from typing import Any

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from analysis.chart_config_dto import ChartConfigDTO, config_from_suggestion, default_chart_config
from analysis.chart_config_engine import project_chart_data
from analysis.chart_config_validator import validate_chart_config
from core.charting.render import render_chart_payload
from core.charting.session_codec import (
    CONFIG_SESSION_KEY,
    SUGGESTIONS_SESSION_KEY,
    UPLOAD_SESSION_KEY,
    UploadedTable,
    decode_chart_config,
    decode_uploaded_table,
    encode_chart_config,
    encode_suggestions,
    encode_uploaded_table,
)
from core.charting.suggestion_codec import SuggestionServiceError, decode_suggestion_list
from core.forms import ChartConfigForm, CsvUploadForm, chart_config_initial
from core.suggestions import suggest_chart_types

logger = logging.getLogger(__name__)

PREVIEW_ROW_LIMIT = 10


def _session_upload(request: HttpRequest) -> UploadedTable | None:
    """Return the uploaded table stored in the session, if any."""

    return decode_uploaded_table(request.session.get(UPLOAD_SESSION_KEY))


def _store_config(request: HttpRequest, config: ChartConfigDTO | None) -> None:
    """Persist the chart configuration in the session."""

    if config is None:
        request.session.pop(CONFIG_SESSION_KEY, None)
    else:
        request.session[CONFIG_SESSION_KEY] = encode_chart_config(config)


@require_GET
def visualizer(request: HttpRequest) -> HttpResponse:
    """Render the visualizer: upload form, chart configuration, chart and suggestions."""

    upload = _session_upload(request)
    context: dict[str, Any] = {
        "upload_form": CsvUploadForm(),
        "upload": upload,
        "config_form": None,
        "chart": None,
        "chart_payload": None,
        "chart_warnings": (),
        "suggestions": (),
        "preview_rows": [],
    }
    if upload is None:
        return render(request, "core/visualizer.html", context)

    table = upload.table
    stored_config = decode_chart_config(request.session.get(CONFIG_SESSION_KEY))
    config = stored_config or default_chart_config(table.headers)

    if "chart_type" in request.GET:
        config_form = ChartConfigForm(request.GET, headers=table.headers)
        if config_form.is_valid():
            config = config_form.to_config(config)
            config_form = ChartConfigForm(initial=chart_config_initial(config), headers=table.headers)
    else:
        config_form = ChartConfigForm(initial=chart_config_initial(config), headers=table.headers)
    if config != stored_config:
        _store_config(request, config)

    if config is not None:
        projection = project_chart_data(table, config)
        chart = render_chart_payload(projection, config)
        validation = validate_chart_config(config, table=table)
        context["chart"] = chart
        context["chart_warnings"] = validation.warnings
        if chart.has_data:
            context["chart_payload"] = {"type": chart.chart_type, "data": chart.data}

    context["config_form"] = config_form
    context["config"] = config
    context["suggestions"] = decode_suggestion_list(request.session.get(SUGGESTIONS_SESSION_KEY))
    context["preview_rows"] = [[row.get(header, "") for header in table.headers] for row in table.rows[:PREVIEW_ROW_LIMIT]]
    return render(request, "core/visualizer.html", context)


@require_POST
def upload_csv(request: HttpRequest) -> HttpResponse:
    """Parse an uploaded CSV file and reset the chart state to its defaults."""

    form = CsvUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        for error in form.errors.get("csv_file", ["Please choose a CSV file to upload."]):
            messages.error(request, error)
        return redirect("core:visualizer")

    upload: UploadedTable = form.cleaned_data["csv_file"]
    logger.info(
        "Parsed upload %s: %d columns, %d rows",
        upload.file_name,
        len(upload.table.headers),
        upload.table.row_count,
    )
    request.session[UPLOAD_SESSION_KEY] = encode_uploaded_table(upload)
    request.session.pop(SUGGESTIONS_SESSION_KEY, None)
    _store_config(request, default_chart_config(upload.table.headers))
    messages.success(request, f"{upload.file_name} has been successfully processed.")
    return redirect("core:visualizer")


@require_POST
def clear_upload(request: HttpRequest) -> HttpResponse:
    """Forget the uploaded table, its configuration and its suggestions."""

    for key in (UPLOAD_SESSION_KEY, CONFIG_SESSION_KEY, SUGGESTIONS_SESSION_KEY):
        request.session.pop(key, None)
    return redirect("core:visualizer")


@require_POST
def request_suggestions(request: HttpRequest) -> HttpResponse:
    """Ask the suggestion service for chart suggestions for the uploaded CSV."""

    upload = _session_upload(request)
    if upload is None:
        messages.error(request, "Please upload a CSV file first.")
        return redirect("core:visualizer")

    try:
        suggestions = suggest_chart_types(upload.raw_text)
    except SuggestionServiceError as exc:
        logger.warning("Chart suggestions unavailable for %s: %s", upload.file_name, exc)
        messages.error(request, str(exc) or "Failed to get suggestions.")
        return redirect("core:visualizer")

    request.session[SUGGESTIONS_SESSION_KEY] = encode_suggestions(suggestions)
    if suggestions:
        messages.success(request, "Chart suggestions are ready.")
    else:
        messages.info(request, "No specific chart suggestions could be generated for this dataset.")
    return redirect("core:visualizer")


@require_POST
def apply_suggestion(request: HttpRequest, index: int) -> HttpResponse:
    """Apply a stored suggestion as the current chart configuration."""

    suggestions = decode_suggestion_list(request.session.get(SUGGESTIONS_SESSION_KEY))
    if _session_upload(request) is None or index >= len(suggestions):
        messages.error(request, "That suggestion is no longer available.")
        return redirect("core:visualizer")

    suggestion = suggestions[index]
    _store_config(request, config_from_suggestion(suggestion))
    messages.success(request, f"Applied {suggestion.chart_type} chart suggestion.")
    return redirect("core:visualizer")
