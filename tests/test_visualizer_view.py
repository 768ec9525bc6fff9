"""Django integration tests for the CSV visualizer views."""

from __future__ import annotations

from unittest import mock

import pytest
from django.template.defaultfilters import filesizeformat

from analysis.chart_config_engine import AXIS_FIELDS_REQUIRED
from analysis.dto import ChartSuggestion
from core.charting.session_codec import CONFIG_SESSION_KEY, SUGGESTIONS_SESSION_KEY, UPLOAD_SESSION_KEY
from core.charting.suggestion_codec import SuggestionServiceError

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


@pytest.fixture
def uploaded_client(client, csv_upload, grades_csv):
    """Return a client whose session holds the parsed grades export."""

    response = client.post("/upload/", {"csv_file": csv_upload(grades_csv)})
    assert response.status_code == 302
    return client


def _messages(response) -> list[str]:
    return [str(message) for message in response.context["messages"]]


def test_visualizer_renders_without_upload(client) -> None:
    """The page renders an empty state before any upload."""

    response = client.get("/")

    assert response.status_code == 200
    assert response.context["upload"] is None
    assert "No data uploaded yet." in response.content.decode("utf-8")


def test_upload_stores_table_and_default_config(client, csv_upload, grades_csv) -> None:
    """Uploading a CSV stores the table and defaults to a bar chart."""

    response = client.post("/upload/", {"csv_file": csv_upload(grades_csv)}, follow=True)

    assert response.status_code == 200
    assert "grades.csv has been successfully processed." in _messages(response)
    assert client.session[UPLOAD_SESSION_KEY]["headers"] == ["Student", "Score", "Attendance"]
    assert client.session[CONFIG_SESSION_KEY]["chart_type"] == "bar"
    chart = response.context["chart"]
    assert chart.chart_type == "bar"
    assert chart.data["labels"] == ["Amina", "Bruno", "Dara"]
    assert response.context["chart_payload"]["data"]["datasets"][0]["label"] == "Score"


def test_upload_rejects_empty_csv(client, csv_upload) -> None:
    """A header-only CSV is reported as empty and not stored."""

    response = client.post("/upload/", {"csv_file": csv_upload("a,b\n")}, follow=True)

    assert "The uploaded CSV file appears to be empty or incorrectly formatted." in _messages(response)
    assert UPLOAD_SESSION_KEY not in client.session


def test_upload_rejects_non_csv_files(client, csv_upload) -> None:
    """Files without a .csv name or text/csv type are rejected."""

    upload = csv_upload("a,b\n1,2", name="grades.txt", content_type="text/plain")

    response = client.post("/upload/", {"csv_file": upload}, follow=True)

    assert "Please upload a valid .csv file." in _messages(response)


def test_upload_rejects_files_over_the_size_limit(client, csv_upload, settings) -> None:
    """Uploads larger than CSV_UPLOAD_MAX_BYTES are rejected."""

    settings.CSV_UPLOAD_MAX_BYTES = 8

    response = client.post("/upload/", {"csv_file": csv_upload("a,b\n1,2\n3,4")}, follow=True)

    assert UPLOAD_SESSION_KEY not in client.session
    assert any("upload limit" in message for message in _messages(response))


def test_upload_help_text_reflects_size_limit(client, settings) -> None:
    """The upload hint advertises the configured size limit."""

    settings.CSV_UPLOAD_MAX_BYTES = 1024 * 1024

    response = client.get("/")

    help_text = response.context["upload_form"].fields["csv_file"].help_text
    assert help_text == f"CSV files up to {filesizeformat(1024 * 1024)}."


def test_unchanged_config_is_not_written_back(uploaded_client) -> None:
    """Plain page views leave the stored configuration untouched."""

    with mock.patch("core.views._store_config") as store_config:
        uploaded_client.get("/")
        uploaded_client.get("/", {"chart_type": "bar", "x_axis_key": "Student", "y_axis_key": "Score"})
        store_config.assert_not_called()

        uploaded_client.get("/", {"chart_type": "line"})

    store_config.assert_called_once()


def test_switching_to_pie_resets_fields(uploaded_client) -> None:
    """Changing the chart kind resets the selection to the first headers."""

    response = uploaded_client.get("/", {"chart_type": "pie", "x_axis_key": "Attendance", "y_axis_key": "Score"})

    config = response.context["config"]
    assert config.chart_type == "pie"
    assert (config.category_key, config.value_key) == ("Student", "Score")
    assert config.x_axis_key is None
    assert uploaded_client.session[CONFIG_SESSION_KEY]["category_key"] == "Student"


def test_field_selection_updates_chart(uploaded_client) -> None:
    """Selecting new fields for the current kind re-projects the chart."""

    response = uploaded_client.get("/", {"chart_type": "bar", "x_axis_key": "Student", "y_axis_key": "Attendance"})

    chart = response.context["chart"]
    assert chart.data["datasets"][0]["label"] == "Attendance"
    assert chart.data["datasets"][0]["data"] == [92.0, 234.56, 75.0]


def test_cleared_axis_shows_configuration_error(uploaded_client) -> None:
    """Clearing a required field shows the configuration error."""

    response = uploaded_client.get("/", {"chart_type": "bar", "x_axis_key": "Student", "y_axis_key": ""})

    assert response.context["chart"].error == AXIS_FIELDS_REQUIRED
    assert AXIS_FIELDS_REQUIRED in response.content.decode("utf-8")


def test_request_suggestions_requires_upload(client) -> None:
    """Asking for suggestions without data shows an error."""

    response = client.post("/suggest/", follow=True)

    assert "Please upload a CSV file first." in _messages(response)


def test_request_and_apply_suggestion(uploaded_client, grades_csv) -> None:
    """Suggestions are stored and can be applied as the chart configuration."""

    suggestions = (
        ChartSuggestion(chart_type="Pie", data_groupings=("Student", "Attendance"), reason="Share of attendance."),
    )
    with mock.patch("core.views.suggest_chart_types", return_value=suggestions) as suggest:
        response = uploaded_client.post("/suggest/", follow=True)

    suggest.assert_called_once_with(grades_csv)
    assert "Chart suggestions are ready." in _messages(response)
    assert response.context["suggestions"] == suggestions

    response = uploaded_client.post("/suggestions/0/apply/", follow=True)

    config = response.context["config"]
    assert (config.chart_type, config.category_key, config.value_key) == ("pie", "Student", "Attendance")
    assert response.context["chart"].data["labels"] == ["Amina", "Bruno", "Chen"]


def test_request_suggestions_reports_service_errors(uploaded_client) -> None:
    """Service failures become user-facing error messages."""

    with mock.patch(
        "core.views.suggest_chart_types",
        side_effect=SuggestionServiceError("GEMINI_API_KEY is not configured."),
    ):
        response = uploaded_client.post("/suggest/", follow=True)

    assert "GEMINI_API_KEY is not configured." in _messages(response)
    assert SUGGESTIONS_SESSION_KEY not in uploaded_client.session


def test_apply_missing_suggestion_shows_error(uploaded_client) -> None:
    """Applying an index that does not exist leaves the config unchanged."""

    response = uploaded_client.post("/suggestions/3/apply/", follow=True)

    assert "That suggestion is no longer available." in _messages(response)
    assert response.context["config"].chart_type == "bar"


def test_clear_upload_forgets_state(uploaded_client) -> None:
    """Clearing data removes the table and its configuration."""

    uploaded_client.post("/clear/")

    assert UPLOAD_SESSION_KEY not in uploaded_client.session
    assert CONFIG_SESSION_KEY not in uploaded_client.session
