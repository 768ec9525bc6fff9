"""Forms for the CSV visualizer workflows.

The visualizer requires:
- an upload form for a CSV file,
- a configuration form for chart kind and field selection.
"""

from __future__ import annotations

from typing import Sequence

from django import forms
from django.conf import settings
from django.template.defaultfilters import filesizeformat

from analysis.chart_config_dto import ChartConfigDTO, build_chart_config, with_chart_type
from core.charting.session_codec import UploadedTable
from core.parsers.csv_table import parse_table

CHART_TYPE_CHOICES = (
    ("bar", "Bar Chart"),
    ("line", "Line Chart"),
    ("pie", "Pie Chart"),
)


class CsvUploadForm(forms.Form):
    """Validate an uploaded CSV file and parse it into a table."""

    csv_file = forms.FileField(
        label="CSV file",
        widget=forms.ClearableFileInput(attrs={"accept": ".csv,text/csv"}),
    )

    def __init__(self, *args: object, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self.fields["csv_file"].help_text = f"CSV files up to {filesizeformat(settings.CSV_UPLOAD_MAX_BYTES)}."

    def clean_csv_file(self) -> UploadedTable:
        """Validate type, size and encoding, then parse the file.

        Returns:
            UploadedTable holding the file name, decoded text and parsed table.
        """

        uploaded = self.cleaned_data["csv_file"]
        name = uploaded.name or ""
        content_type = getattr(uploaded, "content_type", "") or ""
        if content_type != "text/csv" and not name.lower().endswith(".csv"):
            raise forms.ValidationError("Please upload a valid .csv file.")

        max_bytes = settings.CSV_UPLOAD_MAX_BYTES
        if uploaded.size is not None and uploaded.size > max_bytes:
            raise forms.ValidationError(f"{name} is larger than the {filesizeformat(max_bytes)} upload limit.")

        try:
            raw_text = uploaded.read().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise forms.ValidationError(f"Could not read {name}. Please ensure it is UTF-8 text.") from exc

        table = parse_table(raw_text)
        if table.is_empty:
            raise forms.ValidationError("The uploaded CSV file appears to be empty or incorrectly formatted.")
        return UploadedTable(file_name=name, raw_text=raw_text, table=table)


class ChartConfigForm(forms.Form):
    """Validate chart kind and field selections against the uploaded headers."""

    chart_type = forms.ChoiceField(choices=CHART_TYPE_CHOICES, label="Chart Type")
    x_axis_key = forms.ChoiceField(required=False, choices=(), label="X-Axis (Category)")
    y_axis_key = forms.ChoiceField(required=False, choices=(), label="Y-Axis (Value)")
    category_key = forms.ChoiceField(required=False, choices=(), label="Category")
    value_key = forms.ChoiceField(required=False, choices=(), label="Value")

    def __init__(self, *args: object, headers: Sequence[str] = (), **kwargs: object) -> None:
        """Populate the field choices from the uploaded table headers.

        Args:
            *args: Positional args forwarded to `forms.Form`.
            headers: Uploaded table headers.
            **kwargs: Keyword args forwarded to `forms.Form`.
        """

        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self.headers = tuple(headers)
        header_choices = [("", "---------")] + [(header, header) for header in dict.fromkeys(self.headers)]
        for name in ("x_axis_key", "y_axis_key", "category_key", "value_key"):
            self.fields[name].choices = header_choices
            if not self.headers:
                self.fields[name].disabled = True

    def to_config(self, previous: ChartConfigDTO | None) -> ChartConfigDTO:
        """Build a ChartConfigDTO from validated data.

        Args:
            previous: The configuration currently shown, if any.

        Returns:
            A config for the selected kind. Changing the kind resets the field
            selection to the first and second headers.
        """

        chart_type = self.cleaned_data["chart_type"]
        if previous is None or previous.chart_type != chart_type:
            return with_chart_type(previous, chart_type, headers=self.headers)
        if chart_type == "pie":
            primary = self.cleaned_data.get("category_key")
            secondary = self.cleaned_data.get("value_key")
        else:
            primary = self.cleaned_data.get("x_axis_key")
            secondary = self.cleaned_data.get("y_axis_key")
        return build_chart_config(chart_type, primary=primary, secondary=secondary)


def chart_config_initial(config: ChartConfigDTO | None) -> dict[str, str]:
    """Return initial form values for an existing configuration."""

    if config is None:
        return {}
    return {
        "chart_type": config.chart_type,
        "x_axis_key": config.x_axis_key or "",
        "y_axis_key": config.y_axis_key or "",
        "category_key": config.category_key or "",
        "value_key": config.value_key or "",
    }
