"""Template context processors for eduDashboard."""

from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest


def suggestions_enabled(request: HttpRequest) -> dict[str, bool]:
    """Expose whether the chart suggestion service is configured.

    Args:
        request: Current request object.

    Returns:
        Context dict with `suggestions_enabled` boolean.
    """

    _ = request
    return {"suggestions_enabled": bool(getattr(settings, "GEMINI_API_KEY", ""))}
