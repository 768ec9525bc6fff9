"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.visualizer, name="visualizer"),
    path("upload/", views.upload_csv, name="upload_csv"),
    path("clear/", views.clear_upload, name="clear_upload"),
    path("suggest/", views.request_suggestions, name="request_suggestions"),
    path("suggestions/<int:index>/apply/", views.apply_suggestion, name="apply_suggestion"),
]
