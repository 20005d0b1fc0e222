"""App configuration for the core dashboard app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (dashboard views, widgets and SVG tags)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Dashboard"
