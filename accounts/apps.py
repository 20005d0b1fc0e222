"""Django app configuration for accounts."""

from __future__ import annotations

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """AppConfig for user accounts and trader profiles."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"

    def ready(self) -> None:
        """Register profile signal handlers."""

        from accounts import signals  # noqa: F401
