"""Template context processors for the Numora dashboard."""

from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest

from core.dashboard_state import load_selection


def dashboard_selection(request: HttpRequest) -> dict[str, object]:
    """Expose the selected symbol and poll interval to all templates.

    Args:
        request: Current request object.

    Returns:
        Context dict with `selected_symbol` and `market_poll_seconds`.
    """

    return {
        "selected_symbol": load_selection(request).symbol,
        "market_poll_seconds": settings.NUMORA_MARKET_POLL_SECONDS,
    }
