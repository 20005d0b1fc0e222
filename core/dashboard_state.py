"""Session-backed dashboard selection state.

The selected market symbol, the order-book precision and the
minimize/maximize state of widgets are shared by every panel on the dashboard. They are loaded once per request into
a `DashboardSelection` and that same object is handed to each renderer, so
panels never read the session on their own.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Final

from django.conf import settings
from django.http import HttpRequest

from core.widgets import widget_keys

SELECTION_SESSION_KEY: Final[str] = "numora_dashboard_selection"


@dataclass(slots=True)
class DashboardSelection:
    """Mutable per-session dashboard state.

    Attributes:
        symbol: Currently selected market symbol.
        minimized: Keys of minimized widgets.
        maximized: Key of the single maximized widget, if any.
        precision: Order-book grouping precision, or None for the default.
    """

    symbol: str
    minimized: set[str] = field(default_factory=set)
    maximized: str | None = None
    precision: float | None = None

    def is_minimized(self, key: str) -> bool:
        """Return True when the widget is collapsed."""

        return key in self.minimized

    def is_maximized(self, key: str) -> bool:
        """Return True when the widget occupies the full dashboard."""

        return self.maximized == key

    def as_session(self) -> dict[str, object]:
        """Return a JSON-serializable session payload."""

        return {
            "symbol": self.symbol,
            "minimized": sorted(self.minimized),
            "maximized": self.maximized,
            "precision": self.precision,
        }


def default_symbol() -> str:
    """Return the configured default symbol."""

    return str(getattr(settings, "NUMORA_DEFAULT_SYMBOL", "BTC-PERP"))


def load_selection(request: HttpRequest) -> DashboardSelection:
    """Load the dashboard selection from the session.

    Args:
        request: Incoming request.

    Returns:
        The stored selection, or defaults when nothing is stored. Widget keys
        no longer present in the layout are dropped.
    """

    raw = getattr(request, "session", {}).get(SELECTION_SESSION_KEY) or {}
    configured = widget_keys()
    symbol = str(raw.get("symbol") or "").strip() or default_symbol()
    minimized = {str(key) for key in raw.get("minimized") or () if str(key) in configured}
    maximized = raw.get("maximized") or None
    if maximized not in configured:
        maximized = None
    return DashboardSelection(
        symbol=symbol,
        minimized=minimized,
        maximized=maximized,
        precision=_stored_precision(raw.get("precision")),
    )


def _stored_precision(raw: object) -> float | None:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def save_selection(request: HttpRequest, selection: DashboardSelection) -> None:
    """Persist the dashboard selection in the session."""

    request.session[SELECTION_SESSION_KEY] = selection.as_session()
    request.session.modified = True


def select_symbol(selection: DashboardSelection, symbol: str) -> DashboardSelection:
    """Set the selected symbol (blank input keeps the current one).

    Changing the symbol resets the order-book precision.
    """

    cleaned = symbol.strip()
    if cleaned and cleaned != selection.symbol:
        selection.symbol = cleaned
        selection.precision = None
    return selection


def select_precision(selection: DashboardSelection, precision: float | None) -> DashboardSelection:
    """Set the order-book grouping precision (None restores the default)."""

    selection.precision = precision
    return selection


def toggle_minimized(selection: DashboardSelection, key: str) -> DashboardSelection:
    """Collapse or expand a widget; a minimized widget cannot stay maximized."""

    if key in selection.minimized:
        selection.minimized.discard(key)
    else:
        selection.minimized.add(key)
        if selection.maximized == key:
            selection.maximized = None
    return selection


def toggle_maximized(selection: DashboardSelection, key: str) -> DashboardSelection:
    """Maximize a widget (restoring any other) or restore it when already maximized."""

    if selection.maximized == key:
        selection.maximized = None
    else:
        selection.maximized = key
        selection.minimized.discard(key)
    return selection
