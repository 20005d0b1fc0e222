"""Unit tests for session-backed dashboard selection state."""

from __future__ import annotations

import pytest
from django.contrib.sessions.backends.signed_cookies import SessionStore
from django.test import RequestFactory

from core.dashboard_state import (
    SELECTION_SESSION_KEY,
    DashboardSelection,
    load_selection,
    save_selection,
    select_precision,
    select_symbol,
    toggle_maximized,
    toggle_minimized,
)

pytestmark = pytest.mark.unit


def _request():
    request = RequestFactory().get("/")
    request.session = SessionStore()
    return request


def test_load_selection_defaults_to_configured_symbol(settings) -> None:
    """An empty session yields the default symbol and no widget state."""

    settings.NUMORA_DEFAULT_SYMBOL = "ETH-PERP"
    selection = load_selection(_request())
    assert selection.symbol == "ETH-PERP"
    assert selection.minimized == set()
    assert selection.maximized is None


def test_save_and_load_round_trip_through_session() -> None:
    """Saved state is read back from the same session."""

    request = _request()
    save_selection(request, DashboardSelection(symbol="SOL-PERP", minimized={"heatmap"}, maximized="price"))

    assert request.session[SELECTION_SESSION_KEY] == {
        "symbol": "SOL-PERP",
        "minimized": ["heatmap"],
        "maximized": "price",
        "precision": None,
    }
    loaded = load_selection(request)
    assert loaded.symbol == "SOL-PERP"
    assert loaded.is_minimized("heatmap")
    assert loaded.is_maximized("price")


def test_select_symbol_ignores_blank_input() -> None:
    """A blank symbol keeps the current selection."""

    selection = DashboardSelection(symbol="BTC-PERP")
    assert select_symbol(selection, "  ").symbol == "BTC-PERP"
    assert select_symbol(selection, " ETH-PERP ").symbol == "ETH-PERP"


def test_toggle_minimized_flips_and_restores_maximized_widget() -> None:
    """Minimizing the maximized widget also restores the layout."""

    selection = DashboardSelection(symbol="BTC-PERP", maximized="price")
    toggle_minimized(selection, "price")
    assert selection.is_minimized("price")
    assert selection.maximized is None

    toggle_minimized(selection, "price")
    assert not selection.is_minimized("price")


def test_toggle_maximized_allows_a_single_widget() -> None:
    """Maximizing another widget replaces the current one and expands it."""

    selection = DashboardSelection(symbol="BTC-PERP", minimized={"heatmap"})
    toggle_maximized(selection, "price")
    assert selection.maximized == "price"

    toggle_maximized(selection, "heatmap")
    assert selection.maximized == "heatmap"
    assert not selection.is_minimized("heatmap")

    toggle_maximized(selection, "heatmap")
    assert selection.maximized is None


def test_precision_round_trips_and_resets_on_symbol_change() -> None:
    """The chosen precision persists until another symbol is selected."""

    request = _request()
    save_selection(request, select_precision(DashboardSelection(symbol="BTC-PERP"), 50.0))
    selection = load_selection(request)
    assert selection.precision == 50.0

    select_symbol(selection, "BTC-PERP")
    assert selection.precision == 50.0
    select_symbol(selection, "ETH-PERP")
    assert selection.precision is None


@pytest.mark.parametrize("stored", ["abc", 0, -1, float("nan"), None])
def test_invalid_stored_precision_falls_back_to_default(stored: object) -> None:
    """Unusable precision values in the session are ignored."""

    request = _request()
    request.session[SELECTION_SESSION_KEY] = {"symbol": "BTC-PERP", "precision": stored}
    assert load_selection(request).precision is None


def test_stale_widget_keys_are_dropped_on_load() -> None:
    """Keys no longer in the widget layout do not hide or collapse panels."""

    request = _request()
    request.session[SELECTION_SESSION_KEY] = {
        "symbol": "BTC-PERP",
        "minimized": ["removed", "heatmap"],
        "maximized": "removed",
    }
    selection = load_selection(request)
    assert selection.maximized is None
    assert selection.minimized == {"heatmap"}
