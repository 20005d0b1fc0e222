"""Views for the market dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render

from analysis.dto import HeatmapCell, MarketTicker, OrderBookLadder
from analysis.heatmap import heatmap_from_tickers
from analysis.markets import find_ticker, select_symbols
from analysis.orderbook import build_order_book, is_precision_option
from core.dashboard_state import (
    DashboardSelection,
    load_selection,
    save_selection,
    select_precision,
    select_symbol,
    toggle_maximized,
    toggle_minimized,
)
from core.forms import PrecisionSelectForm, SymbolSelectForm, symbol_choices
from core.market_feed import MarketFeedError, fetch_market_tickers, fetch_order_book
from core.redirects import redirect_back
from core.widgets import WidgetDefinition, load_widgets, widget_keys

logger = logging.getLogger(__name__)

HEATMAP_LIMIT = 12


@dataclass(frozen=True, slots=True)
class MarketSnapshot:
    """Everything the dashboard panels render for one request.

    Attributes:
        tickers: All parsed tickers.
        majors: Tickers for the configured major symbols, in configured order.
        selected: Ticker for the selected symbol, if present in the feed.
        heatmap: Heatmap cells for all tickers.
        order_book: Ladder for the selected symbol, if an order book is available.
        advancing_share: Percentage of tickers with a non-negative 24h change.
        average_move: Mean absolute 24h change across tickers.
        feed_error: True when the upstream feed failed for this render.
    """

    tickers: tuple[MarketTicker, ...]
    majors: tuple[MarketTicker, ...]
    selected: MarketTicker | None
    heatmap: tuple[HeatmapCell, ...]
    order_book: OrderBookLadder | None
    advancing_share: float
    average_move: float
    feed_error: bool = False


@dataclass(frozen=True, slots=True)
class WidgetPanel:
    """A widget definition paired with its per-session display state."""

    widget: WidgetDefinition
    minimized: bool
    maximized: bool
    hidden: bool


def _load_tickers() -> tuple[tuple[MarketTicker, ...], bool]:
    try:
        return fetch_market_tickers(), False
    except MarketFeedError as exc:
        logger.warning("Market feed unavailable: %s", exc)
        return (), True


def _load_order_book(symbol: str, precision: float | None = None) -> tuple[OrderBookLadder | None, bool]:
    try:
        bids, asks = fetch_order_book(symbol)
    except MarketFeedError as exc:
        logger.warning("Order book unavailable for %s: %s", symbol, exc)
        return None, True
    if not bids and not asks:
        return None, False
    best_bid = max((level.price for level in bids), default=None)
    if precision is not None and (best_bid is None or not is_precision_option(precision, best_bid)):
        precision = None
    return build_order_book(bids, asks, precision=precision), False


def build_market_snapshot(selection: DashboardSelection, *, include_order_book: bool = True) -> MarketSnapshot:
    """Fetch market data and derive every panel's inputs for `selection`.

    Args:
        selection: Shared dashboard selection (selected symbol and precision).
        include_order_book: When False, skip the order-book request.

    Returns:
        A MarketSnapshot; feed failures produce empty panels with `feed_error` set.
    """

    tickers, feed_error = _load_tickers()
    order_book = None
    if include_order_book:
        order_book, book_error = _load_order_book(selection.symbol, selection.precision)
        feed_error = feed_error or book_error

    advancing = sum(1 for ticker in tickers if ticker.positive)
    return MarketSnapshot(
        tickers=tickers,
        majors=select_symbols(tickers, settings.NUMORA_MAJOR_SYMBOLS),
        selected=find_ticker(tickers, selection.symbol),
        heatmap=heatmap_from_tickers(tickers, limit=HEATMAP_LIMIT),
        order_book=order_book,
        advancing_share=advancing / len(tickers) * 100 if tickers else 0.0,
        average_move=sum(abs(ticker.change_24h) for ticker in tickers) / len(tickers) if tickers else 0.0,
        feed_error=feed_error,
    )


def widget_panels(selection: DashboardSelection) -> list[WidgetPanel]:
    """Pair configured widgets with the session's minimize/maximize state.

    When one widget is maximized every other widget is hidden.
    """

    panels: list[WidgetPanel] = []
    for widget in load_widgets():
        maximized = selection.is_maximized(widget.key)
        panels.append(
            WidgetPanel(
                widget=widget,
                minimized=selection.is_minimized(widget.key),
                maximized=maximized,
                hidden=selection.maximized is not None and not maximized,
            )
        )
    return panels


def dashboard(request: HttpRequest) -> HttpResponse:
    """Render the market dashboard."""

    selection = load_selection(request)
    snapshot = build_market_snapshot(selection)
    return render(
        request,
        "core/dashboard.html",
        {
            "selection": selection,
            "snapshot": snapshot,
            "panels": widget_panels(selection),
            "symbol_choices": symbol_choices(),
        },
    )


def market_overview_fragment(request: HttpRequest) -> HttpResponse:
    """Render the market overview cards for client-side polling."""

    selection = load_selection(request)
    snapshot = build_market_snapshot(selection, include_order_book=False)
    return render(
        request,
        "core/partials/market_overview.html",
        {"selection": selection, "snapshot": snapshot},
    )


def market_data_api(request: HttpRequest) -> JsonResponse:
    """Return the cached market tickers as JSON."""

    tickers, feed_error = _load_tickers()
    status = 502 if feed_error else 200
    return JsonResponse(
        {"marketData": [ticker.as_json() for ticker in tickers], "error": feed_error},
        status=status,
    )


def select_symbol_view(request: HttpRequest) -> HttpResponse:
    """Store the posted symbol as the shared dashboard selection."""

    if request.method != "POST":
        return redirect("core:dashboard")

    form = SymbolSelectForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Enter a valid market symbol.")
        return redirect_back(request)

    selection = select_symbol(load_selection(request), form.cleaned_data["symbol"])
    save_selection(request, selection)
    return redirect_back(request)


def select_precision_view(request: HttpRequest) -> HttpResponse:
    """Store the posted order-book precision for the selected symbol.

    The precision must be one of the options offered for the current best
    bid; an empty value restores the default grouping.
    """

    if request.method != "POST":
        return redirect("core:dashboard")

    form = PrecisionSelectForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Enter a valid order book precision.")
        return redirect_back(request)

    selection = load_selection(request)
    precision = form.cleaned_data["precision"]
    if precision is not None:
        try:
            bids, _ = fetch_order_book(selection.symbol)
        except MarketFeedError as exc:
            logger.warning("Order book unavailable for %s: %s", selection.symbol, exc)
            messages.error(request, "Order book is temporarily unavailable.")
            return redirect_back(request)
        best_bid = max((level.price for level in bids), default=None)
        if best_bid is None or not is_precision_option(precision, best_bid):
            messages.error(request, f"Precision {precision:g} is not available for {selection.symbol}.")
            return redirect_back(request)

    save_selection(request, select_precision(selection, precision))
    return redirect_back(request)


def _toggle_widget(request: HttpRequest, key: str, *, maximize: bool) -> HttpResponse:
    if key not in widget_keys():
        raise Http404(f"Unknown widget: {key}")
    if request.method != "POST":
        return redirect("core:dashboard")

    selection = load_selection(request)
    if maximize:
        toggle_maximized(selection, key)
    else:
        toggle_minimized(selection, key)
    save_selection(request, selection)
    return redirect_back(request)


def toggle_widget_minimized(request: HttpRequest, key: str) -> HttpResponse:
    """Collapse or expand a dashboard widget."""

    return _toggle_widget(request, key, maximize=False)


def toggle_widget_maximized(request: HttpRequest, key: str) -> HttpResponse:
    """Maximize or restore a dashboard widget."""

    return _toggle_widget(request, key, maximize=True)
