"""Market-data fetch interface.

Tickers and order-book levels are fetched as JSON over HTTP and cached in
Django's cache for `NUMORA_MARKET_DATA_CACHE_SECONDS`, so a page render and
the polling fragment share one upstream request per interval.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from django.conf import settings
from django.core.cache import cache

from analysis.dto import MarketTicker, OrderBookLevel
from analysis.markets import MarketDataError, parse_market_payload
from analysis.orderbook import parse_levels

logger = logging.getLogger(__name__)

TICKERS_CACHE_KEY = "numora:market-data:tickers"
ORDER_BOOK_CACHE_KEY = "numora:market-data:book:{symbol}"
USER_AGENT = "numora-dashboard/0.1"


class MarketFeedError(Exception):
    """Raised when market data cannot be fetched or decoded."""


def fetch_json(url: str, *, timeout: float | None = None) -> object:
    """Fetch and decode a JSON document.

    Args:
        url: Absolute URL.
        timeout: Socket timeout in seconds; defaults to `NUMORA_MARKET_HTTP_TIMEOUT`.

    Returns:
        The decoded JSON value.

    Raises:
        MarketFeedError: On network errors, non-2xx responses, or invalid JSON.
    """

    request = urllib.request.Request(
        url,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
    )
    effective_timeout = timeout if timeout is not None else settings.NUMORA_MARKET_HTTP_TIMEOUT
    try:
        with urllib.request.urlopen(request, timeout=effective_timeout) as response:
            body = response.read()
    except (urllib.error.URLError, TimeoutError, OSError) as exc:
        raise MarketFeedError(f"Failed to fetch {url}: {exc}") from exc

    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MarketFeedError(f"Invalid JSON from {url}: {exc}") from exc


def fetch_market_tickers(*, use_cache: bool = True) -> tuple[MarketTicker, ...]:
    """Return current market tickers.

    Args:
        use_cache: When False, bypass and refresh the cache.

    Returns:
        Parsed tickers, or an empty tuple when no market-data URL is configured.

    Raises:
        MarketFeedError: When the endpoint fails or returns an unusable payload.
    """

    url = settings.NUMORA_MARKET_DATA_URL
    if not url:
        return ()

    if use_cache:
        cached = cache.get(TICKERS_CACHE_KEY)
        if cached is not None:
            return cached

    payload = fetch_json(url)
    try:
        tickers = parse_market_payload(payload)
    except MarketDataError as exc:
        raise MarketFeedError(str(exc)) from exc

    cache.set(TICKERS_CACHE_KEY, tickers, settings.NUMORA_MARKET_DATA_CACHE_SECONDS)
    logger.debug("Fetched %d market tickers", len(tickers))
    return tickers


def fetch_order_book(symbol: str, *, use_cache: bool = True) -> tuple[tuple[OrderBookLevel, ...], tuple[OrderBookLevel, ...]]:
    """Return raw (bids, asks) levels for a symbol.

    The endpoint returns `{"levels": [bids, asks]}` where each level is
    `{"px": ..., "sz": ...}`, or `{"bids": [...], "asks": [...]}`.

    Args:
        symbol: Market symbol substituted into `NUMORA_ORDER_BOOK_URL`.
        use_cache: When False, bypass and refresh the cache.

    Returns:
        Bid and ask levels; both empty when no order-book URL is configured.

    Raises:
        MarketFeedError: When the endpoint fails or the payload has no levels.
    """

    template = settings.NUMORA_ORDER_BOOK_URL
    if not template:
        return (), ()

    cache_key = ORDER_BOOK_CACHE_KEY.format(symbol=symbol)
    if use_cache:
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

    payload = fetch_json(template.format(symbol=urllib.parse.quote(symbol, safe="")))
    if not isinstance(payload, dict):
        raise MarketFeedError("Order book payload must be an object.")

    levels = payload.get("levels")
    if isinstance(levels, list) and len(levels) == 2:
        raw_bids, raw_asks = levels
    else:
        raw_bids, raw_asks = payload.get("bids"), payload.get("asks")
    if not isinstance(raw_bids, list) or not isinstance(raw_asks, list):
        raise MarketFeedError(f"Order book payload for {symbol} has no bid/ask levels.")

    book = (parse_levels(raw_bids), parse_levels(raw_asks))
    cache.set(cache_key, book, settings.NUMORA_MARKET_DATA_CACHE_SECONDS)
    return book
