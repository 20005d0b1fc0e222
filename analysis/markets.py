"""Parsing helpers for market-data payloads.

Market endpoints return JSON rows such as
`{"symbol": "BTC-PERP", "price": "97000.5", "change24h": "1.2", "volume24h": "..."}`.
Prices and changes may be numeric strings.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from .dto import MarketTicker

logger = logging.getLogger(__name__)

PERP_SUFFIX = "-PERP"


class MarketDataError(ValueError):
    """Raised when a market-data row cannot be parsed."""


def display_symbol(symbol: str) -> str:
    """Return the symbol without a trailing `-PERP` suffix."""

    if symbol.endswith(PERP_SUFFIX):
        return symbol[: -len(PERP_SUFFIX)]
    return symbol


def _number(row: Mapping[str, object], *keys: str, required: bool = True) -> float | None:
    for key in keys:
        raw = row.get(key)
        if raw is None or raw == "":
            continue
        try:
            value = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise MarketDataError(f"Field {key!r} is not numeric: {raw!r}") from exc
        if not math.isfinite(value):
            raise MarketDataError(f"Field {key!r} is not finite: {raw!r}")
        return value
    if required:
        raise MarketDataError(f"Missing field {keys[0]!r}.")
    return None


def parse_market_ticker(row: Mapping[str, object]) -> MarketTicker:
    """Parse a single market-data row.

    Args:
        row: Decoded JSON object.

    Returns:
        A MarketTicker.

    Raises:
        MarketDataError: When the symbol is missing or a required number is
            missing or not numeric.
    """

    symbol = str(row.get("symbol") or "").strip()
    if not symbol:
        raise MarketDataError("Missing field 'symbol'.")
    return MarketTicker(
        symbol=symbol,
        price=_number(row, "price") or 0.0,
        change_24h=_number(row, "change24h", "change_24h") or 0.0,
        volume=_number(row, "volume", "volume24h", required=False),
    )


def parse_market_payload(payload: object) -> tuple[MarketTicker, ...]:
    """Parse a market-data payload into tickers.

    Args:
        payload: Either a list of row objects or an object carrying a
            `marketData` list.

    Returns:
        Parsed tickers in payload order; invalid rows are skipped.

    Raises:
        MarketDataError: When the payload has no recognizable row list.
    """

    rows: object = payload
    if isinstance(payload, Mapping):
        rows = payload.get("marketData", payload.get("markets"))
    if not isinstance(rows, list):
        raise MarketDataError("Market payload must be a list or contain a 'marketData' list.")

    tickers: list[MarketTicker] = []
    for row in rows:
        if not isinstance(row, Mapping):
            logger.warning("Skipping non-object market row: %r", row)
            continue
        try:
            tickers.append(parse_market_ticker(row))
        except MarketDataError as exc:
            logger.warning("Skipping invalid market row %r: %s", row.get("symbol"), exc)
    return tuple(tickers)


def select_symbols(tickers: Iterable[MarketTicker], symbols: Sequence[str]) -> tuple[MarketTicker, ...]:
    """Return tickers for `symbols`, in the order requested.

    Symbols match either exactly or by display symbol, so "BTC" selects
    "BTC-PERP".
    """

    by_key: dict[str, MarketTicker] = {}
    for ticker in tickers:
        by_key.setdefault(ticker.symbol, ticker)
        by_key.setdefault(display_symbol(ticker.symbol), ticker)
    return tuple(by_key[symbol] for symbol in symbols if symbol in by_key)


def find_ticker(tickers: Iterable[MarketTicker], symbol: str) -> MarketTicker | None:
    """Return the ticker matching `symbol` (exact or display symbol)."""

    matches = select_symbols(tickers, [symbol])
    return matches[0] if matches else None
