"""Order book grouping and ladder construction.

Raw L2 levels are bucketed by a price precision chosen from the mid price:
bids round down and asks round up so a bucket never shows a better price than
any level it contains.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .dto import OrderBookLadder, OrderBookLevel, OrderBookRow

DEFAULT_MAX_LEVELS = 15


def default_precision(mid_price: float) -> float:
    """Return the default grouping precision for a mid price."""

    if mid_price >= 10_000:
        return 10.0
    if mid_price >= 1_000:
        return 1.0
    if mid_price >= 100:
        return 0.1
    if mid_price >= 1:
        return 0.01
    return 0.0001


def precision_options(mid_price: float) -> tuple[float, ...]:
    """Return the selectable grouping precisions for a mid price."""

    if mid_price >= 10_000:
        return (100.0, 50.0, 10.0, 5.0, 1.0)
    if mid_price >= 1_000:
        return (10.0, 5.0, 1.0, 0.5, 0.1)
    if mid_price >= 100:
        return (1.0, 0.5, 0.1, 0.05, 0.01)
    if mid_price >= 1:
        return (0.1, 0.05, 0.01, 0.005, 0.001)
    return (0.01, 0.001, 0.0001, 0.00001)


def is_precision_option(precision: float, best_bid: float) -> bool:
    """Return True when `precision` is one of the options offered for `best_bid`."""

    return precision in precision_options(best_bid)


def price_decimals(precision: float) -> int:
    """Return the number of decimals used to display a grouped price."""

    for threshold, decimals in ((10, 0), (1, 1), (0.1, 2), (0.01, 3), (0.001, 4), (0.0001, 5)):
        if precision >= threshold:
            return decimals
    return 6


def parse_levels(raw_levels: Iterable[object]) -> tuple[OrderBookLevel, ...]:
    """Parse feed levels into OrderBookLevel records.

    Accepts either `{"px": ..., "sz": ...}` / `{"price": ..., "size": ...}`
    objects or `[price, size]` pairs; values may be numeric strings.

    Args:
        raw_levels: Levels as decoded from JSON.

    Returns:
        Parsed levels, skipping entries without a finite price and size.
    """

    levels: list[OrderBookLevel] = []
    for raw in raw_levels:
        if isinstance(raw, dict):
            price = raw.get("px", raw.get("price"))
            size = raw.get("sz", raw.get("size"))
        elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
            price, size = raw[0], raw[1]
        else:
            continue
        try:
            level = OrderBookLevel(price=float(price), size=float(size))
        except (TypeError, ValueError):
            continue
        if math.isfinite(level.price) and math.isfinite(level.size):
            levels.append(level)
    return tuple(levels)


def group_levels(levels: Iterable[OrderBookLevel], precision: float, *, is_ask: bool) -> tuple[OrderBookLevel, ...]:
    """Bucket levels by price precision and sum sizes per bucket.

    Args:
        levels: Raw levels for one side of the book.
        precision: Bucket width.
        is_ask: True for asks (round up), False for bids (round down).

    Returns:
        Grouped levels sorted best price first.
    """

    decimals = price_decimals(precision)
    grouped: dict[float, float] = {}
    for level in levels:
        steps = level.price / precision
        # Rounding first keeps float noise (e.g. 100.30000000000001) out of the bucket.
        steps = round(steps, 9)
        bucket_steps = math.ceil(steps) if is_ask else math.floor(steps)
        bucket = round(bucket_steps * precision, decimals)
        grouped[bucket] = grouped.get(bucket, 0.0) + level.size

    ordered = sorted(grouped.items(), key=lambda item: item[0], reverse=not is_ask)
    return tuple(OrderBookLevel(price=price, size=size) for price, size in ordered)


def _rows(levels: Sequence[OrderBookLevel], *, side: str, max_size: float) -> tuple[OrderBookRow, ...]:
    rows: list[OrderBookRow] = []
    running = 0.0
    for level in levels:
        running += level.size
        rows.append(
            OrderBookRow(
                price=level.price,
                size=level.size,
                total=running,
                depth=level.size / max_size if max_size > 0 else 0.0,
                side=side,
            )
        )
    return tuple(rows)


def build_order_book(
    bids: Iterable[OrderBookLevel],
    asks: Iterable[OrderBookLevel],
    *,
    precision: float | None = None,
    max_levels: int = DEFAULT_MAX_LEVELS,
) -> OrderBookLadder:
    """Build a grouped, depth-annotated order book ladder.

    Args:
        bids: Raw bid levels.
        asks: Raw ask levels.
        precision: Optional grouping precision; defaults from the best bid.
        max_levels: Maximum rows per side.

    Returns:
        OrderBookLadder with bids (best first), asks (best first), spread and
        the precision options for the best bid.
    """

    sorted_bids = sorted(bids, key=lambda level: level.price, reverse=True)
    sorted_asks = sorted(asks, key=lambda level: level.price)

    options = precision_options(sorted_bids[0].price) if sorted_bids else ()
    if precision is None and sorted_bids:
        precision = default_precision(sorted_bids[0].price)

    if precision is not None:
        display_bids = group_levels(sorted_bids, precision, is_ask=False)[:max_levels]
        display_asks = group_levels(sorted_asks, precision, is_ask=True)[:max_levels]
        decimals = price_decimals(precision)
    else:
        display_bids = tuple(sorted_bids[:max_levels])
        display_asks = tuple(sorted_asks[:max_levels])
        decimals = 2

    max_size = max([level.size for level in (*display_bids, *display_asks)], default=0.0)
    spread = None
    if display_bids and display_asks:
        spread = display_asks[0].price - display_bids[0].price

    return OrderBookLadder(
        bids=_rows(display_bids, side="bid", max_size=max_size),
        asks=_rows(display_asks, side="ask", max_size=max_size),
        precision=precision,
        spread=spread,
        max_size=max_size,
        decimals=decimals,
        options=options,
    )
