"""Market heatmap cell layout.

Cells are ordered by absolute change so the largest movers lead the grid,
and each cell's scale and background intensity follow its share of the total
absolute change.
"""

from __future__ import annotations

from collections.abc import Iterable

from .dto import HeatmapCell, MarketTicker
from .markets import display_symbol

INTENSITY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (2.0, "neutral"),
    (5.0, "low"),
    (10.0, "medium"),
)


def change_intensity(change: float) -> str:
    """Bucket a percentage change into a heatmap intensity level.

    Args:
        change: Signed percentage change.

    Returns:
        One of "neutral", "low", "medium" or "high".
    """

    magnitude = abs(change)
    for threshold, bucket in INTENSITY_THRESHOLDS:
        if magnitude < threshold:
            return bucket
    return "high"


def build_heatmap_cells(
    items: Iterable[tuple[str, float]],
    *,
    limit: int | None = None,
) -> tuple[HeatmapCell, ...]:
    """Build sorted heatmap cells from (label, change) pairs.

    Args:
        items: Label and signed percentage change pairs.
        limit: Optional maximum number of cells to return.

    Returns:
        Cells sorted by absolute change, largest first.
    """

    pairs = [(label, float(value)) for label, value in items]
    total = sum(abs(value) for _, value in pairs)
    ordered = sorted(pairs, key=lambda pair: abs(pair[1]), reverse=True)
    if limit is not None:
        ordered = ordered[:limit]

    cells: list[HeatmapCell] = []
    for label, value in ordered:
        share = abs(value) / total * 100 if total else 0.0
        cells.append(
            HeatmapCell(
                label=label,
                value=value,
                share=share,
                scale=0.7 + share / 100 * 0.3,
                intensity=min(share / 50, 1.0),
                bucket=change_intensity(value),
            )
        )
    return tuple(cells)


def heatmap_from_tickers(tickers: Iterable[MarketTicker], *, limit: int | None = None) -> tuple[HeatmapCell, ...]:
    """Build heatmap cells from parsed market tickers."""

    return build_heatmap_cells(
        ((display_symbol(ticker.symbol), ticker.change_24h) for ticker in tickers),
        limit=limit,
    )
