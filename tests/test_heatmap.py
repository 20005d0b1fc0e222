"""Unit tests for market heatmap layout."""

from __future__ import annotations

import pytest

from analysis.dto import MarketTicker
from analysis.heatmap import build_heatmap_cells, change_intensity, heatmap_from_tickers

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("change", "bucket"),
    [
        (0.0, "neutral"),
        (1.99, "neutral"),
        (-2.0, "low"),
        (4.99, "low"),
        (5.0, "medium"),
        (-9.9, "medium"),
        (10.0, "high"),
        (-25.0, "high"),
    ],
)
def test_change_intensity_buckets(change: float, bucket: str) -> None:
    """Absolute change selects the intensity bucket."""

    assert change_intensity(change) == bucket


def test_cells_are_sorted_by_absolute_change_and_scaled_by_share() -> None:
    """Largest movers lead; scale and intensity follow the share of total movement."""

    cells = build_heatmap_cells([("A", 1.0), ("B", -3.0)])
    assert [cell.label for cell in cells] == ["B", "A"]

    b, a = cells
    assert b.share == pytest.approx(75)
    assert b.scale == pytest.approx(0.925)
    assert b.intensity == 1.0
    assert not b.positive

    assert a.share == pytest.approx(25)
    assert a.scale == pytest.approx(0.775)
    assert a.intensity == pytest.approx(0.5)
    assert a.positive


def test_zero_total_produces_minimum_scale() -> None:
    """All-flat markets do not divide by zero."""

    (cell,) = build_heatmap_cells([("A", 0.0)])
    assert cell.share == 0
    assert cell.scale == pytest.approx(0.7)
    assert cell.intensity == 0


def test_limit_keeps_largest_movers() -> None:
    """A limit trims after sorting, keeping the biggest absolute changes."""

    cells = build_heatmap_cells([("A", 1), ("B", -8), ("C", 4)], limit=2)
    assert [cell.label for cell in cells] == ["B", "C"]


def test_heatmap_from_tickers_uses_display_symbols() -> None:
    """Ticker labels drop the -PERP suffix."""

    cells = heatmap_from_tickers([MarketTicker(symbol="ETH-PERP", price=3000, change_24h=-2.5)])
    assert cells[0].label == "ETH"
    assert cells[0].bucket == "low"
