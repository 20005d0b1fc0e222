"""Unit tests for sparkline path building."""

from __future__ import annotations

import pytest

from analysis.sparkline import build_sparkline_path, format_coordinate, sparkline_trend, trend_direction

pytestmark = pytest.mark.unit


def test_empty_series_returns_empty_paths() -> None:
    """Empty input yields empty strings so callers can render a placeholder."""

    paths = build_sparkline_path([], 60, 20, True)
    assert paths.line_path == ""
    assert paths.fill_path == ""
    assert paths.is_empty


def test_single_point_uses_guarded_denominators() -> None:
    """A single value sits at x=0 on the bottom edge (range falls back to 1)."""

    paths = build_sparkline_path([5], 60, 20, True)
    assert paths.line_path == "M 0 20"
    assert paths.fill_path == "M 0 20 L 60 20 L 0 20 Z"


def test_two_points_span_the_full_box() -> None:
    """Min maps to the bottom edge and max to the top edge."""

    paths = build_sparkline_path([0, 10], 100, 50, True)
    assert paths.line_path == "M 0 50 L 100 0"
    assert paths.fill_path == "M 0 50 L 100 0 L 100 50 L 0 50 Z"
    assert paths.points == ((0.0, 50.0), (100.0, 0.0))
    assert paths.fill_points[-2:] == ((100.0, 50.0), (0.0, 50.0))


def test_fill_disabled_returns_empty_fill_path() -> None:
    """Without fill only the line path is produced."""

    paths = build_sparkline_path([1, 2, 3], 30, 10, False)
    assert paths.line_path
    assert paths.fill_path == ""
    assert paths.fill_points == ()


def test_flat_series_draws_on_bottom_edge() -> None:
    """A flat series uses a range of 1 and stays at the bottom."""

    assert build_sparkline_path([3, 3, 3], 10, 4, False).line_path == "M 0 4 L 5 4 L 10 4"


def test_fractional_coordinates_are_formatted_compactly() -> None:
    """Fractional vertices keep only the needed decimals."""

    assert build_sparkline_path([0, 1, 2], 10, 3, False).line_path == "M 0 3 L 5 1.5 L 10 0"
    assert format_coordinate(1 / 3) == "0.3333"
    assert format_coordinate(2.0) == "2"


def test_trend_uses_first_and_last_points() -> None:
    """Trend is last minus first; fewer than two points is flat."""

    assert sparkline_trend([1, 5, 2]) == 1
    assert sparkline_trend([7]) == 0
    assert trend_direction([1, 2]) == "up"
    assert trend_direction([2, 1]) == "down"
    assert trend_direction([]) == "up"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_coordinates_format_as_zero(value: float) -> None:
    """Non-finite coordinates never reach int() or round()."""

    assert format_coordinate(value) == "0"
