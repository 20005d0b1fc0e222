"""SVG path builder for sparklines.

Values are normalized against the observed min/max of the series so the line
fills the full drawing height. A flat series uses a fallback range of 1.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .dto import SparklinePath


def format_coordinate(value: float) -> str:
    """Format a coordinate compactly for SVG path data.

    Args:
        value: Coordinate value.

    Returns:
        The value without a trailing `.0`, rounded to 4 decimals otherwise.
        Non-finite values render as `0`.
    """

    if not math.isfinite(float(value)):
        return "0"
    rounded = round(float(value), 4)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.4f}".rstrip("0").rstrip(".")


def path_from_points(points: Sequence[tuple[float, float]]) -> str:
    """Join vertices into `M x y L x y ...` path data."""

    commands = []
    for index, (x, y) in enumerate(points):
        command = "M" if index == 0 else "L"
        commands.append(f"{command} {format_coordinate(x)} {format_coordinate(y)}")
    return " ".join(commands)


def build_sparkline_path(
    series: Sequence[float],
    width: float,
    height: float,
    fill: bool = True,
) -> SparklinePath:
    """Map a numeric series onto sparkline SVG paths.

    Args:
        series: Values to plot, oldest first.
        width: Drawing width in pixels.
        height: Drawing height in pixels.
        fill: When True, also build the closed fill polygon.

    Returns:
        SparklinePath with line and fill path data. Empty input yields empty
        strings for both paths.
    """

    if not series:
        return SparklinePath(line_path="", fill_path="")

    low = min(series)
    high = max(series)
    value_range = (high - low) or 1
    x_denominator = (len(series) - 1) or 1

    points = tuple(
        (
            index / x_denominator * width,
            height - (value - low) / value_range * height,
        )
        for index, value in enumerate(series)
    )
    line_path = path_from_points(points)
    if not fill:
        return SparklinePath(line_path=line_path, fill_path="", points=points)

    fill_points = points + ((float(width), float(height)), (0.0, float(height)))
    fill_path = f"{line_path} L {format_coordinate(width)} {format_coordinate(height)} L 0 {format_coordinate(height)} Z"
    return SparklinePath(line_path=line_path, fill_path=fill_path, points=points, fill_points=fill_points)


def sparkline_trend(series: Sequence[float]) -> float:
    """Return `last - first` for two or more points, otherwise 0."""

    if len(series) < 2:
        return 0.0
    return float(series[-1]) - float(series[0])


def trend_direction(series: Sequence[float]) -> str:
    """Return "up" for a non-negative trend and "down" otherwise."""

    return "up" if sparkline_trend(series) >= 0 else "down"
