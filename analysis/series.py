"""Deterministic preview series for trend lines.

Preview charts need a plausible price path before real history is available.
The path is derived only from the symbol and the latest change so the same
inputs always produce the same series and re-renders never flicker.
"""

from __future__ import annotations

import math

from .dto import SeriesPoint

DEFAULT_POINT_COUNT = 24
HOURLY_POINT_COUNT = 48


def symbol_seed(symbol: str) -> int:
    """Return the deterministic seed for a symbol (sum of character codes)."""

    return sum(ord(char) for char in symbol)


def generate_series(
    symbol: str,
    current_value: float,
    percent_change: float | str,
    point_count: int = DEFAULT_POINT_COUNT,
) -> list[float]:
    """Generate a deterministic series ending at `current_value`.

    Args:
        symbol: Market symbol used to derive the noise phase.
        current_value: Latest value; the series trends toward it.
        percent_change: Change over the series window, in percent. Numeric
            strings (as carried by market payloads) are accepted.
        point_count: Number of samples to produce.

    Returns:
        A list of `point_count` non-negative floats.
    """

    return _trend_values(
        symbol,
        current_value=current_value,
        percent_change=percent_change,
        point_count=point_count,
        noise_period=3.0,
        noise_amplitude=0.15,
    )


def generate_series_points(
    symbol: str,
    current_value: float,
    percent_change: float | str,
    point_count: int = DEFAULT_POINT_COUNT,
) -> tuple[SeriesPoint, ...]:
    """Return `generate_series` output as indexed `SeriesPoint` records."""

    values = generate_series(symbol, current_value, percent_change, point_count)
    return tuple(SeriesPoint(index=index, value=value) for index, value in enumerate(values))


def generate_hourly_points(
    symbol: str,
    current_price: float,
    change_24h: float | str,
    hours: int = HOURLY_POINT_COUNT,
) -> tuple[SeriesPoint, ...]:
    """Generate hourly preview points for the mini price chart.

    The last point is labelled "Now" and earlier points "-Nh" (hours ago).

    Args:
        symbol: Market symbol used to derive the noise phase.
        current_price: Latest price.
        change_24h: Percentage change applied across the window.
        hours: Number of hourly samples.

    Returns:
        Labelled points ordered from oldest to newest.
    """

    values = _trend_values(
        symbol,
        current_value=current_price,
        percent_change=change_24h,
        point_count=hours,
        noise_period=4.0,
        noise_amplitude=0.12,
    )
    points: list[SeriesPoint] = []
    for index, value in enumerate(values):
        hours_ago = hours - index - 1
        label = "Now" if hours_ago == 0 else f"-{hours_ago}h"
        points.append(SeriesPoint(index=index, value=value, label=label))
    return tuple(points)


def _trend_values(
    symbol: str,
    *,
    current_value: float,
    percent_change: float | str,
    point_count: int,
    noise_period: float,
    noise_amplitude: float,
) -> list[float]:
    if point_count <= 0:
        return []

    change = float(percent_change)
    delta = current_value * change / 100
    start = current_value - delta
    seed = symbol_seed(symbol)
    denominator = max(point_count - 1, 1)

    values: list[float] = []
    for index in range(point_count):
        progress = index / denominator
        noise = math.sin((index + seed) / noise_period) * abs(delta) * noise_amplitude
        values.append(max(0.0, start + delta * progress + noise))
    return values
