"""Geometry for arc and radial gauges."""

from __future__ import annotations

import math

from .dto import ArcGeometry, RadialGaugeGeometry
from .sparkline import format_coordinate

ARC_START_ANGLE = -90.0
ARC_END_ANGLE = 90.0


def clamp_ratio(value: float, max_value: float) -> float:
    """Return `value / max_value` clamped to [0, 1] (0 for a zero maximum or NaN)."""

    if not max_value:
        return 0.0
    ratio = value / max_value
    if math.isnan(ratio):
        return 0.0
    return min(max(ratio, 0.0), 1.0)


def _polar(center: tuple[float, float], radius: float, angle_deg: float) -> tuple[float, float]:
    radians = angle_deg * math.pi / 180
    return (
        center[0] + radius * math.cos(radians),
        center[1] + radius * math.sin(radians),
    )


def build_arc(
    value: float,
    max_value: float,
    radius: float,
    center: tuple[float, float] | None = None,
) -> ArcGeometry:
    """Build geometry for a semicircular progress arc.

    The arc sweeps a fixed 180° range from -90° to 90°.

    Args:
        value: Current value.
        max_value: Value corresponding to a full arc.
        radius: Arc radius in pixels.
        center: Arc center; defaults to `(radius, radius)`.

    Returns:
        ArcGeometry with start/end points and the large-arc flag.
    """

    origin = center if center is not None else (radius, radius)
    percentage = clamp_ratio(value, max_value)
    angle_range = ARC_END_ANGLE - ARC_START_ANGLE
    sweep = angle_range * percentage
    current_angle = ARC_START_ANGLE + sweep

    return ArcGeometry(
        percentage=percentage,
        start_point=_polar(origin, radius, ARC_START_ANGLE),
        end_point=_polar(origin, radius, current_angle),
        track_end_point=_polar(origin, radius, ARC_END_ANGLE),
        radius=radius,
        large_arc_flag=1 if sweep > 180 else 0,
    )


def arc_for_size(value: float, max_value: float = 100, size: float = 140, stroke_width: float = 10) -> ArcGeometry:
    """Build an arc sized to fit a `size` x `size` box with a stroke inset."""

    radius = (size - stroke_width) / 2
    return build_arc(value, max_value, radius, center=(size / 2, size / 2))


def arc_path(arc: ArcGeometry) -> str:
    """Return SVG path data for the progress portion of an arc."""

    sx, sy = arc.start_point
    ex, ey = arc.end_point
    r = format_coordinate(arc.radius)
    return (
        f"M {format_coordinate(sx)} {format_coordinate(sy)} "
        f"A {r} {r} 0 {arc.large_arc_flag} 1 {format_coordinate(ex)} {format_coordinate(ey)}"
    )


def arc_track_path(arc: ArcGeometry) -> str:
    """Return SVG path data for the full background track of an arc."""

    sx, sy = arc.start_point
    ex, ey = arc.track_end_point
    r = format_coordinate(arc.radius)
    return (
        f"M {format_coordinate(sx)} {format_coordinate(sy)} "
        f"A {r} {r} 0 1 1 {format_coordinate(ex)} {format_coordinate(ey)}"
    )


def build_radial_gauge(
    value: float,
    max_value: float = 100,
    size: float = 120,
    stroke_width: float = 8,
) -> RadialGaugeGeometry:
    """Build geometry for a full-circle gauge drawn via stroke dash offset.

    Args:
        value: Current value; its sign selects the positive/negative color.
        max_value: Value corresponding to a full circle.
        size: Bounding box size in pixels.
        stroke_width: Stroke width in pixels.

    Returns:
        RadialGaugeGeometry for the progress circle.
    """

    radius = (size - stroke_width) / 2
    circumference = 2 * math.pi * radius
    percentage = clamp_ratio(value, max_value)
    return RadialGaugeGeometry(
        center=size / 2,
        radius=radius,
        circumference=circumference,
        dash_offset=circumference - percentage * circumference,
        percentage=percentage,
        positive=value >= 0,
    )
