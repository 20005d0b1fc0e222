"""Unit tests for arc and radial gauge geometry."""

from __future__ import annotations

import math

import pytest

from analysis.gauges import arc_for_size, arc_path, arc_track_path, build_arc, build_radial_gauge, clamp_ratio

pytestmark = pytest.mark.unit


def test_half_value_ends_at_zero_degrees() -> None:
    """50% sweeps from -90° to 0°."""

    arc = build_arc(50, 100, 10, center=(0, 0))
    assert arc.percentage == pytest.approx(0.5)
    assert arc.start_point == pytest.approx((0, -10))
    assert arc.end_point == pytest.approx((10, 0))
    assert arc.percent_label == "50%"


def test_value_above_max_clamps_to_full_arc() -> None:
    """Twice the maximum renders exactly like the maximum."""

    assert build_arc(200, 100, 65, center=(70, 70)) == build_arc(100, 100, 65, center=(70, 70))


def test_negative_value_clamps_to_empty_arc() -> None:
    """Negative values clamp to zero and the arc collapses onto its start."""

    arc = build_arc(-5, 100, 10, center=(0, 0))
    assert arc.percentage == 0
    assert arc.end_point == pytest.approx(arc.start_point)


def test_large_arc_flag_is_zero_for_the_fixed_semicircle() -> None:
    """The sweep never exceeds 180° so the flag stays 0."""

    for value in (0, 25, 50, 99, 100, 1000):
        assert build_arc(value, 100, 10).large_arc_flag == 0


def test_zero_max_is_treated_as_empty() -> None:
    """A zero maximum does not divide by zero."""

    assert clamp_ratio(10, 0) == 0
    assert build_arc(10, 0, 10).percentage == 0


def test_default_center_is_radius_offset() -> None:
    """Without an explicit center the arc is centered at (r, r)."""

    arc = build_arc(100, 100, 10)
    assert arc.end_point == pytest.approx((10, 20))


def test_arc_for_size_builds_svg_paths() -> None:
    """A 140px gauge with a 10px stroke uses radius 65 around (70, 70)."""

    arc = arc_for_size(100, 100, size=140, stroke_width=10)
    assert arc.radius == 65
    assert arc_path(arc) == "M 70 5 A 65 65 0 0 1 70 135"
    assert arc_track_path(arc) == "M 70 5 A 65 65 0 1 1 70 135"


def test_radial_gauge_dash_offset_tracks_percentage() -> None:
    """Half a gauge leaves half the circumference undrawn."""

    gauge = build_radial_gauge(50, 100, size=120, stroke_width=8)
    assert gauge.radius == 56
    assert gauge.circumference == pytest.approx(2 * math.pi * 56)
    assert gauge.dash_offset == pytest.approx(gauge.circumference / 2)
    assert gauge.positive


def test_radial_gauge_negative_value_is_empty_and_negative() -> None:
    """Negative values clamp to an empty ring and flag the negative tone."""

    gauge = build_radial_gauge(-5)
    assert gauge.percentage == 0
    assert gauge.dash_offset == pytest.approx(gauge.circumference)
    assert not gauge.positive


def test_nan_value_clamps_to_empty() -> None:
    """A NaN ratio is treated as zero progress."""

    assert clamp_ratio(float("nan"), 100) == 0.0
    assert build_radial_gauge(float("nan")).percentage == 0.0
