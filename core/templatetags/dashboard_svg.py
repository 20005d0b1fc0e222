"""Inline SVG rendering for sparklines, gauges and mini price charts.

Geometry comes from the Django-free `analysis` package; this module only turns
it into escaped markup with `format_html`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from hashlib import sha256

from django import template
from django.utils.html import format_html
from django.utils.safestring import SafeString

from analysis.dto import MarketTicker
from analysis.gauges import arc_for_size, arc_path, arc_track_path, build_radial_gauge
from analysis.markets import display_symbol as _display_symbol
from analysis.series import generate_hourly_points, generate_series
from analysis.sparkline import build_sparkline_path, format_coordinate, trend_direction

register = template.Library()


def _gradient_id(seed: str) -> str:
    return "spark-" + sha256(seed.encode("utf-8")).hexdigest()[:12]


@register.simple_tag
def sparkline(
    series: Sequence[float],
    width: float = 60,
    height: float = 20,
    fill: bool = True,
    color: str = "",
    stroke_width: float = 1.5,
    css_class: str = "",
) -> SafeString:
    """Render a sparkline, or a placeholder block for an empty series.

    Without an explicit `color` the stroke follows the trend via the
    `trend-up` / `trend-down` classes and `currentColor`.
    """

    values = [float(value) for value in series or ()]
    paths = build_sparkline_path(values, width, height, fill)
    if paths.is_empty:
        return format_html(
            '<div class="sparkline-placeholder {}" style="width: {}px; height: {}px"></div>',
            css_class,
            format_coordinate(width),
            format_coordinate(height),
        )

    stroke = color or "currentColor"
    trend_class = f"trend-{trend_direction(values)}"
    fill_markup = SafeString("")
    if paths.fill_path:
        gradient_id = _gradient_id(f"{paths.fill_path}|{stroke}")
        fill_markup = format_html(
            '<defs><linearGradient id="{id}" x1="0%" y1="0%" x2="0%" y2="100%">'
            '<stop offset="0%" stop-color="{c}" stop-opacity="0.2"></stop>'
            '<stop offset="100%" stop-color="{c}" stop-opacity="0"></stop>'
            "</linearGradient></defs>"
            '<path d="{d}" fill="url(#{id})"></path>',
            id=gradient_id,
            c=stroke,
            d=paths.fill_path,
        )

    return format_html(
        '<svg class="sparkline {} {}" width="{}" height="{}" style="overflow: visible">'
        "{}"
        '<path d="{}" fill="none" stroke="{}" stroke-width="{}" '
        'stroke-linecap="round" stroke-linejoin="round"></path>'
        "</svg>",
        trend_class,
        css_class,
        format_coordinate(width),
        format_coordinate(height),
        fill_markup,
        paths.line_path,
        stroke,
        format_coordinate(stroke_width),
    )


@register.simple_tag
def preview_sparkline(symbol: str, price: float, change: float, width: float = 60, height: float = 20) -> SafeString:
    """Render a sparkline from the deterministic 24-point preview series."""

    return sparkline(generate_series(symbol, price, change), width=width, height=height)


@register.simple_tag
def arc_progress(
    value: float,
    max_value: float = 100,
    size: float = 140,
    stroke_width: float = 10,
    label: str = "",
    sub_label: str = "",
    show_percentage: bool = True,
    color: str = "currentColor",
) -> SafeString:
    """Render a semicircular arc gauge with an optional percentage and labels."""

    arc = arc_for_size(float(value), float(max_value), size=size, stroke_width=stroke_width)
    box_height = format_coordinate(size * 0.6)
    box_width = format_coordinate(size)
    percent = format_html('<span class="gauge-value">{}</span>', arc.percent_label) if show_percentage else ""
    sub = format_html('<span class="gauge-sub">{}</span>', sub_label) if sub_label else ""
    caption = format_html('<span class="gauge-label">{}</span>', label) if label else ""

    return format_html(
        '<div class="arc-gauge">'
        '<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
        '<path class="gauge-track" d="{track}" fill="none" stroke-width="{sw}" stroke-linecap="round"></path>'
        '<path class="gauge-progress" d="{progress}" fill="none" stroke="{color}" stroke-width="{sw}" '
        'stroke-linecap="round"></path>'
        "</svg>"
        '<div class="gauge-center">{percent}{sub}</div>'
        "{caption}"
        "</div>",
        w=box_width,
        h=box_height,
        track=arc_track_path(arc),
        progress=arc_path(arc),
        sw=format_coordinate(stroke_width),
        color=color,
        percent=percent,
        sub=sub,
        caption=caption,
    )


@register.simple_tag
def radial_gauge(
    value: float,
    max_value: float = 100,
    size: float = 120,
    stroke_width: float = 8,
    label: str = "",
) -> SafeString:
    """Render a full-circle gauge whose stroke length tracks `value / max_value`."""

    number = float(value)
    if not math.isfinite(number):
        number = 0.0
    gauge = build_radial_gauge(number, float(max_value), size=size, stroke_width=stroke_width)
    tone = "trend-up" if gauge.positive else "trend-down"
    suffix = format_html('<span class="gauge-sub">/ {}</span>', format_coordinate(max_value)) if max_value != 100 else ""
    caption = format_html('<span class="gauge-label">{}</span>', label) if label else ""

    return format_html(
        '<div class="radial-gauge {tone}">'
        '<svg width="{s}" height="{s}" transform="rotate(-90)">'
        '<circle class="gauge-track" cx="{c}" cy="{c}" r="{r}" fill="none" stroke-width="{sw}"></circle>'
        '<circle class="gauge-progress" cx="{c}" cy="{c}" r="{r}" fill="none" stroke="currentColor" '
        'stroke-width="{sw}" stroke-dasharray="{circ}" stroke-dashoffset="{offset}" stroke-linecap="round"></circle>'
        "</svg>"
        '<div class="gauge-center"><span class="gauge-value">{value}</span>{suffix}</div>'
        "{caption}"
        "</div>",
        tone=tone,
        s=format_coordinate(size),
        c=format_coordinate(gauge.center),
        r=format_coordinate(gauge.radius),
        sw=format_coordinate(stroke_width),
        circ=format_coordinate(gauge.circumference),
        offset=format_coordinate(gauge.dash_offset),
        value=round(number),
        suffix=suffix,
        caption=caption,
    )


@register.simple_tag
def mini_price_chart(ticker: MarketTicker, width: float = 320, height: float = 80) -> SafeString:
    """Render the 48-hour preview line for a ticker with first/last labels."""

    points = generate_hourly_points(ticker.symbol, ticker.price, ticker.change_24h)
    chart = sparkline([point.value for point in points], width=width, height=height, fill=False)
    return format_html(
        '<figure class="mini-price-chart" data-symbol="{}">{}'
        '<figcaption><span>{}</span><span>{}</span></figcaption></figure>',
        ticker.symbol,
        chart,
        points[0].label if points else "",
        points[-1].label if points else "",
    )


@register.filter
def display_symbol(symbol: str) -> str:
    """Strip the `-PERP` suffix for display."""

    return _display_symbol(str(symbol or ""))


@register.filter
def signed_percent(value: float, digits: int = 2) -> str:
    """Format a percentage with an explicit sign, e.g. `+1.25%`."""

    number = float(value)
    sign = "+" if number >= 0 else ""
    return f"{sign}{number:.{int(digits)}f}%"


@register.filter
def precision_label(value: float) -> str:
    """Format a grouping precision without trailing zeros, e.g. `0.005`."""

    return f"{float(value):.6f}".rstrip("0").rstrip(".")


@register.filter
def price(value: float) -> str:
    """Format a price with thousands separators and 2 decimals."""

    return f"${float(value):,.2f}"
