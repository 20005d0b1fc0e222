"""DTO types returned by the dashboard analysis helpers.

DTOs are plain data containers used to transport chart geometry and market
data to templates. They intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    """A single sample in a generated preview series.

    Attributes:
        index: Zero-based position of the sample in the series.
        value: Sample value (never negative).
        label: Optional display label (e.g. "-3h" or "Now").
    """

    index: int
    value: float
    label: str = ""


@dataclass(frozen=True, slots=True)
class SparklinePath:
    """SVG geometry for a sparkline.

    Attributes:
        line_path: SVG path data for the polyline (empty for empty input).
        fill_path: SVG path data for the closed fill polygon (empty when the
            fill was not requested or the input was empty).
        points: Line vertices in pixel coordinates.
        fill_points: Fill polygon vertices (line vertices plus the two bottom
            corners), empty when no fill was requested.
    """

    line_path: str
    fill_path: str
    points: tuple[tuple[float, float], ...] = ()
    fill_points: tuple[tuple[float, float], ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return True when there is nothing to draw."""

        return not self.line_path


@dataclass(frozen=True, slots=True)
class ArcGeometry:
    """Geometry for a semicircular arc gauge.

    Attributes:
        percentage: Clamped `value / max` in the range [0, 1].
        start_point: Arc start coordinate (x, y).
        end_point: Arc end coordinate (x, y) for the current value.
        track_end_point: End coordinate of the full background track.
        radius: Arc radius in pixels.
        large_arc_flag: SVG large-arc flag (1 when the sweep exceeds 180°).
    """

    percentage: float
    start_point: tuple[float, float]
    end_point: tuple[float, float]
    track_end_point: tuple[float, float]
    radius: float
    large_arc_flag: int

    @property
    def percent_label(self) -> str:
        """Return the rounded percentage label shown in the gauge center."""

        return f"{round(self.percentage * 100)}%"


@dataclass(frozen=True, slots=True)
class RadialGaugeGeometry:
    """Geometry for a full-circle radial gauge drawn with a dash offset."""

    center: float
    radius: float
    circumference: float
    dash_offset: float
    percentage: float
    positive: bool


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    """A single market heatmap cell.

    Attributes:
        label: Display label (usually the symbol without a `-PERP` suffix).
        value: Signed percentage change.
        share: Share of the total absolute change, in percent.
        scale: Visual scale factor in the range [0.7, 1.0].
        intensity: Background intensity in the range [0, 1].
        bucket: Intensity bucket used for CSS classes.
    """

    label: str
    value: float
    share: float
    scale: float
    intensity: float
    bucket: str

    @property
    def positive(self) -> bool:
        """Return True for non-negative changes."""

        return self.value >= 0


@dataclass(frozen=True, slots=True)
class OrderBookLevel:
    """A raw price level (price, size) as received from a feed."""

    price: float
    size: float


@dataclass(frozen=True, slots=True)
class OrderBookRow:
    """A display row in an order book ladder.

    Attributes:
        price: Bucketed price.
        size: Summed size at this bucket.
        total: Cumulative size from the top of book to this row.
        depth: Size relative to the largest displayed size, in [0, 1].
        side: Either "bid" or "ask".
    """

    price: float
    size: float
    total: float
    depth: float
    side: str


@dataclass(frozen=True, slots=True)
class OrderBookLadder:
    """Grouped and depth-annotated order book for display.

    Attributes:
        bids: Bid rows, best price first.
        asks: Ask rows, best price first.
        precision: Grouping precision in use, or None for raw levels.
        spread: Best ask minus best bid, when both sides exist.
        max_size: Largest displayed level size.
        decimals: Display decimals for prices.
        options: Selectable grouping precisions for the best bid.
    """

    bids: tuple[OrderBookRow, ...]
    asks: tuple[OrderBookRow, ...]
    precision: float | None
    spread: float | None
    max_size: float
    decimals: int = 2
    options: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class MarketTicker:
    """A single market ticker parsed from a market-data payload.

    Attributes:
        symbol: Raw market symbol (e.g. "BTC-PERP").
        price: Last price.
        change_24h: Percentage change over the last 24 hours.
        volume: 24 hour volume, when provided.
    """

    symbol: str
    price: float
    change_24h: float
    volume: float | None = None

    @property
    def positive(self) -> bool:
        """Return True when the 24h change is non-negative."""

        return self.change_24h >= 0

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "symbol": self.symbol,
            "price": self.price,
            "change24h": self.change_24h,
            "volume": self.volume,
        }
