"""Pure chart-geometry and market-data helpers for the Numora dashboard.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
network or database I/O.
"""

from .gauges import build_arc, build_radial_gauge
from .series import generate_series
from .sparkline import build_sparkline_path

__all__ = ["build_arc", "build_radial_gauge", "build_sparkline_path", "generate_series"]
