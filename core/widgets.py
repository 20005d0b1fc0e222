"""Dashboard widget layout loaded from `core/widgets.yml`."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

WIDGETS_PATH = Path(__file__).resolve().parent / "widgets.yml"

WIDGET_KINDS: frozenset[str] = frozenset(
    {"market_overview", "price_chart", "heatmap", "order_book", "gauges"}
)
WIDGET_SIZES: frozenset[str] = frozenset({"small", "medium", "wide"})


class WidgetConfigError(ValueError):
    """Raised when the widget layout file is malformed."""


@dataclass(frozen=True, slots=True)
class WidgetDefinition:
    """A dashboard widget slot.

    Attributes:
        key: Stable identifier used in URLs and session state.
        title: Panel heading.
        kind: Renderer selector (one of `WIDGET_KINDS`).
        size: Grid width hint (one of `WIDGET_SIZES`).
    """

    key: str
    title: str
    kind: str
    size: str = "medium"


def parse_widgets(payload: object) -> tuple[WidgetDefinition, ...]:
    """Validate a decoded YAML payload into widget definitions.

    Args:
        payload: Decoded YAML with a top-level `widgets` list.

    Returns:
        Widget definitions in declaration order.

    Raises:
        WidgetConfigError: On a missing list, unknown kind/size, or duplicate key.
    """

    if not isinstance(payload, dict) or not isinstance(payload.get("widgets"), list):
        raise WidgetConfigError("Widget config must contain a 'widgets' list.")

    widgets: list[WidgetDefinition] = []
    seen: set[str] = set()
    for entry in payload["widgets"]:
        if not isinstance(entry, dict):
            raise WidgetConfigError(f"Widget entry must be a mapping: {entry!r}")
        key = str(entry.get("key") or "").strip()
        kind = str(entry.get("kind") or "").strip()
        size = str(entry.get("size") or "medium").strip()
        if not key:
            raise WidgetConfigError("Widget entry is missing 'key'.")
        if key in seen:
            raise WidgetConfigError(f"Duplicate widget key: {key}")
        if kind not in WIDGET_KINDS:
            raise WidgetConfigError(f"Unknown widget kind for {key}: {kind!r}")
        if size not in WIDGET_SIZES:
            raise WidgetConfigError(f"Unknown widget size for {key}: {size!r}")
        seen.add(key)
        widgets.append(
            WidgetDefinition(key=key, title=str(entry.get("title") or key), kind=kind, size=size)
        )
    return tuple(widgets)


@lru_cache(maxsize=1)
def load_widgets(path: Path = WIDGETS_PATH) -> tuple[WidgetDefinition, ...]:
    """Load and validate the widget layout file (cached per path)."""

    payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return parse_widgets(payload)


def widget_keys() -> frozenset[str]:
    """Return the set of configured widget keys."""

    return frozenset(widget.key for widget in load_widgets())
