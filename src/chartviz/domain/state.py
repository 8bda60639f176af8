"""Chart editor state: the current configuration plus the current points.

The state is mutated only from UI event handlers on one thread. Snapshots are
composed from immutable parts (a frozen ``ChartConfiguration`` and a tuple of
frozen points), so a snapshot can never observe a half-applied update.
"""

from __future__ import annotations

from dataclasses import dataclass, replace, fields
from enum import Enum
import logging
import math
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from chartviz.config import settings
from .errors import ConfigurationError
from .models import (
    ChartConfiguration,
    ChartKind,
    ChartPoint,
    LineStyle,
    Orientation,
    StyleMode,
)

log = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

NUMERIC_BOUNDS: Dict[str, Tuple[float, float]] = {
    "corner_radius": settings.CORNER_RADIUS_RANGE,
    "bar_width": settings.BAR_WIDTH_RANGE,
    "opacity": settings.OPACITY_RANGE,
}
ENUM_FIELDS: Dict[str, type[Enum]] = {
    "orientation": Orientation,
    "line_style": LineStyle,
    "chart_kind": ChartKind,
}
TEXT_FIELDS = ("title", "x_axis_label", "y_axis_label")
BOOL_FIELDS = ("show_legend", "show_x_axis", "show_y_axis")
FIELD_NAMES = tuple(f.name for f in fields(ChartConfiguration))


def clamp(value: float, bounds: Tuple[float, float]) -> float:
    lo, hi = bounds
    return max(lo, min(hi, value))


def coerce_field(name: str, value: Any) -> Any:
    """Validate ``value`` for configuration field ``name``.

    Numeric fields are clamped into their declared range; enumerated fields
    accept the enum member or its string value. Anything else that does not
    fit the field's domain raises ``ConfigurationError``.
    """
    if name not in FIELD_NAMES:
        raise ConfigurationError(f"Unknown configuration field: {name}", context={"field": name})
    if name in NUMERIC_BOUNDS:
        if isinstance(value, bool):
            raise ConfigurationError(f"{name} expects a number", context={"value": value})
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"{name} expects a number", context={"field": name, "value": value}
            ) from None
        if math.isnan(number):
            raise ConfigurationError(f"{name} must not be NaN", context={"field": name})
        return clamp(number, NUMERIC_BOUNDS[name])
    if name in ENUM_FIELDS:
        enum_cls = ENUM_FIELDS[name]
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in enum_cls)
            raise ConfigurationError(
                f"{name} must be one of: {allowed}", context={"field": name, "value": value}
            ) from None
    if name in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} expects a bool", context={"value": value})
        return value
    if name == "primary_color":
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise ConfigurationError(
                "primary_color must be a #rrggbb hex string", context={"value": value}
            )
        return value.lower()
    # free text
    return "" if value is None else str(value)


def configuration_from_dict(data: Dict[str, Any]) -> ChartConfiguration:
    """Build a configuration from persisted data, skipping invalid entries."""
    cfg = ChartConfiguration()
    updates: Dict[str, Any] = {}
    for key, raw in data.items():
        try:
            updates[key] = coerce_field(key, raw)
        except ConfigurationError as exc:
            log.debug("Ignoring persisted configuration entry %s: %s", key, exc)
    return replace(cfg, **updates)


def distinct_series(points: Iterable[ChartPoint]) -> List[Optional[str]]:
    """Distinct series values in first-seen order (``None`` included)."""
    seen: Dict[Optional[str], None] = {}
    for p in points:
        seen.setdefault(p.series, None)
    return list(seen)


@dataclass(frozen=True)
class ChartSnapshot:
    """Immutable view handed to the renderer and exporters."""

    configuration: ChartConfiguration
    points: Tuple[ChartPoint, ...]
    series_names: Tuple[Optional[str], ...]
    multiple_series: bool

    @property
    def style_mode(self) -> StyleMode:
        return StyleMode.SERIES if self.multiple_series else StyleMode.PRIMARY

    @property
    def is_empty(self) -> bool:
        return not self.points


class ChartState:
    """Mutable owner of the current configuration and point sequence."""

    def __init__(
        self,
        configuration: ChartConfiguration | None = None,
        points: Iterable[ChartPoint] = (),
    ) -> None:
        self._config = configuration or ChartConfiguration()
        self._points: Tuple[ChartPoint, ...] = ()
        self._series: Tuple[Optional[str], ...] = ()
        self._multiple_series = False
        self.replace_points(points)

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------
    @property
    def points(self) -> Tuple[ChartPoint, ...]:
        return self._points

    def replace_points(self, points: Iterable[ChartPoint]) -> None:
        """Discard the current points and install ``points``.

        The series-count derived flag is recomputed here on every change.
        """
        self._points = tuple(points)
        self._series = tuple(distinct_series(self._points))
        self._multiple_series = len(self._series) > 1

    @property
    def multiple_series(self) -> bool:
        return self._multiple_series

    @property
    def series_names(self) -> Tuple[Optional[str], ...]:
        return self._series

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def configuration(self) -> ChartConfiguration:
        return self._config

    @configuration.setter
    def configuration(self, cfg: ChartConfiguration) -> None:
        self._config = cfg

    def set(self, name: str, value: Any) -> Any:
        """Overwrite one field; returns the stored (possibly clamped) value."""
        stored = coerce_field(name, value)
        self._config = replace(self._config, **{name: stored})
        return stored

    def update(self, **values: Any) -> Dict[str, Any]:
        """Set several fields at once; all are validated before any is applied."""
        coerced = {name: coerce_field(name, value) for name, value in values.items()}
        if coerced:
            self._config = replace(self._config, **coerced)
        return coerced

    # ------------------------------------------------------------------
    def snapshot(self) -> ChartSnapshot:
        return ChartSnapshot(
            configuration=self._config,
            points=self._points,
            series_names=self._series,
            multiple_series=self._multiple_series,
        )


__all__ = [
    "ChartSnapshot",
    "ChartState",
    "clamp",
    "coerce_field",
    "configuration_from_dict",
    "distinct_series",
    "NUMERIC_BOUNDS",
]
