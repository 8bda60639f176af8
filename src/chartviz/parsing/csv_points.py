"""Parsing of pasted / imported CSV-like text into chart points.

The format is deliberately minimal: rows are separated by newlines, fields by
commas, and there is no quoting or escaping (a comma inside a label shifts the
remaining columns). The first non-blank row is always a header.

Parsing is permissive: malformed rows and fields are dropped, never reported
as errors. Callers that want to know how much was dropped can use
``parse_with_stats``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import List, Optional, Tuple

from chartviz.domain.models import ChartPoint

log = logging.getLogger(__name__)


class ParseMode(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class ParseStats:
    rows: int = 0
    skipped_rows: int = 0
    skipped_fields: int = 0
    series: Tuple[str, ...] = ()


def _rows(text: str) -> List[str]:
    out: List[str] = []
    for raw in text.split("\n"):
        row = raw[:-1] if raw.endswith("\r") else raw
        if row:
            out.append(row)
    return out


def parse_number(field: str) -> Optional[float]:
    """Return the finite float in ``field`` or None.

    Surrounding whitespace is tolerated; digit-group underscores (which
    ``float()`` would otherwise accept) and non-finite values are not.
    """
    text = field.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_single(rows: List[str]) -> Tuple[List[ChartPoint], ParseStats]:
    points: List[ChartPoint] = []
    skipped = 0
    for row in rows[1:]:
        parts = row.split(",")
        if len(parts) < 2:
            skipped += 1
            continue
        value = parse_number(parts[1])
        if value is None:
            skipped += 1
            continue
        points.append(ChartPoint(series=None, label=parts[0], value=value))
    return points, ParseStats(rows=len(rows) - 1, skipped_rows=skipped)


def _parse_multi(rows: List[str]) -> Tuple[List[ChartPoint], ParseStats]:
    series_names = rows[0].split(",")[1:]
    points: List[ChartPoint] = []
    skipped_rows = 0
    skipped_fields = 0
    for row in rows[1:]:
        parts = row.split(",")
        if len(parts) < 2:
            skipped_rows += 1
            continue
        label = parts[0]
        for index, series in enumerate(series_names):
            if len(parts) <= index + 1:
                skipped_fields += 1
                continue
            value = parse_number(parts[index + 1])
            if value is None:
                skipped_fields += 1
                continue
            points.append(ChartPoint(series=series, label=label, value=value))
    stats = ParseStats(
        rows=len(rows) - 1,
        skipped_rows=skipped_rows,
        skipped_fields=skipped_fields,
        series=tuple(series_names),
    )
    return points, stats


def parse_with_stats(
    text: str, mode: ParseMode | str = ParseMode.MULTI
) -> Tuple[List[ChartPoint], ParseStats]:
    """Parse ``text`` and also report how many rows/fields were dropped."""
    mode = ParseMode(mode)
    rows = _rows(text or "")
    if not rows:
        return [], ParseStats()
    if mode is ParseMode.SINGLE:
        points, stats = _parse_single(rows)
    else:
        points, stats = _parse_multi(rows)
    if stats.skipped_rows or stats.skipped_fields:
        log.debug(
            "Parsed %d points (%s mode); skipped %d rows, %d fields",
            len(points),
            mode.value,
            stats.skipped_rows,
            stats.skipped_fields,
        )
    return points, stats


def parse(text: str, mode: ParseMode | str = ParseMode.MULTI) -> List[ChartPoint]:
    """Parse ``text`` into chart points. Never raises for malformed input."""
    points, _stats = parse_with_stats(text, mode)
    return points


def parse_single_series(text: str) -> List[ChartPoint]:
    return parse(text, ParseMode.SINGLE)


def parse_multi_series(text: str) -> List[ChartPoint]:
    return parse(text, ParseMode.MULTI)


__all__ = [
    "ParseMode",
    "ParseStats",
    "parse",
    "parse_with_stats",
    "parse_single_series",
    "parse_multi_series",
    "parse_number",
]
