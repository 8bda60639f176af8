"""Editor preference persistence.

Keeps the chart styling and parse mode across sessions, separately from the
window geometry handled by ``config_store``. Values are re-validated (and
numeric ones re-clamped) on load, so a hand-edited file cannot push the
editor outside its slider ranges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any, Dict

from chartviz.domain.models import ChartConfiguration
from chartviz.domain.state import configuration_from_dict
from chartviz.parsing import ParseMode

__all__ = ["EditorPreferences", "load_preferences", "save_preferences", "PREF_VERSION"]

log = logging.getLogger(__name__)

PREF_VERSION = 1
PREF_FILENAME = "editor_prefs.json"


@dataclass
class EditorPreferences:
    """Serializable editor settings.

    Attributes
    ----------
    version: Schema version for future migrations.
    parse_mode: Single- or multi-series CSV interpretation.
    chart: Chart configuration applied at startup.
    last_text: Data text of the previous session (None shows the sample data).
    """

    version: int = PREF_VERSION
    parse_mode: ParseMode = ParseMode.MULTI
    chart: ChartConfiguration = field(default_factory=ChartConfiguration)
    last_text: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "parse_mode": self.parse_mode.value,
            "chart": self.chart.to_dict(),
            "last_text": self.last_text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorPreferences":
        try:
            mode = ParseMode(data.get("parse_mode", ParseMode.MULTI.value))
        except ValueError:
            mode = ParseMode.MULTI
        chart = data.get("chart")
        text = data.get("last_text")
        return cls(
            version=int(data.get("version", PREF_VERSION)),
            parse_mode=mode,
            chart=configuration_from_dict(chart) if isinstance(chart, dict) else ChartConfiguration(),
            last_text=text if isinstance(text, str) else None,
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / PREF_FILENAME


def load_preferences(base_dir: str | Path | None = None) -> EditorPreferences:
    path = _resolve_path(base_dir)
    if not path.exists():
        return EditorPreferences()
    try:
        prefs = EditorPreferences.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("Ignoring unreadable preferences %s: %s", path, exc)
        return EditorPreferences()
    if prefs.version != PREF_VERSION:
        return EditorPreferences(parse_mode=prefs.parse_mode)
    return prefs


def save_preferences(prefs: EditorPreferences, base_dir: str | Path | None = None) -> Path:
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(prefs.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
