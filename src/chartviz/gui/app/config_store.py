"""Application configuration persistence.

Stores lightweight window/runtime state: window geometry and the directories
last used for import and export. Pure logic (no Qt import) so it can be unit
tested headless; corrupt or incompatible files fall back to defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = ["AppConfig", "load_config", "save_config", "CONFIG_VERSION"]

log = logging.getLogger(__name__)

CONFIG_VERSION = 1

DEFAULT_FILENAME = "app_state.json"


def _opt_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class AppConfig:
    """Serializable window state.

    Attributes
    ----------
    version: Schema version for migration handling.
    window_x, window_y, window_w, window_h: Last window geometry (None if unknown).
    maximized: Whether the window was maximized at shutdown.
    last_import_dir: Directory of the most recent CSV import.
    last_export_dir: Directory of the most recent export.
    """

    version: int = CONFIG_VERSION
    window_x: Optional[int] = None
    window_y: Optional[int] = None
    window_w: Optional[int] = None
    window_h: Optional[int] = None
    maximized: bool = False
    last_import_dir: Optional[str] = None
    last_export_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            window_x=_opt_int(data.get("window_x")),
            window_y=_opt_int(data.get("window_y")),
            window_w=_opt_int(data.get("window_w")),
            window_h=_opt_int(data.get("window_h")),
            maximized=bool(data.get("maximized", False)),
            last_import_dir=data.get("last_import_dir"),
            last_export_dir=data.get("last_export_dir"),
        )

    def is_geometry_complete(self) -> bool:
        return None not in (self.window_x, self.window_y, self.window_w, self.window_h)


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> AppConfig:
    """Load config from ``base_dir`` (defaults to CWD)."""
    path = _resolve_path(base_dir)
    if not path.exists():
        return AppConfig()
    try:
        cfg = AppConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("Ignoring unreadable config %s: %s", path, exc)
        return AppConfig()
    if cfg.version != CONFIG_VERSION:
        # Geometry layout may have changed; keep only the directories
        return AppConfig(last_import_dir=cfg.last_import_dir, last_export_dir=cfg.last_export_dir)
    return cfg


def save_config(cfg: AppConfig, base_dir: str | Path | None = None) -> Path:
    """Persist config atomically; returns the path written."""
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
