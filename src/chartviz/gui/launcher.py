"""Launcher for ``python -m chartviz`` / the ``chartviz`` console script.

Delegates to the bootstrap so logging, the exception hook and persisted
settings are set up the same way for every launch.
"""

from __future__ import annotations

import sys

from chartviz.config import settings
from chartviz.gui.app.bootstrap import create_app
from chartviz.gui.viewmodels.chart_editor_viewmodel import ChartEditorViewModel
from chartviz.gui.views.chart_editor_window import ChartEditorWindow


def main() -> int:  # pragma: no cover - runtime
    ctx = create_app(data_dir=settings.DATA_DIR)
    prefs = ctx.preferences
    vm = ChartEditorViewModel(
        event_bus=ctx.event_bus,
        text=prefs.last_text,
        parse_mode=prefs.parse_mode,
        configuration=prefs.chart,
    )
    win = ChartEditorWindow(
        vm,
        app_config=ctx.app_config,
        preferences=prefs,
        data_dir=ctx.data_dir,
    )
    win.show()
    return ctx.qt_app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
