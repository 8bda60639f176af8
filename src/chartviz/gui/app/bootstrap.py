"""Application bootstrap for the ChartViz GUI.

Responsibilities:
 - Optional headless bootstrap (tests, CLI) without creating a QApplication
 - Logging setup (ring-buffer handler on the root logger)
 - Global exception hook so a failing slot does not abort the process
 - Loading persisted window config and editor preferences
 - Registering shared services and returning them in one context object

PyQt6 is imported lazily so headless callers never need a display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import sys
import time
from typing import Any, Optional

from chartviz.config import settings
from chartviz.gui.app.config_store import AppConfig, load_config
from chartviz.gui.app.preferences import EditorPreferences, load_preferences
from chartviz.gui.services.error_handling_service import ErrorHandlingService
from chartviz.gui.services.event_bus import EventBus, GUIEvent
from chartviz.gui.services.logging_service import LoggingService
from chartviz.gui.services.service_locator import ServiceLocator, services

__all__ = ["AppContext", "create_app"]

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication (None when headless).
    headless: Whether headless bootstrap was used.
    data_dir: Directory holding persisted config and preferences.
    services: Global service locator after registration.
    duration_s: Elapsed bootstrap time.
    """

    qt_app: Optional[Any]
    headless: bool
    data_dir: str
    services: ServiceLocator
    event_bus: EventBus
    logging_service: LoggingService
    error_handler: ErrorHandlingService
    app_config: AppConfig
    preferences: EditorPreferences
    duration_s: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool = False,
    data_dir: str | None = None,
    install_excepthook: bool = True,
) -> AppContext:
    """Create and initialize the application context."""
    started = time.perf_counter()
    data_dir = data_dir or settings.DATA_DIR

    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])
        qt_app.setApplicationName("ChartViz")

    # Fresh bus each bootstrap so repeated test bootstraps stay isolated
    bus = EventBus()
    logging_service = LoggingService(event_bus=bus)
    logging_service.attach_root(settings.LOG_LEVEL)
    error_handler = ErrorHandlingService(event_bus=bus)
    if install_excepthook:
        error_handler.install()

    app_config = load_config(data_dir)
    preferences = load_preferences(data_dir)

    for key, value in [
        ("event_bus", bus),
        ("logging_service", logging_service),
        ("error_handler", error_handler),
        ("app_config", app_config),
        ("preferences", preferences),
    ]:
        services.register(key, value, allow_override=True)

    duration = time.perf_counter() - started
    log.info("ChartViz bootstrap complete in %.1f ms (headless=%s)", duration * 1000.0, headless)
    bus.publish(GUIEvent.STARTUP_COMPLETE, {"headless": headless})
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        data_dir=data_dir,
        services=services,
        event_bus=bus,
        logging_service=logging_service,
        error_handler=error_handler,
        app_config=app_config,
        preferences=preferences,
        duration_s=duration,
        metadata={"log_level": settings.LOG_LEVEL},
    )
