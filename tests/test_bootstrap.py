import logging
import sys

import pytest

from chartviz.gui.app.bootstrap import create_app
from chartviz.gui.app.preferences import EditorPreferences, save_preferences
from chartviz.gui.services.event_bus import EventBus
from chartviz.parsing import ParseMode


@pytest.fixture
def headless_app(tmp_path, fresh_services):
    contexts = []

    def _make(**kwargs):
        kwargs.setdefault("install_excepthook", False)
        ctx = create_app(headless=True, data_dir=str(tmp_path), **kwargs)
        contexts.append(ctx)
        return ctx

    yield _make
    for ctx in contexts:
        ctx.logging_service.detach_root()
        ctx.error_handler.uninstall()


def test_create_app_headless(headless_app, tmp_path):
    ctx = headless_app()
    assert ctx.headless is True
    assert ctx.qt_app is None
    assert ctx.data_dir == str(tmp_path)
    assert ctx.services.get("event_bus") is ctx.event_bus
    assert ctx.services.get("preferences") is ctx.preferences
    assert ctx.duration_s >= 0


def test_bootstrap_logs_into_ring_buffer(headless_app):
    ctx = headless_app()
    logging.getLogger("chartviz.test").warning("visible")
    assert any(e.message == "visible" for e in ctx.logging_service.recent())
    assert ctx.metadata["log_level"] == logging.getLevelName(logging.getLogger().level)


def test_create_app_idempotent_registration(headless_app):
    c1 = headless_app()
    c2 = headless_app()
    assert c2.services.get("event_bus") is c2.event_bus
    assert c1.event_bus is not c2.event_bus
    assert isinstance(c2.event_bus, EventBus)


def test_loads_persisted_preferences(headless_app, tmp_path):
    save_preferences(EditorPreferences(parse_mode=ParseMode.SINGLE, last_text="L,V\nA,1"), tmp_path)
    ctx = headless_app()
    assert ctx.preferences.parse_mode is ParseMode.SINGLE
    assert ctx.preferences.last_text == "L,V\nA,1"


def test_excepthook_installed_when_requested(headless_app):
    previous = sys.excepthook
    ctx = headless_app(install_excepthook=True)
    assert ctx.error_handler.installed
    assert sys.excepthook is not previous
