# Shared test setup: headless Qt / matplotlib and a fallback 'qtbot' fixture
# when pytest-qt is not installed. If pytest-qt is present, its fixture wins.

import contextlib
import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest  # noqa: E402

from chartviz.gui.services.service_locator import services  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv[:1])  # type: ignore  # noqa: F841
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture
def fresh_services():
    """Empty global service locator for the duration of one test."""
    services.clear()
    yield services
    services.clear()


@pytest.fixture
def sample_csv():
    return "Label,Series 1,Series 2\nA,1,2\nB,2,3\nC,3,1"


@pytest.fixture
def single_csv():
    return "Label,Value\nA,1\nB,2\nC,3"
