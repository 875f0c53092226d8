# Shared fixtures. Forces headless Qt / matplotlib and provides a fallback
# 'qtbot' fixture if pytest-qt is not installed. If pytest-qt is installed,
# its fixture wins.

import sys
import os
import contextlib
from datetime import date

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("MPLBACKEND", "Agg")

from gui.charting import DataPoint  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
        app = qt_widgets.QApplication.instance() or qt_widgets.QApplication(sys.argv)
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
        app.processEvents()


SAMPLE_TSV = (
    "date\tclose\n"
    "2012-04-27\t603.00\n"
    "2012-04-30\t583.98\n"
    "2012-05-01\t582.13\n"
    "2012-05-02\t585.98\n"
    "2012-05-04\t565.25\n"
)


@pytest.fixture
def sample_points():
    return (
        DataPoint(date(2012, 4, 27), 603.00),
        DataPoint(date(2012, 4, 30), 583.98),
        DataPoint(date(2012, 5, 1), 582.13),
        DataPoint(date(2012, 5, 2), 585.98),
        DataPoint(date(2012, 5, 4), 565.25),
    )


@pytest.fixture
def tsv_file(tmp_path):
    path = tmp_path / "data.tsv"
    path.write_text(SAMPLE_TSV, encoding="utf-8")
    return path
