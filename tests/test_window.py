import os
from datetime import date

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from src.algorithms.scheduler import BookingBoard  # noqa: E402
from src.config import Settings  # noqa: E402
from src.utils.storage import MemoryStore  # noqa: E402

from gui.window import DashboardTab, MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def board():
    return BookingBoard(MemoryStore(), seed_factory=list)


@pytest.fixture
def window(qapp, board, tmp_path):
    settings = Settings(
        storage_path=str(tmp_path / "bookings.json"),
        log_level="INFO",
        export_dir=str(tmp_path),
    )
    win = MainWindow(board, settings)
    yield win
    win.close()


def test_stepping_across_a_year_redraws_once(window, monkeypatch):
    year = date.today().year
    window.month_combo.setCurrentIndex(11)
    assert (window.current_year, window.current_month) == (year, 12)

    redraws = []
    monkeypatch.setattr(window, "_rebuild_calendar", lambda: redraws.append(
        (window.current_year, window.current_month)))

    window._step_month(1)

    assert redraws == [(year + 1, 1)]
    assert window.year_combo.currentData() == year + 1
    assert window.month_combo.currentData() == 1


def test_stepping_before_the_first_year_is_ignored(window, monkeypatch):
    year = date.today().year
    window.month_combo.setCurrentIndex(0)

    redraws = []
    monkeypatch.setattr(window, "_rebuild_calendar", lambda: redraws.append(True))

    window._step_month(-1)

    assert redraws == []
    assert (window.current_year, window.current_month) == (year, 1)


def test_empty_dashboard_labels_are_arabic(qapp, board):
    tab = DashboardTab(board)

    assert tab.month_canvas.ax.get_ylabel() == "عدد الحجوزات"
    assert tab.dept_canvas.ax.get_title() == "لا توجد حجوزات بعد"
