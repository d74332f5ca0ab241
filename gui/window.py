import logging
import os
from datetime import date

from PyQt5.QtCore import Qt, QDate, QTimer
from PyQt5.QtGui import QPainter, QPen, QFont, QColor
from PyQt5.QtPrintSupport import QPrintDialog, QPrinter
from PyQt5.QtWidgets import (
    QMainWindow,
    QWidget,
    QTabWidget,
    QHBoxLayout,
    QVBoxLayout,
    QLabel,
    QPushButton,
    QComboBox,
    QDateEdit,
    QGroupBox,
    QDialog,
    QLineEdit,
    QTextEdit,
    QMessageBox,
    QFileDialog,
)
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from src.algorithms.scheduler import BookingBoard
from src.config import Settings
from src.models.booking import Booking
from src.models.hall import Hall
from src.utils.dates import MONTH_NAMES, days_in_month, shift_month, year_range
from src.utils.export import export_filename, export_month
from src.utils.time_slots import bookable_slots, default_end_time, end_times_after

from gui.schedule_table import ScheduleTable

logger = logging.getLogger(__name__)

HALL_COLORS = {
    Hall.AL_WAHA: "#10b981",   # emerald
    Hall.AL_DANA: "#8b5cf6",   # violet
}


class CircularGauge(QWidget):
    # Circular percentage gauge with smooth animation.

    def __init__(self, color: str, subtitle: str = "من الحجوزات", diameter: int = 140, parent=None):
        super().__init__(parent)
        self._value = 0           # current animated value (0-100)
        self._target = 0          # where we want to go
        self._color = QColor(color)
        self._subtitle = subtitle

        self.setMinimumSize(diameter, diameter)
        self.setMaximumSize(diameter, diameter)

        # timer to drive smooth animation (~60fps)
        self._timer = QTimer(self)
        self._timer.setInterval(16)
        self._timer.timeout.connect(self._animate_step)

    # ---- public API ----

    def animate_to(self, value: int):
        self._target = max(0, min(100, int(value)))
        if not self._timer.isActive():
            self._timer.start()

    # ---- animation step ----

    def _animate_step(self):
        if self._value == self._target:
            self._timer.stop()
            return

        step = 2
        if abs(self._target - self._value) <= step:
            self._value = self._target
        else:
            self._value += step if self._target > self._value else -step

        self.update()

    # ---- painting ----

    def paintEvent(self, event):
        side = min(self.width(), self.height())

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        painter.translate(self.width() / 2, self.height() / 2)
        painter.scale(side / 200.0, side / 200.0)  # normalise to 200x200

        painter.setPen(QPen(QColor("#e0e4ea"), 14))
        painter.drawEllipse(-80, -80, 160, 160)

        span_angle = int(-360 * self._value / 100)  # negative = clockwise
        painter.setPen(QPen(self._color, 14))
        painter.drawArc(-80, -80, 160, 160, 90 * 16, span_angle * 16)

        painter.setPen(QColor("#2c3e50"))
        font = QFont()
        font.setPointSize(18)
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(-60, -10, 120, 40, Qt.AlignCenter, f"{self._value}%")

        font_small = QFont()
        font_small.setPointSize(9)
        painter.setFont(font_small)
        painter.drawText(-60, 25, 120, 30, Qt.AlignCenter, self._subtitle)
        painter.end()


class MplCanvas(FigureCanvas):
    def __init__(self, parent=None):
        fig = Figure(figsize=(4, 3), tight_layout=True)
        self.ax = fig.add_subplot(111)
        super().__init__(fig)
        self.setParent(parent)


class DashboardTab(QWidget):
    def __init__(self, board: BookingBoard, parent=None):
        super().__init__(parent)
        self.board = board

        layout = QVBoxLayout()
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        self.setLayout(layout)

        # ---- summary cards ----
        cards = QHBoxLayout()
        layout.addLayout(cards)

        self.total_label = QLabel()
        self.total_label.setStyleSheet("font-size: 18px; font-weight: 600;")
        cards.addWidget(self.total_label)

        self.hall_labels = {}
        for hall in self.board.halls:
            lbl = QLabel()
            lbl.setStyleSheet(f"font-size: 16px; font-weight: 600; color: {HALL_COLORS[hall]};")
            self.hall_labels[hall] = lbl
            cards.addWidget(lbl)
        cards.addStretch(1)

        # ---- charts ----
        middle = QHBoxLayout()
        middle.setSpacing(16)
        layout.addLayout(middle, stretch=1)

        left = QVBoxLayout()
        middle.addLayout(left, stretch=2)

        month_title = QLabel("نشاط الحجوزات الشهري")
        month_title.setStyleSheet("font-size: 14px; font-weight: 600;")
        left.addWidget(month_title)
        self.month_canvas = MplCanvas(self)
        left.addWidget(self.month_canvas, stretch=1)

        dept_title = QLabel("الإدارات الأكثر حجزاً")
        dept_title.setStyleSheet("font-size: 14px; font-weight: 600;")
        left.addWidget(dept_title)
        self.dept_canvas = MplCanvas(self)
        left.addWidget(self.dept_canvas, stretch=1)

        # ---- hall share gauges ----
        right = QVBoxLayout()
        middle.addLayout(right, stretch=1)

        share_title = QLabel("نسبة إشغال القاعات")
        share_title.setStyleSheet("font-size: 14px; font-weight: 600;")
        right.addWidget(share_title)

        self.gauges = {}
        for hall in self.board.halls:
            gauge = CircularGauge(HALL_COLORS[hall], diameter=180)
            self.gauges[hall] = gauge
            right.addWidget(gauge, alignment=Qt.AlignCenter)
            name = QLabel(hall.display_name)
            name.setAlignment(Qt.AlignCenter)
            right.addWidget(name)
        right.addStretch(1)

        self.refresh()

    def refresh(self):
        stats = self.board.dashboard_stats(date.today().year)

        self.total_label.setText(f"إجمالي الحجوزات: {stats.total}")
        for hall, lbl in self.hall_labels.items():
            lbl.setText(f"{hall.display_name}: {stats.by_hall[hall]}")
            self.gauges[hall].animate_to(self.board.hall_share(hall))

        # monthly activity
        ax = self.month_canvas.ax
        ax.clear()
        counts = [stats.by_month[m] for m in range(12)]
        bars = ax.bar(range(12), counts)
        for bar, count in zip(bars, counts):
            bar.set_color("#1e3a8a" if count > 5 else "#64748b")
        ax.set_xticks(range(12))
        ax.set_xticklabels([str(m + 1) for m in range(12)])
        ax.set_ylabel("عدد الحجوزات")
        ax.set_title(f"{date.today().year}")
        self.month_canvas.draw()

        # top departments
        ax = self.dept_canvas.ax
        ax.clear()
        if stats.top_departments:
            names = [name for name, _ in stats.top_departments]
            values = [count for _, count in stats.top_departments]
            ax.barh(range(len(names)), values, color="#ca8a04")
            ax.set_yticks(range(len(names)))
            ax.set_yticklabels(names)
            ax.invert_yaxis()
        else:
            ax.set_title("لا توجد حجوزات بعد")
        self.dept_canvas.draw()


class BookingDialog(QDialog):
    """Create a booking at a clicked slot, or edit/delete an existing one."""

    def __init__(self, board: BookingBoard, hall: Hall, booking: Booking = None,
                 booking_date: str = "", time: str = "", parent=None):
        super().__init__(parent)
        self.board = board
        self.hall = booking.hall if booking else hall
        self.booking = booking

        if booking:
            self.setWindowTitle("تعديل الحجز")
            booking_date, time = booking.booking_date, booking.time
            end_time = booking.end_time
        else:
            self.setWindowTitle("حجز جديد")
            end_time = default_end_time(time, board.time_slots)

        self.setLayoutDirection(Qt.RightToLeft)
        self.resize(400, 320)

        layout = QVBoxLayout()
        self.setLayout(layout)

        header = QLabel(self.hall.display_name)
        header.setStyleSheet("font-size: 16px; font-weight: 600;")
        layout.addWidget(header)

        row1 = QHBoxLayout()
        row1.addWidget(QLabel("التاريخ:"))
        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("yyyy-MM-dd")
        self.date_edit.setDate(QDate.fromString(booking_date, "yyyy-MM-dd"))
        row1.addWidget(self.date_edit)
        layout.addLayout(row1)

        row2 = QHBoxLayout()
        row2.addWidget(QLabel("من:"))
        self.start_combo = QComboBox()
        self.start_combo.addItems(bookable_slots(board.time_slots))
        self.start_combo.setCurrentText(time)
        row2.addWidget(self.start_combo)

        row2.addWidget(QLabel("الى:"))
        self.end_combo = QComboBox()
        row2.addWidget(self.end_combo)
        layout.addLayout(row2)

        self._fill_end_times(end_time)
        self.start_combo.currentTextChanged.connect(self._on_start_changed)

        row3 = QHBoxLayout()
        row3.addWidget(QLabel("الإدارة:"))
        self.department_edit = QLineEdit(booking.department if booking else "")
        row3.addWidget(self.department_edit)
        layout.addLayout(row3)

        layout.addWidget(QLabel("الملاحظات:"))
        self.notes_edit = QTextEdit()
        self.notes_edit.setPlainText(booking.notes if booking else "")
        layout.addWidget(self.notes_edit, stretch=1)

        btn_row = QHBoxLayout()
        save_btn = QPushButton("حفظ")
        cancel_btn = QPushButton("إلغاء")
        save_btn.clicked.connect(self.save)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(save_btn)
        if booking:
            delete_btn = QPushButton("حذف")
            delete_btn.setStyleSheet("color: #b91c1c;")
            delete_btn.clicked.connect(self.delete)
            btn_row.addWidget(delete_btn)
        btn_row.addStretch(1)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row)

    def _fill_end_times(self, selected: str = ""):
        self.end_combo.clear()
        self.end_combo.addItems(end_times_after(self.start_combo.currentText(), self.board.time_slots))
        if selected:
            self.end_combo.setCurrentText(selected)

    def _on_start_changed(self, _text):
        self._fill_end_times(self.end_combo.currentText())

    def save(self):
        booking_date = self.date_edit.date().toString("yyyy-MM-dd")
        time = self.start_combo.currentText()
        end_time = self.end_combo.currentText()
        department = self.department_edit.text().strip()
        notes = self.notes_edit.toPlainText().strip()

        if not department:
            QMessageBox.warning(self, "خطأ", "الرجاء إدخال اسم الإدارة.")
            return

        if self.booking:
            result = self.board.update_booking(
                self.booking.booking_id, booking_date, time, end_time, department, notes
            )
        else:
            result = self.board.create_booking(
                self.hall, booking_date, time, end_time, department, notes
            )

        if result.ok:
            self.accept()
            return

        # stay open so the user can pick another time
        msg = result.message
        if result.conflicts:
            msg += "\n\n"
            for c in result.conflicts:
                msg += f"• {c.department} ({c.time} - {c.end_time})\n"
        title = "تعارض" if result.conflicts else "خطأ"
        QMessageBox.warning(self, title, msg)

    def delete(self):
        answer = QMessageBox.question(self, "حذف", "هل تريد حذف هذا الحجز؟")
        if answer != QMessageBox.Yes:
            return
        self.board.delete_booking(self.booking.booking_id)
        self.accept()


class MainWindow(QMainWindow):
    def __init__(self, board: BookingBoard, settings: Settings, parent=None):
        super().__init__(parent)
        self.board = board
        self.settings = settings
        self.selected_hall = Hall.AL_WAHA

        today = date.today()
        self.current_year = today.year
        self.current_month = today.month

        self.setWindowTitle("نظام حجز قاعات الاجتماعات")
        self.setLayoutDirection(Qt.RightToLeft)
        self.resize(1300, 750)

        self.setStyleSheet("""
            QMainWindow {
                background: #f1f5f9;
            }
            QTabWidget::pane {
                border: none;
            }
            QTabBar::tab {
                padding: 8px 18px;
                border-top-left-radius: 12px;
                border-top-right-radius: 12px;
                background: rgba(255,255,255,0.5);
                margin-right: 4px;
            }
            QTabBar::tab:selected {
                background: #ffffff;
                font-weight: 600;
            }
            QGroupBox {
                font-weight: bold;
                border: 1px solid #d0d7de;
                border-radius: 12px;
                margin-top: 12px;
                background-color: #ffffff;
            }
        """)

        central = QWidget()
        root = QVBoxLayout()
        central.setLayout(root)
        self.setCentralWidget(central)

        root.addWidget(self._build_header())

        self.tabs = QTabWidget()
        root.addWidget(self.tabs, stretch=1)

        # ---- Tab 1: calendar ----
        self.calendar_tab = self._build_calendar_panel()
        self.tabs.addTab(self.calendar_tab, "  الجدول  ")

        # ---- Tab 2: dashboard ----
        self.dashboard_tab = DashboardTab(self.board)
        self.tabs.addTab(self.dashboard_tab, "  لوحة الإحصائيات  ")

        self._bookings_changed()

    # ---------- Header ----------

    def _build_header(self) -> QGroupBox:
        group = QGroupBox()
        layout = QVBoxLayout()
        group.setLayout(layout)

        heading = QLabel("نظام حجز قاعات الاجتماعات")
        heading.setStyleSheet("font-size: 28px; font-weight: 800; color: #152042;")
        layout.addWidget(heading)

        sub = QLabel("إدارة الخدمات العامة / قسم إدارة المرافق")
        sub.setStyleSheet("color: #5b6475;")
        layout.addWidget(sub)

        self.ticker_label = QLabel()
        self.ticker_label.setStyleSheet(
            "background: #152042; color: white; padding: 6px; border-radius: 6px;"
        )
        layout.addWidget(self.ticker_label)

        buttons = QHBoxLayout()
        self.hall_buttons = {}
        for hall in self.board.halls:
            btn = QPushButton()
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked, h=hall: self._select_hall(h))
            self.hall_buttons[hall] = btn
            buttons.addWidget(btn)

        self.dashboard_btn = QPushButton()
        self.dashboard_btn.clicked.connect(lambda: self.tabs.setCurrentIndex(1))
        buttons.addWidget(self.dashboard_btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)
        return group

    # ---------- Calendar panel ----------

    def _build_calendar_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(16, 16, 16, 16)
        panel.setLayout(layout)

        nav_row = QHBoxLayout()

        self.prev_btn = QPushButton("◀")
        self.next_btn = QPushButton("▶")
        self.prev_btn.clicked.connect(lambda: self._step_month(-1))
        self.next_btn.clicked.connect(lambda: self._step_month(1))
        nav_row.addWidget(self.prev_btn)
        nav_row.addWidget(self.next_btn)

        self.year_combo = QComboBox()
        for year in year_range(date.today()):
            self.year_combo.addItem(str(year), year)
        self.year_combo.setCurrentText(str(self.current_year))
        self.year_combo.currentIndexChanged.connect(self._on_period_changed)
        nav_row.addWidget(QLabel("السنة:"))
        nav_row.addWidget(self.year_combo)

        self.month_combo = QComboBox()
        for index, name in enumerate(MONTH_NAMES, start=1):
            self.month_combo.addItem(name, index)
        self.month_combo.setCurrentIndex(self.current_month - 1)
        self.month_combo.currentIndexChanged.connect(self._on_period_changed)
        nav_row.addWidget(QLabel("الشهر:"))
        nav_row.addWidget(self.month_combo)

        nav_row.addStretch(1)

        self.export_btn = QPushButton("تصدير إلى Excel")
        self.export_btn.clicked.connect(self._export_to_excel)
        nav_row.addWidget(self.export_btn)

        self.print_btn = QPushButton("طباعة")
        self.print_btn.clicked.connect(self._print)
        nav_row.addWidget(self.print_btn)

        self.save_btn = QPushButton("حفظ التغييرات")
        self.save_btn.clicked.connect(self._save_changes)
        nav_row.addWidget(self.save_btn)
        layout.addLayout(nav_row)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet("font-size: 18px; font-weight: 600;")
        layout.addWidget(self.title_label)

        self.table = ScheduleTable(self.board.time_slots)
        self.table.emptyCellClicked.connect(self._on_empty_cell_clicked)
        self.table.bookingClicked.connect(self._on_booking_clicked)
        layout.addWidget(self.table, stretch=1)
        return panel

    def _rebuild_calendar(self):
        self.title_label.setText(
            f"{self.selected_hall.display_name} - "
            f"{MONTH_NAMES[self.current_month - 1]} {self.current_year}"
        )
        days = days_in_month(self.current_year, self.current_month)
        self.table.show_month(days, self.board.bookings_for_hall(self.selected_hall))

    def _refresh_header(self):
        counts = self.board.monthly_counts(self.current_year, self.current_month)
        for hall, btn in self.hall_buttons.items():
            btn.setText(f"{hall.display_name}  ({counts[hall]})")
            btn.setChecked(hall == self.selected_hall)
        self.dashboard_btn.setText(f"لوحة الإحصائيات  ({sum(counts.values())})")

        stats = self.board.ticker_stats()
        totals = " | ".join(
            f"{hall.display_name}: {stats.hall_totals[hall]}" for hall in self.board.halls
        )
        self.ticker_label.setText(
            f"{totals} | الإدارة الأكثر حجزاً: {stats.top_department}"
            f" | آخر حجز: {stats.last_department}"
        )

        self.save_btn.setEnabled(self.board.has_unsaved_changes)

    def _bookings_changed(self):
        # Call this whenever bookings are added/edited/deleted.
        self._rebuild_calendar()
        self._refresh_header()
        self.dashboard_tab.refresh()

    def _select_hall(self, hall: Hall):
        self.selected_hall = hall
        self.tabs.setCurrentIndex(0)
        self._rebuild_calendar()
        self._refresh_header()

    def _on_period_changed(self):
        self.current_year = self.year_combo.currentData()
        self.current_month = self.month_combo.currentData()
        self._rebuild_calendar()
        self._refresh_header()

    def _step_month(self, delta: int):
        year, month = shift_month(self.current_year, self.current_month, delta)
        year_index = self.year_combo.findData(year)
        if year_index == -1:
            return  # outside the selectable years
        # move both combos silently, then redraw once for the new period
        for combo in (self.month_combo, self.year_combo):
            combo.blockSignals(True)
        try:
            self.month_combo.setCurrentIndex(month - 1)
            self.year_combo.setCurrentIndex(year_index)
        finally:
            for combo in (self.month_combo, self.year_combo):
                combo.blockSignals(False)
        self._on_period_changed()

    def _on_empty_cell_clicked(self, booking_date: str, time: str):
        dialog = BookingDialog(
            self.board, self.selected_hall, booking_date=booking_date, time=time, parent=self
        )
        if dialog.exec_():
            self._bookings_changed()

    def _on_booking_clicked(self, booking_id: str):
        booking = self.board.find_booking(booking_id)
        if booking is None:
            return
        dialog = BookingDialog(self.board, booking.hall, booking=booking, parent=self)
        if dialog.exec_():
            self._bookings_changed()

    def _save_changes(self):
        self.board.mark_saved()
        self.save_btn.setText("تم الحفظ بنجاح!")
        self.save_btn.setEnabled(False)
        QTimer.singleShot(2000, lambda: self.save_btn.setText("حفظ التغييرات"))

    # ---------- Export / print ----------

    def _export_to_excel(self):
        default_path = os.path.join(
            self.settings.export_dir,
            export_filename(self.selected_hall, self.current_year, self.current_month),
        )
        path, _ = QFileDialog.getSaveFileName(
            self, "تصدير إلى Excel", default_path, "Excel (*.xlsx)"
        )
        if not path:
            return
        try:
            export_month(
                path,
                self.selected_hall,
                self.current_year,
                self.current_month,
                self.board.bookings_for_hall(self.selected_hall),
                self.board.time_slots,
            )
        except OSError as e:
            logger.error("Export to %s failed: %s", path, e)
            QMessageBox.warning(self, "خطأ", f"تعذر حفظ الملف:\n{e}")

    def _print(self):
        printer = QPrinter(QPrinter.HighResolution)
        printer.setOrientation(QPrinter.Landscape)
        dialog = QPrintDialog(printer, self)
        if dialog.exec_() != QDialog.Accepted:
            return

        painter = QPainter(printer)
        page = printer.pageRect()
        source = self.calendar_tab
        scale = min(page.width() / source.width(), page.height() / source.height())
        painter.scale(scale, scale)
        source.render(painter)
        painter.end()
