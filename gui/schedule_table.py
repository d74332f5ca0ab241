from datetime import date
from typing import Dict, List, Sequence, Tuple

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont
from PyQt5.QtWidgets import QAbstractItemView, QHeaderView, QTableWidget, QTableWidgetItem

from src.algorithms.layout import OccupiedCell, layout_month
from src.models.booking import Booking
from src.utils.colors import booking_color
from src.utils.dates import format_display, format_iso, is_weekend, weekday_name
from src.utils.time_slots import TIME_SLOTS, bookable_slots

FIXED_HEADERS = ["م", "اليوم", "التاريخ"]
NOTES_HEADER = "الملاحظات"

WEEKEND_FIXED = QColor("#152042")
WEEKDAY_FIXED = QColor("#334155")
WEEKEND_ROW = QColor("#eff6ff")
WEEKDAY_ROW = QColor("#ffffff")


class ScheduleTable(QTableWidget):
    """
    Month grid for one hall:
    - one row per day (index, weekday, date, slot cells, notes)
    - booked runs are a single spanned cell, free slots are single cells.
    """

    emptyCellClicked = pyqtSignal(str, str)     # (YYYY-MM-DD, start time)
    bookingClicked = pyqtSignal(str)            # booking id

    def __init__(self, time_slots: Sequence[str] = TIME_SLOTS, parent=None):
        super().__init__(parent)
        self.time_slots = tuple(time_slots)
        self.slots = bookable_slots(self.time_slots)
        self.first_slot_col = len(FIXED_HEADERS)

        # (row, col) -> ("empty", (date, time)) or ("booking", id)
        self._targets: Dict[Tuple[int, int], Tuple[str, object]] = {}

        self.setLayoutDirection(Qt.RightToLeft)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setSelectionMode(QAbstractItemView.NoSelection)
        self.setColumnCount(len(FIXED_HEADERS) + len(self.slots) + 1)
        self.setHorizontalHeaderLabels(FIXED_HEADERS + self.slots + [NOTES_HEADER])
        self.verticalHeader().setVisible(False)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)

        self.cellClicked.connect(self._on_cell_clicked)

    def show_month(self, days: List[date], bookings: List[Booking]) -> None:
        """Redraw the grid for `days` using one hall's bookings."""
        self.clearSpans()
        self.clearContents()
        self._targets.clear()
        self.setRowCount(len(days))

        bold = QFont()
        bold.setBold(True)

        for row, day_row in enumerate(layout_month(days, self.slots, bookings, self.time_slots)):
            day = day_row.day
            weekend = is_weekend(day)
            fixed_bg = WEEKEND_FIXED if weekend else WEEKDAY_FIXED
            row_bg = WEEKEND_ROW if weekend else WEEKDAY_ROW

            fixed_values = [str(day_row.index), weekday_name(day), format_display(day)]
            for col, text in enumerate(fixed_values):
                item = QTableWidgetItem(text)
                item.setBackground(QBrush(fixed_bg))
                item.setForeground(QBrush(Qt.white))
                item.setFont(bold)
                item.setTextAlignment(Qt.AlignCenter)
                self.setItem(row, col, item)

            for cell in day_row.cells:
                col = self.first_slot_col + cell.slot_index
                if isinstance(cell, OccupiedCell):
                    b = cell.booking
                    bg, fg = booking_color(b.booking_id)
                    item = QTableWidgetItem(b.department)
                    item.setBackground(QBrush(QColor(bg)))
                    item.setForeground(QBrush(QColor(fg)))
                    item.setToolTip(f"{b.department}\n{b.time} - {b.end_time}\n{b.notes}")
                    item.setTextAlignment(Qt.AlignCenter)
                    self.setItem(row, col, item)
                    if cell.span > 1:
                        self.setSpan(row, col, 1, cell.span)
                    self._targets[(row, col)] = ("booking", b.booking_id)
                else:
                    item = QTableWidgetItem("")
                    item.setBackground(QBrush(row_bg))
                    time = self.slots[cell.slot_index]
                    item.setToolTip(f"{format_iso(day)} - {time}")
                    self.setItem(row, col, item)
                    self._targets[(row, col)] = ("empty", (format_iso(day), time))

            notes = QTableWidgetItem(day_row.notes)
            notes.setBackground(QBrush(row_bg))
            notes.setForeground(QBrush(QColor("#4b5563")))
            self.setItem(row, self.columnCount() - 1, notes)

    def _on_cell_clicked(self, row: int, col: int):
        target = self._targets.get((row, col))
        if target is None:
            return
        kind, value = target
        if kind == "booking":
            self.bookingClicked.emit(value)
        else:
            day, time = value
            self.emptyCellClicked.emit(day, time)
