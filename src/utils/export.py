# src/utils/export.py
import logging
from typing import Iterable, Sequence

from openpyxl import Workbook

from src.algorithms.layout import OccupiedCell, layout_month
from src.models.booking import Booking
from src.models.hall import Hall
from src.utils.dates import (
    MONTH_NAMES,
    days_in_month,
    format_display,
    weekday_name,
)
from src.utils.time_slots import TIME_SLOTS, bookable_slots

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ["م", "اليوم", "التاريخ"]
NOTES_HEADER = "الملاحظات"
SLOTS_HEADER = "من / الى"

TITLE_ROW = 1
GROUP_HEADER_ROW = 3
HEADER_ROW = 4
FIRST_DAY_ROW = 5


def export_filename(hall: Hall, year: int, month: int) -> str:
    return f"حجوزات_{hall.display_name}_{year}_{MONTH_NAMES[month - 1]}.xlsx"


def build_month_workbook(
    hall: Hall,
    year: int,
    month: int,
    bookings: Iterable[Booking],
    time_slots: Sequence[str] = TIME_SLOTS,
) -> Workbook:
    """
    One sheet for one hall and month: a row per day, a column per bookable
    slot. Multi-slot bookings are merged exactly like the on-screen grid.
    """
    slots = bookable_slots(time_slots)
    first_slot_col = len(FIXED_COLUMNS) + 1          # openpyxl columns are 1-based
    notes_col = first_slot_col + len(slots)

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = f"حجوزات {hall.display_name}"
    worksheet.sheet_view.rightToLeft = True

    title = f"جدول حجوزات {hall.display_name} - {MONTH_NAMES[month - 1]} {year}"
    worksheet.cell(row=TITLE_ROW, column=1, value=title)
    worksheet.merge_cells(
        start_row=TITLE_ROW, start_column=1, end_row=TITLE_ROW, end_column=notes_col
    )

    worksheet.cell(row=GROUP_HEADER_ROW, column=first_slot_col, value=SLOTS_HEADER)
    worksheet.merge_cells(
        start_row=GROUP_HEADER_ROW,
        start_column=first_slot_col,
        end_row=GROUP_HEADER_ROW,
        end_column=notes_col - 1,
    )

    for col, label in enumerate(FIXED_COLUMNS + slots + [NOTES_HEADER], start=1):
        worksheet.cell(row=HEADER_ROW, column=col, value=label)

    hall_bookings = [b for b in bookings if b.hall == hall]
    rows = layout_month(days_in_month(year, month), slots, hall_bookings, time_slots)
    for offset, day_row in enumerate(rows):
        r = FIRST_DAY_ROW + offset
        worksheet.cell(row=r, column=1, value=day_row.index)
        worksheet.cell(row=r, column=2, value=weekday_name(day_row.day))
        worksheet.cell(row=r, column=3, value=format_display(day_row.day))

        for cell in day_row.cells:
            if not isinstance(cell, OccupiedCell):
                continue
            col = first_slot_col + cell.slot_index
            worksheet.cell(row=r, column=col, value=cell.booking.department)
            if cell.span > 1:
                worksheet.merge_cells(
                    start_row=r, start_column=col, end_row=r, end_column=col + cell.span - 1
                )

        if day_row.notes:
            worksheet.cell(row=r, column=notes_col, value=day_row.notes)

    widths = [5, 15, 15] + [15] * len(slots) + [40]
    for col, width in enumerate(widths, start=1):
        letter = worksheet.cell(row=HEADER_ROW, column=col).column_letter
        worksheet.column_dimensions[letter].width = width

    return workbook


def export_month(
    path: str,
    hall: Hall,
    year: int,
    month: int,
    bookings: Iterable[Booking],
    time_slots: Sequence[str] = TIME_SLOTS,
) -> str:
    """Write the month sheet to `path` and return it."""
    workbook = build_month_workbook(hall, year, month, bookings, time_slots)
    workbook.save(path)
    logger.info("Exported %s %d-%02d to %s", hall.value, year, month, path)
    return path
