import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from src.models.booking import Booking
from src.utils.dates import format_iso
from src.utils.time_slots import TIME_SLOTS, slot_index

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = "، "


@dataclass(frozen=True)
class EmptyCell:
    # Free column; clicking it starts a new booking at this slot.
    slot_index: int
    span: int = 1


@dataclass(frozen=True)
class OccupiedCell:
    # One merged cell covering `span` slot columns; clicking it edits the booking.
    booking: Booking
    slot_index: int
    span: int


Cell = Union[EmptyCell, OccupiedCell]


@dataclass(frozen=True)
class DayRow:
    index: int
    day: date
    cells: Tuple[Cell, ...]
    notes: str


def layout_day(
    slot_grid: Sequence[str],
    bookings: Iterable[Booking],
    time_slots: Sequence[str] = TIME_SLOTS,
) -> List[Cell]:
    """
    Lay one hall/day of bookings onto the slot columns.

    `slot_grid` is the bookable grid (no sentinel); `time_slots` is the full
    grid used to find where each booking ends. Walks left to right and jumps
    over the slots an occupied cell covers, so the spans always add up to
    len(slot_grid).

    A booking whose end label is missing from the grid, or is not after its
    start, is drawn as a single slot instead of breaking the row. If two
    bookings share a start label (only possible when the no-overlap rule was
    bypassed) the first one in input order wins.
    """
    by_start: Dict[str, Booking] = {}
    for b in bookings:
        by_start.setdefault(b.time, b)

    n = len(slot_grid)
    cells: List[Cell] = []
    i = 0
    while i < n:
        booking = by_start.get(slot_grid[i])
        if booking is None:
            cells.append(EmptyCell(i))
            i += 1
            continue

        # measured in the full grid so it holds for any slice of it
        start_idx = slot_index(booking.time, time_slots)
        end_idx = slot_index(booking.end_time, time_slots)
        span = end_idx - start_idx if start_idx != -1 and end_idx != -1 else 0
        if span <= 0:
            logger.warning(
                "Booking %s has end time %r not after %r; drawing as one slot",
                booking.booking_id, booking.end_time, booking.time,
            )
            span = 1
        span = min(span, n - i)

        cells.append(OccupiedCell(booking, i, span))
        i += span

    return cells


def span_total(cells: Iterable[Cell]) -> int:
    return sum(c.span for c in cells)


def day_notes(bookings: Iterable[Booking]) -> str:
    return NOTES_SEPARATOR.join(b.notes for b in bookings if b.notes)


def layout_month(
    days: Sequence[date],
    slot_grid: Sequence[str],
    bookings: Iterable[Booking],
    time_slots: Sequence[str] = TIME_SLOTS,
) -> List[DayRow]:
    """One DayRow per day for a single hall's bookings.

    Shared by the on-screen table and the spreadsheet export so both merge
    the same cells.
    """
    by_date: Dict[str, List[Booking]] = {}
    for b in bookings:
        by_date.setdefault(b.booking_date, []).append(b)

    rows = []
    for index, day in enumerate(days, start=1):
        day_bookings = by_date.get(format_iso(day), [])
        cells = layout_day(slot_grid, day_bookings, time_slots)
        rows.append(DayRow(index, day, tuple(cells), day_notes(day_bookings)))
    return rows
