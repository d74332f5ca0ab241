from datetime import date

import pytest

from src.algorithms.layout import (
    EmptyCell,
    OccupiedCell,
    layout_day,
    layout_month,
    span_total,
)
from src.utils.time_slots import TIME_SLOTS, bookable_slots

GRID = bookable_slots(TIME_SLOTS)


def test_empty_day_is_all_empty_cells():
    cells = layout_day(GRID, [])

    assert cells == [EmptyCell(i) for i in range(len(GRID))]


def test_two_slot_booking_is_one_merged_cell(booking_factory):
    booking = booking_factory(time="09:00", end_time="11:00")

    cells = layout_day(GRID, [booking])

    nine = GRID.index("09:00")
    assert cells[nine] == OccupiedCell(booking, nine, 2)
    # the next cell starts at 11:00, not at the covered 10:00 slot
    assert cells[nine + 1] == EmptyCell(GRID.index("11:00"))
    assert span_total(cells) == len(GRID)


def test_back_to_back_bookings(booking_factory):
    first = booking_factory(booking_id="a", time="09:00", end_time="11:00")
    second = booking_factory(booking_id="b", time="11:00", end_time="12:00")

    cells = layout_day(GRID, [second, first])

    occupied = [c for c in cells if isinstance(c, OccupiedCell)]
    assert [c.booking.booking_id for c in occupied] == ["a", "b"]
    assert occupied[1].slot_index == GRID.index("11:00")


def test_booking_until_end_of_day_uses_sentinel(booking_factory):
    booking = booking_factory(time="16:00", end_time="18:00")

    cells = layout_day(GRID, [booking])

    assert cells[-1] == OccupiedCell(booking, GRID.index("16:00"), 2)
    assert span_total(cells) == len(GRID)


@pytest.mark.parametrize("end_time", ["10:30", "08:00", "09:00", ""])
def test_malformed_end_time_is_drawn_as_one_slot(booking_factory, end_time):
    booking = booking_factory(time="09:00", end_time=end_time)

    cells = layout_day(GRID, [booking])

    occupied = [c for c in cells if isinstance(c, OccupiedCell)]
    assert occupied == [OccupiedCell(booking, GRID.index("09:00"), 1)]
    assert span_total(cells) == len(GRID)


def test_span_is_clamped_to_grid(booking_factory):
    # a grid shorter than the full slot list still covers exactly its length
    short_grid = GRID[:4]
    booking = booking_factory(time=short_grid[2], end_time="12:00")

    cells = layout_day(short_grid, [booking])

    assert span_total(cells) == len(short_grid)
    assert cells[-1].span == 2


def test_spans_cover_grid_for_a_busy_day(booking_factory):
    bookings = [
        booking_factory(booking_id="a", time="07:30", end_time="08:00"),
        booking_factory(booking_id="b", time="08:00", end_time="10:00"),
        booking_factory(booking_id="c", time="12:00", end_time="15:00"),
        booking_factory(booking_id="d", time="17:00", end_time="18:00"),
    ]

    cells = layout_day(GRID, bookings)

    assert span_total(cells) == len(GRID)
    covered = []
    for c in cells:
        covered.extend(range(c.slot_index, c.slot_index + c.span))
    assert covered == list(range(len(GRID)))


def test_layout_is_deterministic(booking_factory):
    bookings = [
        booking_factory(booking_id="a", time="09:00", end_time="10:00"),
        booking_factory(booking_id="b", time="13:00", end_time="15:00"),
    ]

    assert layout_day(GRID, bookings) == layout_day(GRID, bookings)


def test_layout_month_groups_by_date(booking_factory):
    days = [date(2025, 3, 10), date(2025, 3, 11)]
    bookings = [
        booking_factory(booking_id="a", booking_date="2025-03-10", notes="first"),
        booking_factory(booking_id="b", booking_date="2025-03-10", time="13:00",
                        end_time="14:00", notes="second"),
        booking_factory(booking_id="c", booking_date="2025-03-11", notes=""),
    ]

    rows = layout_month(days, GRID, bookings)

    assert [r.index for r in rows] == [1, 2]
    assert rows[0].notes == "first، second"
    assert rows[1].notes == ""
    assert sum(isinstance(c, OccupiedCell) for c in rows[0].cells) == 2
    assert all(span_total(r.cells) == len(GRID) for r in rows)


def test_grid_starting_mid_day_spans_correctly(booking_factory):
    booking = booking_factory(time="09:00", end_time="11:00")

    cells = layout_day(["09:00", "10:00", "11:00"], [booking])

    assert cells == [OccupiedCell(booking, 0, 2), EmptyCell(2)]
