from src.algorithms.search_algorithms import binary_search
from src.utils.time_slots import (
    TIME_SLOTS,
    bookable_slots,
    default_end_time,
    end_times_after,
    is_valid_range,
    slot_index,
)


def test_binary_search_reports_insertion_point():
    assert binary_search(["08:00", "09:00", "11:00"], "09:00") == (1, 1)
    assert binary_search(["08:00", "09:00", "11:00"], "10:00") == (-1, 2)
    assert binary_search([], "10:00") == (-1, 0)


def test_bookable_slots_drop_the_sentinel():
    slots = bookable_slots()

    assert slots[0] == "07:30"
    assert slots[-1] == "17:00"
    assert "18:00" not in slots


def test_slot_index():
    assert slot_index("07:30") == 0
    assert slot_index("18:00") == len(TIME_SLOTS) - 1
    assert slot_index("10:30") == -1


def test_default_end_time_is_next_slot():
    assert default_end_time("07:30") == "08:00"
    assert default_end_time("17:00") == "18:00"
    assert default_end_time("18:00") == ""
    assert default_end_time("nope") == ""


def test_end_times_after():
    assert end_times_after("16:00") == ["17:00", "18:00"]
    assert end_times_after("nope") == []


def test_is_valid_range():
    assert is_valid_range("09:00", "10:00")
    assert is_valid_range("07:30", "18:00")
    assert not is_valid_range("10:00", "10:00")
    assert not is_valid_range("11:00", "10:00")
    assert not is_valid_range("09:00", "10:30")
    assert not is_valid_range("18:00", "18:00")
