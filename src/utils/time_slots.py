# src/utils/time_slots.py
from typing import List, Sequence

from src.algorithms.search_algorithms import binary_search

# Chronological grid of slot boundaries. The last label is the end-of-day
# sentinel: a valid end time, never a start.
TIME_SLOTS = (
    "07:30",
    "08:00",
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
    "18:00",
)


def bookable_slots(slots: Sequence[str] = TIME_SLOTS) -> List[str]:
    """The grid columns a booking may start in (everything but the sentinel)."""
    return list(slots[:-1])


def slot_index(label: str, slots: Sequence[str] = TIME_SLOTS) -> int:
    # labels are zero-padded HH:MM, so the grid is sorted as strings too
    found, _ = binary_search(slots, label)
    return found


def default_end_time(start: str, slots: Sequence[str] = TIME_SLOTS) -> str:
    """Next slot after `start`, or "" if there is none."""
    idx = slot_index(start, slots)
    if idx == -1 or idx + 1 >= len(slots):
        return ""
    return slots[idx + 1]


def end_times_after(start: str, slots: Sequence[str] = TIME_SLOTS) -> List[str]:
    idx = slot_index(start, slots)
    if idx == -1:
        return []
    return list(slots[idx + 1:])


def is_valid_range(start: str, end: str, slots: Sequence[str] = TIME_SLOTS) -> bool:
    start_idx = slot_index(start, slots)
    end_idx = slot_index(end, slots)
    if start_idx == -1 or end_idx == -1:
        return False
    if start_idx == len(slots) - 1:
        return False
    return start_idx < end_idx
