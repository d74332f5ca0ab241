from typing import Iterable, List, Optional

from src.models.booking import Booking


def _clashes(other: Booking, candidate: Booking, exclude_id: Optional[str]) -> bool:
    if exclude_id is not None and other.booking_id == exclude_id:
        return False  # don't check against self when editing
    return other.overlaps(candidate)


def find_conflicts(
    existing: Iterable[Booking], candidate: Booking, exclude_id: Optional[str] = None
) -> List[Booking]:
    """
    All bookings in `existing` that clash with `candidate`.

    Same hall, same date, and [time, end_time) intervals overlapping.
    Touching intervals (one ends where the other starts) do not clash.
    """
    return [b for b in existing if _clashes(b, candidate, exclude_id)]


def has_conflict(
    existing: Iterable[Booking], candidate: Booking, exclude_id: Optional[str] = None
) -> bool:
    """True if committing `candidate` would overlap an existing booking."""
    return any(_clashes(b, candidate, exclude_id) for b in existing)
