import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.algorithms.conflicts import find_conflicts
from src.models.booking import Booking
from src.models.hall import Hall
from src.utils.seed import generate_initial_bookings
from src.utils.storage import load_bookings, save_bookings
from src.utils.time_slots import TIME_SLOTS, is_valid_range

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "يوجد تعارض في الحجز. الرجاء اختيار وقت آخر."
INVALID_RANGE_MESSAGE = "وقت الانتهاء يجب أن يكون بعد وقت البداية."
NOT_FOUND_MESSAGE = "الحجز غير موجود."
NOT_AVAILABLE = "غير متوفر"


class SaveStatus(Enum):
    SAVED = "saved"
    CONFLICT = "conflict"
    INVALID = "invalid"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SaveResult:
    status: SaveStatus
    booking: Optional[Booking] = None
    conflicts: Tuple[Booking, ...] = ()
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is SaveStatus.SAVED


@dataclass(frozen=True)
class TickerStats:
    hall_totals: Dict[Hall, int]
    top_department: str
    last_department: str


@dataclass(frozen=True)
class DashboardStats:
    total: int
    by_hall: Dict[Hall, int]
    top_departments: List[Tuple[str, int]]
    by_month: Dict[int, int] = field(default_factory=dict)  # 0-based month -> count


class BookingBoard:
    """
    Owns the booking set for both halls.

    bookings[booking_id] = Booking. Every successful mutation is written back
    to the store straight after the in-memory set changes. Readers get a
    tuple snapshot and never see the dict itself.
    """

    def __init__(
        self,
        store,
        seed_factory: Callable[[], List[Booking]] = generate_initial_bookings,
        time_slots: Sequence[str] = TIME_SLOTS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.time_slots = tuple(time_slots)
        self.halls = list(Hall)
        self._clock = clock
        self._bookings: Dict[str, Booking] = {
            b.booking_id: b for b in load_bookings(store, seed_factory)
        }
        self.has_unsaved_changes = False

    # ---------- helpers ----------

    def _persist(self) -> None:
        save_bookings(self.store, self._bookings.values())
        self.has_unsaved_changes = True

    def _new_id(self) -> str:
        base = self._clock().isoformat()
        booking_id = base
        n = 1
        while booking_id in self._bookings:
            booking_id = f"{base}-{n}"
            n += 1
        return booking_id

    def _check(self, candidate: Booking, exclude_id: Optional[str] = None) -> Optional[SaveResult]:
        if not is_valid_range(candidate.time, candidate.end_time, self.time_slots):
            return SaveResult(SaveStatus.INVALID, message=INVALID_RANGE_MESSAGE)

        conflicts = find_conflicts(self._bookings.values(), candidate, exclude_id)
        if conflicts:
            logger.info(
                "Refused %s on %s %s-%s: clashes with %d booking(s)",
                candidate.hall.value, candidate.booking_date,
                candidate.time, candidate.end_time, len(conflicts),
            )
            return SaveResult(
                SaveStatus.CONFLICT, conflicts=tuple(conflicts), message=CONFLICT_MESSAGE
            )
        return None

    # ---------- reads ----------

    def snapshot(self) -> Tuple[Booking, ...]:
        return tuple(self._bookings.values())

    def __len__(self) -> int:
        return len(self._bookings)

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    def bookings_for_hall(self, hall: Hall) -> List[Booking]:
        return [b for b in self._bookings.values() if b.hall == hall]

    def bookings_for_day(self, hall: Hall, booking_date: str) -> List[Booking]:
        out = [
            b for b in self._bookings.values()
            if b.hall == hall and b.booking_date == booking_date
        ]
        out.sort(key=lambda b: b.time)
        return out

    # ---------- public API ----------

    def create_booking(
        self,
        hall: Hall,
        booking_date: str,
        time: str,
        end_time: str,
        department: str = "",
        notes: str = "",
    ) -> SaveResult:
        candidate = Booking(
            booking_id=self._new_id(),
            hall=hall,
            booking_date=booking_date,
            time=time,
            end_time=end_time,
            department=department,
            notes=notes,
        )

        refused = self._check(candidate)
        if refused:
            return refused

        self._bookings[candidate.booking_id] = candidate
        self._persist()
        logger.info("Created booking %s", candidate.booking_id)
        return SaveResult(SaveStatus.SAVED, booking=candidate)

    def update_booking(
        self,
        booking_id: str,
        booking_date: str,
        time: str,
        end_time: str,
        department: str = "",
        notes: str = "",
    ) -> SaveResult:
        """
        Change date, times and text of an existing booking.
        Hall and id are kept; the booking never clashes with its own old range.
        """
        old = self._bookings.get(booking_id)
        if old is None:
            return SaveResult(SaveStatus.NOT_FOUND, message=NOT_FOUND_MESSAGE)

        candidate = old.with_changes(
            booking_date=booking_date,
            time=time,
            end_time=end_time,
            department=department,
            notes=notes,
        )

        refused = self._check(candidate, exclude_id=booking_id)
        if refused:
            return refused

        self._bookings[booking_id] = candidate
        self._persist()
        logger.info("Updated booking %s", booking_id)
        return SaveResult(SaveStatus.SAVED, booking=candidate)

    def delete_booking(self, booking_id: str) -> bool:
        if self._bookings.pop(booking_id, None) is None:
            return False
        self._persist()
        logger.info("Deleted booking %s", booking_id)
        return True

    def mark_saved(self) -> None:
        """Acknowledge the current state. Data is already persisted on every change."""
        self.has_unsaved_changes = False

    # ---------- stats ----------

    def monthly_counts(self, year: int, month: int) -> Dict[Hall, int]:
        prefix = f"{year}-{month:02d}"
        counts = {hall: 0 for hall in self.halls}
        for b in self._bookings.values():
            if b.booking_date.startswith(prefix):
                counts[b.hall] += 1
        return counts

    def hall_totals(self) -> Dict[Hall, int]:
        counts = {hall: 0 for hall in self.halls}
        for b in self._bookings.values():
            counts[b.hall] += 1
        return counts

    def department_counts(self) -> Counter:
        return Counter(
            b.department.strip() for b in self._bookings.values() if b.department.strip()
        )

    def ticker_stats(self) -> TickerStats:
        ranked = self.department_counts().most_common(1)
        top = ranked[0][0] if ranked else NOT_AVAILABLE

        # ids are ISO timestamps, so the greatest one is the newest booking
        newest = max(self._bookings.values(), key=lambda b: b.booking_id, default=None)
        last = newest.department if newest and newest.department else NOT_AVAILABLE

        return TickerStats(self.hall_totals(), top, last)

    def dashboard_stats(self, year: int) -> DashboardStats:
        by_month = {m: 0 for m in range(12)}
        for b in self._bookings.values():
            if b.booking_date[:4] != str(year):
                continue
            month = b.booking_date[5:7]
            if month.isdigit() and 1 <= int(month) <= 12:
                by_month[int(month) - 1] += 1

        return DashboardStats(
            total=len(self._bookings),
            by_hall=self.hall_totals(),
            top_departments=self.department_counts().most_common(5),
            by_month=by_month,
        )

    def hall_share(self, hall: Hall) -> int:
        """Percentage of all bookings that are in `hall`."""
        total = len(self._bookings)
        if total == 0:
            return 0
        return round(self.hall_totals()[hall] / total * 100)
