from dataclasses import dataclass, replace
from typing import Any, Dict

from src.models.hall import Hall


@dataclass(frozen=True)
class Booking:
    # Represents a single booking for one hall on one day.
    # Times are slot labels ("09:00"); zero-padded, so string order is time order.

    booking_id: str
    hall: Hall
    booking_date: str
    time: str
    end_time: str
    department: str = ""
    notes: str = ""

    def overlaps(self, other: "Booking") -> bool:
        """Check if this booking overlaps with another on same date & hall."""
        return (
            self.hall == other.hall
            and self.booking_date == other.booking_date
            and self.time < other.end_time
            and self.end_time > other.time
        )

    def with_changes(self, **changes) -> "Booking":
        """Copy with new date/time/text fields. Id and hall stay fixed."""
        changes.pop("booking_id", None)
        changes.pop("hall", None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.booking_id,
            "hallId": self.hall.value,
            "date": self.booking_date,
            "time": self.time,
            "endTime": self.end_time,
            "department": self.department,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Booking":
        try:
            return cls(
                booking_id=str(data["id"]),
                hall=Hall(data["hallId"]),
                booking_date=data["date"],
                time=data["time"],
                end_time=data["endTime"],
                department=data.get("department") or "",
                notes=data.get("notes") or "",
            )
        except KeyError as e:
            raise ValueError(f"booking record is missing {e.args[0]!r}") from e

    def __repr__(self) -> str:
        return (
            f"{self.department}: {self.hall.value} "
            f"{self.booking_date} ({self.time}-{self.end_time})"
        )
