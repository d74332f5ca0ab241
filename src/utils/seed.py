# src/utils/seed.py
from datetime import date, timedelta
from typing import List, Optional

from src.models.booking import Booking
from src.models.hall import Hall
from src.utils.dates import format_iso


def generate_initial_bookings(today: Optional[date] = None) -> List[Booking]:
    """A few sample bookings around `today`, used when nothing is stored yet."""
    today = today or date.today()
    tomorrow = today + timedelta(days=1)
    day_after = today + timedelta(days=2)

    return [
        Booking(
            booking_id="1",
            hall=Hall.AL_WAHA,
            booking_date=format_iso(today),
            time="09:00",
            end_time="11:00",
            department="قسم الموارد البشرية",
            notes="مقابلات توظيف",
        ),
        Booking(
            booking_id="2",
            hall=Hall.AL_WAHA,
            booking_date=format_iso(tomorrow),
            time="11:00",
            end_time="12:00",
            department="قسم تكنولوجيا المعلومات",
            notes="اجتماع فريق الدعم",
        ),
        Booking(
            booking_id="3",
            hall=Hall.AL_DANA,
            booking_date=format_iso(day_after),
            time="14:00",
            end_time="16:00",
            department="قسم التسويق",
            notes="ورشة عمل عن الحملات الإعلانية",
        ),
    ]
