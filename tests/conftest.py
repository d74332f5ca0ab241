import pytest

from src.models.booking import Booking
from src.models.hall import Hall


def make_booking(booking_id="b1", hall=Hall.AL_WAHA, booking_date="2025-03-10",
                 time="09:00", end_time="11:00", department="HR", notes=""):
    return Booking(booking_id, hall, booking_date, time, end_time, department, notes)


@pytest.fixture
def booking_factory():
    return make_booking
