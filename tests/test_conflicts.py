from src.algorithms.conflicts import find_conflicts, has_conflict
from src.models.hall import Hall


def test_adjacent_bookings_do_not_conflict(booking_factory):
    existing = [booking_factory(time="09:00", end_time="10:00")]
    candidate = booking_factory(booking_id="new", time="10:00", end_time="11:00")

    assert has_conflict(existing, candidate) is False


def test_booking_ending_where_other_starts_does_not_conflict(booking_factory):
    existing = [booking_factory(time="10:00", end_time="11:00")]
    candidate = booking_factory(booking_id="new", time="09:00", end_time="10:00")

    assert has_conflict(existing, candidate) is False


def test_partial_overlap_is_a_conflict(booking_factory):
    existing = [booking_factory(time="09:00", end_time="11:00")]
    candidate = booking_factory(booking_id="new", time="10:00", end_time="12:00")

    assert has_conflict(existing, candidate) is True


def test_contained_range_is_a_conflict(booking_factory):
    existing = [booking_factory(time="08:00", end_time="13:00")]
    candidate = booking_factory(booking_id="new", time="10:00", end_time="11:00")

    assert has_conflict(existing, candidate) is True


def test_editing_booking_does_not_clash_with_itself(booking_factory):
    original = booking_factory(booking_id="x")

    assert has_conflict([original], original, exclude_id="x") is False


def test_unknown_exclude_id_excludes_nothing(booking_factory):
    existing = [booking_factory(booking_id="x")]
    candidate = booking_factory(booking_id="new")

    assert has_conflict(existing, candidate, exclude_id="missing") is True


def test_other_hall_or_date_never_conflicts(booking_factory):
    existing = [
        booking_factory(booking_id="a", hall=Hall.AL_DANA),
        booking_factory(booking_id="b", booking_date="2025-03-11"),
    ]
    candidate = booking_factory(booking_id="new")

    assert has_conflict(existing, candidate) is False


def test_find_conflicts_lists_every_clash(booking_factory):
    a = booking_factory(booking_id="a", time="08:00", end_time="09:00")
    b = booking_factory(booking_id="b", time="09:00", end_time="10:00")
    c = booking_factory(booking_id="c", time="10:00", end_time="12:00")
    candidate = booking_factory(booking_id="new", time="08:00", end_time="11:00")

    assert find_conflicts([a, b, c], candidate) == [a, b, c]
    assert find_conflicts([a, b, c], candidate, exclude_id="b") == [a, c]


def test_checker_does_not_mutate_input(booking_factory):
    existing = [booking_factory(booking_id="a")]
    before = list(existing)

    has_conflict(existing, booking_factory(booking_id="new"))

    assert existing == before
