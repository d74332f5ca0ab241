import json

from src.models.booking import Booking
from src.models.hall import Hall
from src.utils.storage import (
    STORAGE_KEY,
    JsonFileStore,
    MemoryStore,
    load_bookings,
    save_bookings,
)

SEED = [Booking("seed", Hall.AL_DANA, "2025-01-01", "09:00", "10:00", "IT", "")]


def seed_factory():
    return list(SEED)


def test_saved_bookings_reload_unchanged(tmp_path, booking_factory):
    store = JsonFileStore(str(tmp_path / "data" / "bookings.json"))
    bookings = [
        booking_factory(booking_id="a", notes="ملاحظة"),
        booking_factory(booking_id="b", hall=Hall.AL_DANA, time="13:00", end_time="15:00"),
    ]

    assert save_bookings(store, bookings) is True
    reloaded = load_bookings(JsonFileStore(store.path), seed_factory)

    assert set(reloaded) == set(bookings)


def test_persisted_shape(booking_factory):
    store = MemoryStore()
    save_bookings(store, [booking_factory(booking_id="a")])

    record = json.loads(store.get(STORAGE_KEY))[0]
    assert record == {
        "id": "a",
        "hallId": "alWaha",
        "date": "2025-03-10",
        "time": "09:00",
        "endTime": "11:00",
        "department": "HR",
        "notes": "",
    }


def test_missing_data_falls_back_to_seed():
    assert load_bookings(MemoryStore(), seed_factory) == SEED


def test_corrupt_file_falls_back_to_seed(tmp_path, caplog):
    path = tmp_path / "bookings.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_bookings(JsonFileStore(str(path)), seed_factory) == SEED
    assert "Could not load bookings" in caplog.text


def test_bad_records_are_skipped_and_good_ones_kept(caplog, booking_factory):
    good = booking_factory(booking_id="g")
    store = MemoryStore()
    bad = dict(good.to_dict(), id="bad", hallId="alWahaX")
    store.set(STORAGE_KEY, json.dumps([good.to_dict(), bad, "junk"]))

    assert load_bookings(store, seed_factory) == [good]
    assert "Skipping unreadable booking record" in caplog.text


def test_non_list_blob_falls_back_to_seed():
    store = MemoryStore()
    store.set(STORAGE_KEY, json.dumps({"id": "x"}))

    assert load_bookings(store, seed_factory) == SEED


def test_write_failure_is_logged_not_raised(tmp_path, caplog, booking_factory):
    # the store path is a directory, so the write cannot succeed
    store = JsonFileStore(str(tmp_path))

    assert save_bookings(store, [booking_factory()]) is False
    assert "Could not save bookings" in caplog.text


def test_failed_write_leaves_no_temp_file(tmp_path, booking_factory):
    store = JsonFileStore(str(tmp_path / "taken"))
    (tmp_path / "taken").mkdir()

    assert save_bookings(store, [booking_factory()]) is False
    assert not (tmp_path / "taken.tmp").exists()
