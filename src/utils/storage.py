# src/utils/storage.py
import json
import logging
import os
from typing import Callable, Dict, Iterable, List, Optional

from src.errors import StorageError
from src.models.booking import Booking

logger = logging.getLogger(__name__)

STORAGE_KEY = "hallBookings"


class MemoryStore:
    """Key/value blobs kept in a dict. Nothing survives the process."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Key/value blobs kept in a single JSON object on disk.

    The whole file is rewritten on every `set`. A missing file reads as an
    empty store.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def _discard(self, tmp_path: str) -> None:
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError as e:
            logger.warning("Could not remove %s: %s", tmp_path, e)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("Overwriting unreadable store at %s", self.path)
            data = {}
        data[key] = value

        tmp_path = self.path + ".tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            self._discard(tmp_path)
            raise StorageError(f"could not write {self.path}: {e}") from e


def load_bookings(store, seed_factory: Callable[[], List[Booking]]) -> List[Booking]:
    """
    Stored bookings, or the seed set if the blob is missing or unreadable.

    A record that cannot be turned into a Booking is logged and skipped; the
    rest of the stored set is kept.
    """
    try:
        raw = store.get(STORAGE_KEY)
        if raw is None:
            logger.info("No saved bookings found, using seed data")
            return seed_factory()
        records = json.loads(raw)
        if not isinstance(records, list):
            raise ValueError("saved bookings are not a list")
    except (StorageError, ValueError) as e:
        logger.error("Could not load bookings from storage: %s", e)
        return seed_factory()

    bookings = []
    for record in records:
        try:
            bookings.append(Booking.from_dict(record))
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("Skipping unreadable booking record %r: %s", record, e)

    logger.info("Loaded %d booking(s) from storage", len(bookings))
    return bookings


def save_bookings(store, bookings: Iterable[Booking]) -> bool:
    """Write the full set. Failures are logged and reported as False."""
    payload = json.dumps([b.to_dict() for b in bookings], ensure_ascii=False)
    try:
        store.set(STORAGE_KEY, payload)
    except StorageError as e:
        logger.error("Could not save bookings to storage: %s", e)
        return False
    return True
