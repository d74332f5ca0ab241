class HallBoardError(Exception):
    """Base class for errors raised by the booking board."""


class StorageError(HallBoardError):
    """Reading or writing the persisted booking blob failed."""
