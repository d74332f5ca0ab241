import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_STORAGE_PATH = os.path.join("~", ".hall_board", "bookings.json")


@dataclass(frozen=True)
class Settings:
    storage_path: str
    log_level: str
    export_dir: str


def load_settings() -> Settings:
    # Values from a local .env file never override the real environment
    load_dotenv()

    storage_path = os.environ.get("HALL_BOARD_STORAGE", DEFAULT_STORAGE_PATH)
    export_dir = os.environ.get("HALL_BOARD_EXPORT_DIR", "~")

    return Settings(
        storage_path=os.path.expanduser(storage_path),
        log_level=os.environ.get("HALL_BOARD_LOG_LEVEL", "INFO").upper(),
        export_dir=os.path.expanduser(export_dir),
    )
