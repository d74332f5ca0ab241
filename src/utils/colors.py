# src/utils/colors.py
import zlib
from typing import Tuple

# (background, text)
BOOKING_PALETTE = [
    ("#bfdbfe", "#1e40af"),  # blue
    ("#99f6e4", "#115e59"),  # teal
    ("#bbf7d0", "#166534"),  # green
    ("#c7d2fe", "#3730a3"),  # indigo
    ("#e9d5ff", "#6b21a8"),  # purple
    ("#fbcfe8", "#9d174d"),  # pink
    ("#bae6fd", "#075985"),  # sky
    ("#a5f3fc", "#155e75"),  # cyan
    ("#a7f3d0", "#065f46"),  # emerald
    ("#fecdd3", "#9f1239"),  # rose
]


def booking_color(booking_id: str) -> Tuple[str, str]:
    """Palette entry for a booking, derived from its id alone."""
    # crc32 rather than hash(): str hashes are salted per process
    checksum = zlib.crc32(booking_id.encode("utf-8"))
    return BOOKING_PALETTE[checksum % len(BOOKING_PALETTE)]
