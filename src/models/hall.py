from enum import Enum


class Hall(Enum):
    """One of the two bookable meeting halls."""

    AL_WAHA = "alWaha"
    AL_DANA = "alDana"

    @property
    def display_name(self) -> str:
        return HALL_NAMES[self]


HALL_NAMES = {
    Hall.AL_WAHA: "قاعة الواحة",
    Hall.AL_DANA: "قاعة الدانة",
}
