# src/utils/dates.py
from calendar import monthrange
from datetime import date
from typing import List, Tuple

MONTH_NAMES = [
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
]

# indexed by date.weekday(): Monday == 0
WEEKDAY_NAMES = [
    "الاثنين", "الثلاثاء", "الاربعاء", "الخميس", "الجمعة", "السبت", "الاحد",
]


def days_in_month(year: int, month: int) -> List[date]:
    _, num_days = monthrange(year, month)
    return [date(year, month, day) for day in range(1, num_days + 1)]


def format_iso(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def format_display(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def year_range(today: date, years_ahead: int = 25) -> List[int]:
    return list(range(today.year, today.year + years_ahead + 1))


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
