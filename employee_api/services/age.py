from __future__ import annotations

from datetime import date

MIN_AGE = 16
MAX_AGE = 100


def derive_age(date_of_birth: date, today: date) -> int:
    """Whole years elapsed between ``date_of_birth`` and ``today``."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
