"""Date validation applied before a date is committed to the chip.

The day clamp and range checking are separate steps: clamping
silently corrects an over-long day for the target month, while range
checking (when enabled) rejects values the chip cannot represent.
"""

from __future__ import annotations

import logging

from rtcdriver.core.exceptions import InvalidRangeError
from rtcdriver.core.register import RegisterFieldSpec

logger = logging.getLogger(__name__)

THIRTY_DAY_MONTHS = (4, 6, 9, 11)
FEBRUARY = 2


def is_leap_year(year: int) -> bool:
    """Two-digit leap test: every year divisible by 4.

    There is no century exception. For the 2000-2099 range the chip
    covers, this agrees with the Gregorian calendar (2000 is a leap year).
    """
    return year % 4 == 0


def clamp_day(day: int, month: int, year: int) -> int:
    """Return day corrected for the length of the target month.

    - Day 31 in April, June, September or November becomes 30.
    - Day 29 or later in February becomes 29 in a leap year, else 28.

    Month and the lower bound of day are not corrected.
    """
    clamped = day
    if month in THIRTY_DAY_MONTHS and day == 31:
        clamped = 30
    if month == FEBRUARY and day >= 29:
        clamped = 29 if is_leap_year(year) else 28

    if clamped != day:
        logger.debug(f"Clamped day {day} to {clamped} for month {month}, year {year}")
    return clamped


def check_range(spec: RegisterFieldSpec, value: int) -> None:
    """Raise InvalidRangeError if value is outside the field's range."""
    if not spec.in_range(value):
        raise InvalidRangeError(spec.name, value, spec.low, spec.high)
