"""Calendar date to epoch timestamp conversion.

Dates are interpreted at UTC midnight on the proleptic Gregorian
calendar, so year 0 and negative years are real dates. Triples that do
not form a calendar date map to the ``-1`` sentinel instead of raising.
"""

from __future__ import annotations

from core.constants import INVALID_EPOCH_TIME, MAX_CALENDAR_YEAR, MIN_CALENDAR_YEAR

_SECONDS_PER_DAY = 86_400
_DAYS_PER_ERA = 146_097
# Days from 0000-03-01 to 1970-01-01.
_EPOCH_DAY_OFFSET = 719_468
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def epoch_time(year: int, month: int, day: int) -> int:
    """Return seconds since the Unix epoch for UTC midnight on a date.

    Args:
        year: Calendar year, ``MIN_CALENDAR_YEAR`` through ``MAX_CALENDAR_YEAR``.
        month: Calendar month, 1 through 12.
        day: Day of month.

    Returns:
        Whole seconds since 1970-01-01T00:00:00Z, negative for earlier
        dates, or ``-1`` when the triple is not a valid date. A valid
        date never yields ``-1`` since midnights are 86400 seconds apart.
    """
    if not MIN_CALENDAR_YEAR <= year <= MAX_CALENDAR_YEAR:
        return INVALID_EPOCH_TIME
    if not 1 <= month <= 12 or not 1 <= day <= _days_in_month(year, month):
        return INVALID_EPOCH_TIME
    return _days_from_civil(year, month, day) * _SECONDS_PER_DAY


def _is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _days_in_month(year: int, month: int) -> int:
    if month == 2 and _is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Count days from 1970-01-01, counting years from March."""
    shifted_year = year - 1 if month <= 2 else year
    era = shifted_year // 400
    year_of_era = shifted_year - era * 400
    day_of_year = (153 * ((month + 9) % 12) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_DAY_OFFSET
