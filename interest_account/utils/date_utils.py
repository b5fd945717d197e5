"""Date manipulation utilities"""

import calendar
from datetime import date


def is_leap_year(on: date | None = None) -> bool:
    """Whether the year of ``on`` (default: today) is a leap year"""
    return calendar.isleap((on or date.today()).year)


def compounding_steps(days: int, period_days: int) -> int:
    """Number of whole compounding periods that fit in ``days``"""
    if days <= 0:
        return 0
    return days // period_days
