"""
Business-day calendar.

Counts working days in a month and guards the count used as the ratio
denominator.
"""

import calendar
import logging
from datetime import date
from typing import Iterable, Optional, Set, Union

logger = logging.getLogger(__name__)

# Monday..Friday, as returned by date.weekday().
DEFAULT_WORKDAYS = (0, 1, 2, 3, 4)


class CalendarError(ValueError):
    """Raised when the business-day count cannot be used as a denominator."""


def _as_date(value: Union[str, date]) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class BusinessDayCalendar:
    """
    Calendar service counting business days.

    Weekdays listed in ``workdays`` are business days unless they appear in
    ``holidays``.

    Example:
        cal = BusinessDayCalendar(holidays=["2024-12-25"])
        cal.business_days_in_month(2024, 12)  # 21
    """

    def __init__(
        self,
        workdays: Iterable[int] = DEFAULT_WORKDAYS,
        holidays: Iterable[Union[str, date]] = (),
    ):
        self.workdays: Set[int] = set(workdays)
        self.holidays: Set[date] = {_as_date(h) for h in holidays}

    def is_business_day(self, day: date) -> bool:
        return day.weekday() in self.workdays and day not in self.holidays

    def business_days_in_month(self, year: int, month: int) -> int:
        """Count business days in the given month."""
        _, last = calendar.monthrange(year, month)
        return sum(
            1 for d in range(1, last + 1) if self.is_business_day(date(year, month, d))
        )

    def business_days_this_month(self, today: Optional[date] = None) -> int:
        """Count business days in the month containing ``today``."""
        today = today or date.today()
        return self.business_days_in_month(today.year, today.month)


class FixedBusinessDays:
    """Calendar stand-in that always answers the same count."""

    def __init__(self, days: int):
        self.days = days

    def business_days_this_month(self, today: Optional[date] = None) -> int:
        return self.days


def validate_business_days(days: int) -> int:
    """Reject counts that cannot divide a report count."""
    if days <= 0:
        raise CalendarError(f"Business day count must be positive, got {days}")
    return days


def business_days_this_month(calendar_service=None, today: Optional[date] = None) -> int:
    """
    Ask the calendar service for this month's business days.

    Args:
        calendar_service: Object with ``business_days_this_month(today)``;
                          defaults to a Monday-Friday calendar
        today: Reference date (defaults to the current date)

    Returns:
        Positive number of business days

    Raises:
        CalendarError: If the service answers zero or less
    """
    calendar_service = calendar_service or BusinessDayCalendar()
    days = validate_business_days(calendar_service.business_days_this_month(today))
    logger.debug(f"Business days this month: {days}")
    return days
