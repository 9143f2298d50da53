from datetime import date

import pytest

from core.calendar import (
    BusinessDayCalendar,
    CalendarError,
    FixedBusinessDays,
    business_days_this_month,
)


def test_weekdays_in_month():
    cal = BusinessDayCalendar()

    # March 2024 starts on a Friday
    assert cal.business_days_in_month(2024, 3) == 21
    assert cal.business_days_in_month(2024, 2) == 21
    assert cal.business_days_in_month(2023, 2) == 20


def test_holidays_are_excluded():
    cal = BusinessDayCalendar(holidays=["2024-12-25", date(2024, 12, 26)])

    assert cal.business_days_in_month(2024, 12) == 20


def test_holiday_on_weekend_changes_nothing():
    cal = BusinessDayCalendar(holidays=["2024-12-28"])

    assert cal.business_days_in_month(2024, 12) == 22


def test_custom_workdays():
    cal = BusinessDayCalendar(workdays=[6])  # Sundays only

    assert cal.business_days_in_month(2024, 12) == 5


def test_this_month_uses_reference_date():
    assert business_days_this_month(today=date(2024, 3, 15)) == 21


def test_fixed_count():
    assert business_days_this_month(FixedBusinessDays(20)) == 20


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_count_is_fatal(days):
    with pytest.raises(CalendarError):
        business_days_this_month(FixedBusinessDays(days))


def test_calendar_with_no_workdays_is_fatal():
    with pytest.raises(CalendarError):
        business_days_this_month(BusinessDayCalendar(workdays=[]), today=date(2024, 3, 1))
