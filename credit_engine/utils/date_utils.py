"""Date manipulation utilities"""

from datetime import date, timedelta

DAYS_PER_MONTH = 30


def add_days(from_date: date, days: int) -> date:
    """Shift a date by a (possibly negative) number of calendar days"""
    return from_date + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Signed number of days from start to end"""
    return (end - start).days


def age_in_months(open_date: date, as_of: date) -> float:
    """Age of an account in 30-day months, floored at zero"""
    return max(0.0, days_between(open_date, as_of) / DAYS_PER_MONTH)


def format_us_date(value: date) -> str:
    """Render a date as MM/DD/YYYY for user-facing text"""
    return value.strftime("%m/%d/%Y")
