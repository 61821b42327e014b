"""Bureau response deadlines for mailed disputes (FCRA § 611(a)(1)(A): 30 days)"""

from datetime import date
from typing import Optional

from credit_engine.domain.models import DeadlineStatus
from credit_engine.utils.date_utils import add_days, days_between

INVESTIGATION_DAYS = 30
APPROACHING_DAYS = 7


def calculate_30_day_deadline(mailing_date: date) -> date:
    return add_days(mailing_date, INVESTIGATION_DAYS)


def get_days_until_deadline(deadline: date, today: Optional[date] = None) -> int:
    """Calendar days left; negative once the deadline has passed"""
    return days_between(today or date.today(), deadline)


def is_deadline_approaching(deadline: date, today: Optional[date] = None) -> bool:
    remaining = get_days_until_deadline(deadline, today)
    return 0 <= remaining <= APPROACHING_DAYS


def is_deadline_overdue(deadline: date, today: Optional[date] = None) -> bool:
    return get_days_until_deadline(deadline, today) < 0


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def get_deadline_status(deadline: date, today: Optional[date] = None) -> DeadlineStatus:
    remaining = get_days_until_deadline(deadline, today)

    if remaining < 0:
        overdue_by = abs(remaining)
        return DeadlineStatus(
            status="overdue",
            days_remaining=remaining,
            message=f"Overdue by {overdue_by} day{_plural(overdue_by)}",
        )

    if remaining <= APPROACHING_DAYS:
        return DeadlineStatus(
            status="approaching",
            days_remaining=remaining,
            message=f"{remaining} day{_plural(remaining)} remaining",
        )

    return DeadlineStatus(
        status="normal",
        days_remaining=remaining,
        message=f"{remaining} days remaining",
    )
