"""Semi-monthly pay period arithmetic.

Pay days are the 15th and the last day of each month, so every month splits
into two periods: days 1-15 and day 16 through the month's last day.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Tuple

FIRST_PERIOD_LAST_DAY = 15


@dataclass(frozen=True)
class PayPeriod:
    """The half-month pay period containing a reference date.

    Attributes:
        start_date: First day of the period.
        end_date: Last day of the period (inclusive).
        day_in_period: 1-based position of the reference date in the period.
        total_days: Inclusive length of the period.
        days_remaining: Days left including the reference date, at least 1.
    """

    start_date: date
    end_date: date
    day_in_period: int
    total_days: int
    days_remaining: int

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "dayInPeriod": self.day_in_period,
            "totalDays": self.total_days,
            "daysRemaining": self.days_remaining,
        }


def last_day_of_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def month_window(day: date) -> Tuple[date, date]:
    """First and last calendar day of the month containing day."""
    return day.replace(day=1), day.replace(day=last_day_of_month(day))


def resolve_pay_period(reference_date: date) -> PayPeriod:
    """Work out which half-month pay period reference_date falls in.

    Any valid date produces a valid period.
    """
    if reference_date.day <= FIRST_PERIOD_LAST_DAY:
        start_date = reference_date.replace(day=1)
        end_date = reference_date.replace(day=FIRST_PERIOD_LAST_DAY)
    else:
        start_date = reference_date.replace(day=FIRST_PERIOD_LAST_DAY + 1)
        end_date = reference_date.replace(day=last_day_of_month(reference_date))

    total_days = (end_date - start_date).days + 1
    day_in_period = (reference_date - start_date).days + 1
    days_remaining = max(1, total_days - day_in_period + 1)

    return PayPeriod(
        start_date=start_date,
        end_date=end_date,
        day_in_period=day_in_period,
        total_days=total_days,
        days_remaining=days_remaining,
    )


def days_until_payday(reference_date: date) -> int:
    """Days until the next pay day (the 15th or the month's last day).

    On the last day of the month this returns 15 rather than counting into
    the next month.
    """
    day = reference_date.day
    last_day = last_day_of_month(reference_date)

    if day < FIRST_PERIOD_LAST_DAY:
        return FIRST_PERIOD_LAST_DAY - day
    if day < last_day:
        return last_day - day
    return FIRST_PERIOD_LAST_DAY
