"""Calendar arithmetic helpers for recurrence expansion.

All helpers take and return datetimes and keep the time-of-day and tzinfo of
their input. Arithmetic is wall-clock arithmetic: adding a day across a DST
transition keeps the same local time.

Day of week follows the Sunday=0 convention used by stored recurrence data.
``resolve_ordinal_day_in_month`` is the single-month form of the by-day
rules that the pattern generators express as rrule options.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from .recurrence_models import RecurDay, RecurWeekOfMonth

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(weeks=1)


def day_of_week(value: datetime) -> int:
    """Return the day of week with Sunday=0 .. Saturday=6."""
    return value.isoweekday() % 7


def is_weekend(value: datetime) -> bool:
    return day_of_week(value) in (0, 6)


def this_or_previous_weekday(value: datetime) -> datetime:
    while is_weekend(value):
        value -= ONE_DAY
    return value


def this_or_next_weekday(value: datetime) -> datetime:
    while is_weekend(value):
        value += ONE_DAY
    return value


def this_or_previous_weekend_day(value: datetime) -> datetime:
    while not is_weekend(value):
        value -= ONE_DAY
    return value


def this_or_next_weekend_day(value: datetime) -> datetime:
    while not is_weekend(value):
        value += ONE_DAY
    return value


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-based) of ``year``."""
    return calendar.monthrange(year, month)[1]


def start_of_month(value: datetime) -> datetime:
    return value.replace(day=1)


def end_of_month(value: datetime) -> datetime:
    return value.replace(day=days_in_month(value.year, value.month))


def resolve_ordinal_day_in_month(value: datetime, week_of: int, day: int) -> datetime:
    """Position ``value`` on the ``week_of`` occurrence of ``day`` in its month.

    Args:
        value: Any datetime within the target month
        week_of: 0-based ordinal, or ``RecurWeekOfMonth.LAST``
        day: ``RecurDay`` value (specific weekday or a day class)

    Returns:
        Resolved datetime. For a specific weekday the ordinal is applied as a
        whole number of weeks from the first such weekday, so an ordinal past
        the month's last occurrence lands in the following month rather than
        being rejected.
    """
    is_last = week_of == RecurWeekOfMonth.LAST

    if day == RecurDay.DAY:
        if is_last:
            return end_of_month(value)
        return value.replace(day=int(week_of) + 1)

    if day == RecurDay.WEEKDAY:
        if is_last:
            return this_or_previous_weekday(end_of_month(value))
        current = this_or_next_weekday(start_of_month(value))
        for _ in range(int(week_of)):
            current = this_or_next_weekday(current + ONE_DAY)
        return current

    if day == RecurDay.WEEKEND:
        if is_last:
            return this_or_previous_weekend_day(end_of_month(value))
        current = this_or_next_weekend_day(start_of_month(value))
        for _ in range(int(week_of)):
            current = this_or_next_weekend_day(current + ONE_DAY)
        return current

    # Specific weekday. "Last" is found by stepping back one week from the
    # first such weekday of the following month.
    target = value + relativedelta(months=1) if is_last else value
    first = start_of_month(target)

    # Move to the requested weekday within the Sunday-Saturday week holding
    # the first of the month; if that is still in the previous month, go
    # forward one week.
    current = first + timedelta(days=int(day) - day_of_week(first))
    if current.month != first.month:
        current += ONE_WEEK

    return current + (-ONE_WEEK if is_last else ONE_WEEK * int(week_of))
