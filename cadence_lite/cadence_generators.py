"""Pattern generators for recurrence expansion.

Each generator holds the slice of a ``RecurrenceRule`` it needs and maps it
onto a ``dateutil.rrule`` anchored at the series start. ``generate`` returns
a fresh, lazy iterator over candidate start datetimes; the rrules carry no
count or until, so termination is left to the expansion driver (or to the
end of the representable calendar).

rrule keeps the anchor's time-of-day (microseconds are restored here) and
tzinfo on every candidate, and never yields a candidate before the anchor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Optional, Protocol

from dateutil.rrule import DAILY, FR, MO, MONTHLY, SA, SU, TH, TU, WE, WEEKLY, YEARLY, rrule

from .recurrence_models import (
    DailyRecurrence,
    MonthlyRecurrence,
    RecurByDay,
    RecurDay,
    RecurPattern,
    RecurPatternOption,
    RecurrenceRule,
    RecurWeekOfMonth,
    WeeklyRecurrence,
    YearlyRecurrence,
)

logger = logging.getLogger(__name__)

# rrule weekdays indexed Sunday=0 .. Saturday=6
RRULE_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

WEEKDAY_CLASS = (MO, TU, WE, TH, FR)
WEEKEND_CLASS = (SA, SU)


def _set_position(week_of: RecurWeekOfMonth) -> int:
    """rrule ordinal (1-based, -1 for last) for a 0-based week-of-month."""
    return -1 if week_of == RecurWeekOfMonth.LAST else int(week_of) + 1


def _clamped_month_days(date: int) -> tuple[int, ...]:
    """Month days whose last existing member is ``date`` clamped to the month length.

    Used with ``bysetpos=-1``: "day 31" picks the 30th in April and the 29th
    in a leap February.
    """
    return tuple(range(min(date, 28), date + 1))


def _by_day_options(by_day: RecurByDay) -> dict:
    """rrule keyword arguments selecting the ordinal day class within a month."""
    position = _set_position(by_day.week_of)

    if by_day.day == RecurDay.DAY:
        return {"bymonthday": position}
    if by_day.day == RecurDay.WEEKDAY:
        return {"byweekday": WEEKDAY_CLASS, "bysetpos": position}
    if by_day.day == RecurDay.WEEKEND:
        return {"byweekday": WEEKEND_CLASS, "bysetpos": position}
    return {"byweekday": RRULE_WEEKDAYS[int(by_day.day)](position)}


def _occurrences(rule: rrule, start: datetime) -> Iterator[datetime]:
    """Iterate ``rule``, restoring the anchor microseconds that rrule drops."""
    if not start.microsecond:
        return iter(rule)
    return (candidate.replace(microsecond=start.microsecond) for candidate in rule)


class CadenceGenerator(Protocol):
    """Produces candidate occurrence starts from an anchor."""

    def generate(self, start: datetime) -> Iterator[datetime]:
        ...


class DailyCadenceGenerator:
    def __init__(self, daily: DailyRecurrence) -> None:
        self._daily = daily

    def generate(self, start: datetime) -> Iterator[datetime]:
        return _occurrences(rrule(DAILY, interval=self._daily.every, dtstart=start), start)


class WeeklyCadenceGenerator:
    """Every selected weekday, in order, every N weeks.

    Weeks run Sunday to Saturday; the interval counts from the week holding
    the anchor.
    """

    def __init__(self, weekly: WeeklyRecurrence) -> None:
        self._weekly = weekly

    def generate(self, start: datetime) -> Iterator[datetime]:
        # rrule treats an empty weekday set as "the anchor's weekday"
        if not self._weekly.has_days:
            return iter(())

        weekdays = tuple(RRULE_WEEKDAYS[d] for d, selected in enumerate(self._weekly.days) if selected)
        return _occurrences(
            rrule(WEEKLY, interval=self._weekly.every, byweekday=weekdays, wkst=SU, dtstart=start), start
        )


class MonthlyByDateCadenceGenerator:
    def __init__(self, monthly: MonthlyRecurrence) -> None:
        self._monthly = monthly

    def generate(self, start: datetime) -> Iterator[datetime]:
        return _occurrences(
            rrule(
                MONTHLY,
                interval=self._monthly.every,
                bymonthday=_clamped_month_days(self._monthly.by_date.date),
                bysetpos=-1,
                dtstart=start,
            ),
            start,
        )


class MonthlyByDayCadenceGenerator:
    def __init__(self, monthly: MonthlyRecurrence) -> None:
        self._monthly = monthly

    def generate(self, start: datetime) -> Iterator[datetime]:
        return _occurrences(
            rrule(
                MONTHLY,
                interval=self._monthly.every,
                dtstart=start,
                **_by_day_options(self._monthly.by_day),
            ),
            start,
        )


class YearlyByDateCadenceGenerator:
    def __init__(self, yearly: YearlyRecurrence) -> None:
        self._yearly = yearly

    def generate(self, start: datetime) -> Iterator[datetime]:
        return _occurrences(
            rrule(
                YEARLY,
                interval=self._yearly.every,
                bymonth=self._yearly.month + 1,
                bymonthday=_clamped_month_days(self._yearly.by_date.date),
                bysetpos=-1,
                dtstart=start,
            ),
            start,
        )


class YearlyByDayCadenceGenerator:
    def __init__(self, yearly: YearlyRecurrence) -> None:
        self._yearly = yearly

    def generate(self, start: datetime) -> Iterator[datetime]:
        return _occurrences(
            rrule(
                YEARLY,
                interval=self._yearly.every,
                bymonth=self._yearly.month + 1,
                dtstart=start,
                **_by_day_options(self._yearly.by_day),
            ),
            start,
        )


def create_generator(recurrence: RecurrenceRule) -> Optional[CadenceGenerator]:
    """Select the generator for a rule's pattern and option.

    Returns:
        Generator instance, or None for an unrecognized pattern/option pair
    """
    pattern = recurrence.pattern

    if pattern == RecurPattern.DAILY:
        return DailyCadenceGenerator(recurrence.daily)
    if pattern == RecurPattern.WEEKLY:
        return WeeklyCadenceGenerator(recurrence.weekly)
    if pattern == RecurPattern.MONTHLY:
        if recurrence.monthly.option == RecurPatternOption.BY_DATE:
            return MonthlyByDateCadenceGenerator(recurrence.monthly)
        if recurrence.monthly.option == RecurPatternOption.BY_DAY:
            return MonthlyByDayCadenceGenerator(recurrence.monthly)
    if pattern == RecurPattern.YEARLY:
        if recurrence.yearly.option == RecurPatternOption.BY_DATE:
            return YearlyByDateCadenceGenerator(recurrence.yearly)
        if recurrence.yearly.option == RecurPatternOption.BY_DAY:
            return YearlyByDayCadenceGenerator(recurrence.yearly)

    logger.debug("No cadence generator for pattern=%r", pattern)
    return None
