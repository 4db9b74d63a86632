"""Recurrence rule value objects for cadence_lite.

A ``RecurrenceRule`` is built once from stored event configuration and is
read-only afterwards. Field aliases follow the camelCase keys used by the
stored JSON (``byDate``, ``byDay``, ``weekOf``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .cadence_exceptions import RecurrenceParseError


class RecurPattern(str, Enum):
    """Recurrence families."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurPatternOption(str, Enum):
    """How monthly and yearly rules pick their day."""

    BY_DATE = "byDate"
    BY_DAY = "byDay"


class RecurDay(IntEnum):
    """Day class for by-day rules.

    Values 0-6 are specific weekdays (Sunday=0). ``DAY`` selects a calendar
    day, ``WEEKDAY`` Monday-Friday and ``WEEKEND`` Saturday-Sunday.
    """

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    DAY = 7
    WEEKDAY = 8
    WEEKEND = 9


class RecurWeekOfMonth(IntEnum):
    """Ordinal used by by-day rules (0-based, ``LAST`` is a sentinel)."""

    FIRST = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3
    LAST = 4


class RecurUntilType(str, Enum):
    """Termination condition for a series."""

    NEVER = "never"
    DATE = "date"
    COUNT = "count"


class _RecurrenceModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DailyRecurrence(_RecurrenceModel):
    """Repeat every N days."""

    every: int = Field(default=1, ge=1)


class WeeklyRecurrence(_RecurrenceModel):
    """Repeat on selected weekdays every N weeks."""

    every: int = Field(default=1, ge=1)
    days: tuple[bool, bool, bool, bool, bool, bool, bool] = Field(
        default=(False,) * 7, description="Selected weekdays indexed Sunday=0..Saturday=6"
    )

    @classmethod
    def on(cls, *weekdays: int, every: int = 1) -> WeeklyRecurrence:
        """Build a weekly recurrence selecting the given weekdays (Sunday=0)."""
        selected = set(weekdays)
        return cls(every=every, days=tuple(d in selected for d in range(7)))

    @property
    def has_days(self) -> bool:
        return any(self.days)


class RecurByDate(_RecurrenceModel):
    date: int = Field(default=1, ge=1, le=31)


class RecurByDay(_RecurrenceModel):
    day: RecurDay = RecurDay.SUNDAY
    week_of: RecurWeekOfMonth = RecurWeekOfMonth.FIRST


class MonthlyRecurrence(_RecurrenceModel):
    """Repeat every N months on a date or an ordinal day class."""

    every: int = Field(default=1, ge=1)
    option: Optional[RecurPatternOption] = RecurPatternOption.BY_DATE
    by_date: RecurByDate = Field(default_factory=RecurByDate)
    by_day: RecurByDay = Field(default_factory=RecurByDay)


class YearlyRecurrence(_RecurrenceModel):
    """Repeat every N years in a given month (0-based) on a date or ordinal day class."""

    every: int = Field(default=1, ge=1)
    month: int = Field(default=0, ge=0, le=11)
    option: Optional[RecurPatternOption] = RecurPatternOption.BY_DATE
    by_date: RecurByDate = Field(default_factory=RecurByDate)
    by_day: RecurByDay = Field(default_factory=RecurByDay)


class RecurUntil(_RecurrenceModel):
    type: RecurUntilType = RecurUntilType.NEVER
    date: Optional[datetime] = None
    count: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _count_required(self) -> RecurUntil:
        if self.type == RecurUntilType.COUNT and self.count is None:
            raise ValueError("until.count is required when until.type is 'count'")
        return self


class RecurrenceRule(_RecurrenceModel):
    """Immutable recurrence rule; ``pattern`` selects which section is active."""

    pattern: RecurPattern = RecurPattern.DAILY
    daily: DailyRecurrence = Field(default_factory=DailyRecurrence)
    weekly: WeeklyRecurrence = Field(default_factory=WeeklyRecurrence)
    monthly: MonthlyRecurrence = Field(default_factory=MonthlyRecurrence)
    yearly: YearlyRecurrence = Field(default_factory=YearlyRecurrence)
    until: RecurUntil = Field(default_factory=RecurUntil)


@dataclass(frozen=True)
class QueryWindow:
    """Date range requested by a caller.

    Bounds may be datetimes, dates or ISO strings taken straight from request
    parameters; the expansion driver coerces or rejects them.
    """

    start: Any
    end: Any


def parse_recurrence(data: Union[Mapping[str, Any], str, bytes]) -> RecurrenceRule:
    """Build a RecurrenceRule from stored configuration.

    Args:
        data: Mapping or JSON document using the stored camelCase keys

    Returns:
        Validated RecurrenceRule

    Raises:
        RecurrenceParseError: If the data does not describe a valid rule
    """
    try:
        if isinstance(data, (str, bytes)):
            return RecurrenceRule.model_validate_json(data)
        return RecurrenceRule.model_validate(data)
    except ValidationError as e:
        raise RecurrenceParseError(f"Invalid recurrence data: {e}") from e
