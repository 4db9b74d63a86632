"""cadence_lite - recurrence expansion for calendar events.

Expands a stored recurrence rule (daily, weekly, monthly and yearly variants
with interval, weekday sets, ordinals and end-by-date/count termination) into
the occurrence starts that intersect a query window.
"""

__version__ = "0.1.0"

from .cadence import DEFAULT_WINDOW_YEARS, Cadence
from .cadence_exceptions import (
    CadenceError,
    ConfigError,
    RecurrenceParseError,
    TimezoneResolutionError,
)
from .calendar_arithmetic import resolve_ordinal_day_in_month
from .event_occurrence import CalendarEvent, EventOccurrence, expand_event, expand_events
from .recurrence_models import (
    DailyRecurrence,
    MonthlyRecurrence,
    QueryWindow,
    RecurByDate,
    RecurByDay,
    RecurDay,
    RecurPattern,
    RecurPatternOption,
    RecurrenceRule,
    RecurUntil,
    RecurUntilType,
    RecurWeekOfMonth,
    WeeklyRecurrence,
    YearlyRecurrence,
    parse_recurrence,
)
from .view_windows import ViewKey, view_date_range

__all__ = [
    "DEFAULT_WINDOW_YEARS",
    "Cadence",
    "CadenceError",
    "CalendarEvent",
    "ConfigError",
    "DailyRecurrence",
    "EventOccurrence",
    "MonthlyRecurrence",
    "QueryWindow",
    "RecurByDate",
    "RecurByDay",
    "RecurDay",
    "RecurPattern",
    "RecurPatternOption",
    "RecurUntil",
    "RecurUntilType",
    "RecurWeekOfMonth",
    "RecurrenceParseError",
    "RecurrenceRule",
    "TimezoneResolutionError",
    "ViewKey",
    "WeeklyRecurrence",
    "YearlyRecurrence",
    "expand_event",
    "expand_events",
    "parse_recurrence",
    "resolve_ordinal_day_in_month",
    "view_date_range",
]
