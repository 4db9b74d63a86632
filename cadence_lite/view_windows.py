"""Query windows for the calendar views.

Views hand these windows to the expansion driver; weeks run Sunday to
Saturday.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Union

from dateutil.relativedelta import relativedelta

from .calendar_arithmetic import day_of_week, end_of_month, start_of_month
from .recurrence_models import QueryWindow


class ViewKey(str, Enum):
    """Calendar views that request occurrences."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTER = "quarter"
    LIST = "list"


DEFAULT_VIEW_KEY = ViewKey.MONTHLY

# Years either side of the anchor covered by the list view
LIST_VIEW_YEARS = 2


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def start_of_week(value: datetime) -> datetime:
    return start_of_day(value) - timedelta(days=day_of_week(value))


def end_of_week(value: datetime) -> datetime:
    return end_of_day(value) + timedelta(days=6 - day_of_week(value))


def view_date_range(view: Union[ViewKey, str], anchor: datetime) -> QueryWindow:
    """Return the window a view displays around ``anchor``.

    Args:
        view: View key (or its string value)
        anchor: Date the view is centred on

    Returns:
        QueryWindow with inclusive start-of-day / end-of-day bounds

    Raises:
        ValueError: If ``view`` is not a known view key
    """
    view = ViewKey(view)

    if view == ViewKey.DAILY:
        return QueryWindow(start_of_day(anchor), end_of_day(anchor))

    if view == ViewKey.WEEKLY:
        return QueryWindow(start_of_week(anchor), end_of_week(anchor))

    if view == ViewKey.MONTHLY:
        # Whole weeks, so the grid's leading and trailing days are covered too
        return QueryWindow(
            start_of_week(start_of_month(anchor)), end_of_week(end_of_month(anchor))
        )

    if view == ViewKey.QUARTER:
        first_month = (anchor.month - 1) // 3 * 3 + 1
        quarter_start = start_of_day(anchor.replace(day=1, month=first_month))
        quarter_end = end_of_day(end_of_month(quarter_start + relativedelta(months=2)))
        return QueryWindow(quarter_start, quarter_end)

    return QueryWindow(
        start_of_day(anchor - relativedelta(years=LIST_VIEW_YEARS)),
        end_of_day(anchor + relativedelta(years=LIST_VIEW_YEARS)),
    )
