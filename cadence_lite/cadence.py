"""Recurrence expansion driver for cadence_lite.

``Cadence`` pairs an anchor start with a ``RecurrenceRule`` and lazily yields
the occurrence starts that intersect a query window. Nothing here raises in
normal operation: invalid windows and unsupported pattern/option pairs yield
an empty sequence and are logged at WARNING.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date, datetime
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from .cadence_generators import create_generator
from .recurrence_models import QueryWindow, RecurrenceRule, RecurUntilType
from .timezone_utils import coerce_datetime, to_zone

logger = logging.getLogger(__name__)

# Window used when the caller does not supply one; bounds never-ending series
DEFAULT_WINDOW_YEARS = 3

WindowLike = Union[QueryWindow, tuple]


def as_query_window(window: Any) -> Optional[QueryWindow]:
    """Return ``window`` as a QueryWindow, or None when it is neither a window nor a pair."""
    if isinstance(window, QueryWindow):
        return window
    if isinstance(window, tuple) and len(window) == 2:
        return QueryWindow(*window)
    return None


class Cadence:
    """Expands one recurring series.

    Args:
        start: Anchor (first occurrence) start; its time-of-day and tzinfo are
            carried by every generated occurrence
        recurrence: Rule describing the series
        window_years: Length of the default query window in years
    """

    def __init__(
        self,
        start: datetime,
        recurrence: RecurrenceRule,
        window_years: int = DEFAULT_WINDOW_YEARS,
    ) -> None:
        self._start = start
        self._recurrence = recurrence
        self._window_years = window_years

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def recurrence(self) -> RecurrenceRule:
        return self._recurrence

    def default_window(self) -> QueryWindow:
        """Anchor start through ``window_years`` years later.

        The end is clamped to the last representable datetime for anchors near
        the end of the calendar.
        """
        try:
            end = self._start + relativedelta(years=self._window_years)
        except (OverflowError, ValueError):
            end = datetime.max.replace(tzinfo=self._start.tzinfo)
        return QueryWindow(self._start, end)

    def generate(self, window: Optional[WindowLike] = None) -> Iterator[datetime]:
        """Yield occurrence starts within ``window`` in chronological order.

        Both window bounds are inclusive at day granularity, measured in the
        anchor's time zone. A count limit is charged for every occurrence
        since the anchor, including those before the window start.

        Args:
            window: Query window, or a ``(start, end)`` pair; defaults to
                ``default_window()``

        Yields:
            Occurrence start datetimes
        """
        anchor = self._start
        if not isinstance(anchor, datetime):
            logger.warning("Cadence anchor %r is not a datetime; no occurrences", anchor)
            return

        query = self.default_window() if window is None else as_query_window(window)
        if query is None:
            logger.warning("Invalid query window %r; no occurrences", window)
            return
        window = query

        tz = anchor.tzinfo
        window_start = coerce_datetime(window.start, tz)
        window_end = coerce_datetime(window.end, tz)
        if window_start is None or window_end is None:
            logger.warning("Invalid query window %r; no occurrences", window)
            return

        until = self._recurrence.until
        start_day = to_zone(window_start, tz).date()
        end_day = self._effective_end_day(window_end)

        generator = create_generator(self._recurrence)
        if generator is None:
            logger.warning(
                "Unsupported recurrence pattern=%s; no occurrences",
                self._recurrence.pattern,
            )
            return

        dates = generator.generate(anchor)
        count = 0
        yielded = 0

        while True:
            try:
                candidate = next(dates)
            except StopIteration:
                break
            except (OverflowError, ValueError):
                # Ran off the end of the representable calendar
                logger.debug("Cadence candidate out of range after %d occurrences", count)
                break

            if candidate.date() > end_day:
                break

            if candidate.date() >= start_day:
                yielded += 1
                yield candidate

            count += 1
            if until.type == RecurUntilType.COUNT and count >= until.count:
                break

        logger.debug(
            "Cadence expansion complete: pattern=%s, examined=%d, yielded=%d",
            self._recurrence.pattern.value,
            count,
            yielded,
        )

    def _effective_end_day(self, window_end: datetime) -> date:
        """Earlier of the window end and the series' end date, as a day in the anchor zone."""
        tz = self._start.tzinfo
        end = to_zone(window_end, tz)

        until = self._recurrence.until
        if until.type == RecurUntilType.DATE and until.date is not None:
            end = min(end, to_zone(until.date, tz))

        return end.date()
