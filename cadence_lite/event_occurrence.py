"""Event occurrences built from recurrence expansion.

The expansion engine only produces start datetimes. This module pairs them
with the master event they belong to, computes each occurrence's end from the
master's duration, and merges expansions of several events in display order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .cadence import Cadence, WindowLike, as_query_window
from .recurrence_models import RecurrenceRule
from .timezone_utils import coerce_datetime, to_zone

logger = logging.getLogger(__name__)


class CalendarEvent(BaseModel):
    """Master event as supplied by the event layer."""

    id: str = Field(..., description="Stable event identifier")
    title: str = ""
    start: datetime
    end: datetime
    is_all_day: bool = False
    location: Optional[str] = None
    recurrence: Optional[RecurrenceRule] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class EventOccurrence(BaseModel):
    """One concrete instance of an event."""

    event: CalendarEvent
    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)

    @property
    def title(self) -> str:
        return self.event.title

    @property
    def is_all_day(self) -> bool:
        return self.event.is_all_day

    @property
    def is_recurring(self) -> bool:
        return self.event.is_recurring

    @property
    def is_series_master(self) -> bool:
        # An occurrence is never the series master
        return False

    @property
    def is_series_exception(self) -> bool:
        return self.event.is_recurring


def start_asc_key(occurrence: EventOccurrence) -> tuple[bool, datetime]:
    """Sort key: all-day occurrences first, then ascending start."""
    return (not occurrence.is_all_day, occurrence.start)


def occurrence_overlaps(occurrence: EventOccurrence, start: datetime, end: datetime) -> bool:
    """True when the occurrence ends after ``start`` and starts before ``end``."""
    return occurrence.end > start and occurrence.start < end


def expand_event(event: CalendarEvent, window: Optional[WindowLike] = None) -> Iterator[EventOccurrence]:
    """Yield the occurrences of ``event`` within ``window``.

    Recurring events are expanded with ``Cadence``; a single event yields
    itself when its days intersect the window's days (or always, when no
    window is given), using the same inclusive day granularity as expansion.
    """
    duration = event.duration

    if event.recurrence is not None:
        for start in Cadence(event.start, event.recurrence).generate(window):
            yield EventOccurrence(event=event, start=start, end=start + duration)
        return

    if window is not None:
        query = as_query_window(window)
        tz = event.start.tzinfo
        window_start = coerce_datetime(query.start, tz) if query else None
        window_end = coerce_datetime(query.end, tz) if query else None
        if window_start is None or window_end is None:
            logger.warning("Invalid query window %r for event %s", window, event.id)
            return
        if event.start.date() > to_zone(window_end, tz).date():
            return
        if to_zone(event.end, tz).date() < to_zone(window_start, tz).date():
            return

    yield EventOccurrence(event=event, start=event.start, end=event.end)


def expand_events(
    events: Iterable[CalendarEvent], window: Optional[WindowLike] = None
) -> list[EventOccurrence]:
    """Expand several events and merge them in display order.

    Args:
        events: Master events to expand
        window: Query window shared by all events

    Returns:
        Occurrences sorted with ``start_asc_key``
    """
    occurrences: list[EventOccurrence] = []
    for event in events:
        occurrences.extend(expand_event(event, window))

    occurrences.sort(key=start_asc_key)
    logger.debug("Expanded %d occurrences", len(occurrences))
    return occurrences
