"""Time zone resolution and datetime coercion utilities for cadence_lite."""

from __future__ import annotations

import datetime
import logging
import os
import zoneinfo
from functools import lru_cache
from typing import Any

from dateutil import parser as date_parser

from .cadence_exceptions import TimezoneResolutionError

logger = logging.getLogger(__name__)

# Default fallback timezone for all timezone operations
DEFAULT_TIMEZONE = "America/Los_Angeles"

# Windows timezone names to IANA identifier mapping.
# SharePoint regional settings and Outlook/Exchange exports use these names.
# https://docs.microsoft.com/en-us/windows-hardware/manufacture/desktop/default-time-zones
WINDOWS_TZ_MAP: dict[str, str] = {
    # US Timezones
    "Pacific Standard Time": "America/Los_Angeles",
    "Mountain Standard Time": "America/Denver",
    "Central Standard Time": "America/Chicago",
    "Eastern Standard Time": "America/New_York",
    "Alaskan Standard Time": "America/Anchorage",
    "Hawaiian Standard Time": "Pacific/Honolulu",
    "US Mountain Standard Time": "America/Phoenix",  # Arizona (no DST)
    "Atlantic Standard Time": "America/Halifax",
    # Europe
    "GMT Standard Time": "Europe/London",
    "W. Europe Standard Time": "Europe/Berlin",
    "Romance Standard Time": "Europe/Brussels",
    "Central Europe Standard Time": "Europe/Budapest",
    "Central European Standard Time": "Europe/Warsaw",
    "E. Europe Standard Time": "Europe/Bucharest",
    "FLE Standard Time": "Europe/Helsinki",
    "GTB Standard Time": "Europe/Athens",
    "Russian Standard Time": "Europe/Moscow",
    # Asia
    "China Standard Time": "Asia/Shanghai",
    "Tokyo Standard Time": "Asia/Tokyo",
    "Korea Standard Time": "Asia/Seoul",
    "Singapore Standard Time": "Asia/Singapore",
    "India Standard Time": "Asia/Kolkata",
    "Arabian Standard Time": "Asia/Dubai",
    "Israel Standard Time": "Asia/Jerusalem",
    # Australia & Pacific
    "AUS Eastern Standard Time": "Australia/Sydney",
    "AUS Central Standard Time": "Australia/Darwin",
    "E. Australia Standard Time": "Australia/Brisbane",
    "W. Australia Standard Time": "Australia/Perth",
    "New Zealand Standard Time": "Pacific/Auckland",
    # Americas (South America)
    "SA Pacific Standard Time": "America/Bogota",
    "E. South America Standard Time": "America/Sao_Paulo",
    "Argentina Standard Time": "America/Buenos_Aires",
    # Africa
    "South Africa Standard Time": "Africa/Johannesburg",
    "Egypt Standard Time": "Africa/Cairo",
    # UTC
    "UTC": "UTC",
    "Coordinated Universal Time": "UTC",
}

# Obsolete/deprecated IANA names and common aliases
TZ_ALIAS_MAP: dict[str, str] = {
    "US/Pacific": "America/Los_Angeles",
    "US/Mountain": "America/Denver",
    "US/Central": "America/Chicago",
    "US/Eastern": "America/New_York",
    "US/Alaska": "America/Anchorage",
    "US/Hawaii": "Pacific/Honolulu",
    "US/Arizona": "America/Phoenix",
    "GMT": "UTC",
    "Etc/UTC": "UTC",
    "Etc/GMT": "UTC",
    "Universal": "UTC",
    "Zulu": "UTC",
    "PST8PDT": "America/Los_Angeles",
    "MST7MDT": "America/Denver",
    "CST6CDT": "America/Chicago",
    "EST5EDT": "America/New_York",
    "Asia/Rangoon": "Asia/Yangon",
    "America/Godthab": "America/Nuuk",
}


def windows_tz_to_iana(windows_tz: str) -> str | None:
    """Convert Windows timezone name to IANA timezone identifier.

    Args:
        windows_tz: Windows timezone name (e.g., "Mountain Standard Time")

    Returns:
        IANA timezone identifier (e.g., "America/Denver") or None if not found
    """
    return WINDOWS_TZ_MAP.get(windows_tz)


def resolve_timezone_alias(tz_name: str) -> str:
    """Resolve timezone alias to canonical IANA timezone identifier.

    Examples:
        >>> resolve_timezone_alias("US/Pacific")
        'America/Los_Angeles'
        >>> resolve_timezone_alias("GMT")
        'UTC'
    """
    return TZ_ALIAS_MAP.get(tz_name, tz_name)


def normalize_timezone_name(tz_str: str | None) -> str | None:
    """Normalize timezone string to canonical IANA timezone identifier.

    Resolution order:
    1. Windows timezone name
    2. Timezone alias
    3. IANA identifier validated with zoneinfo

    Args:
        tz_str: Timezone string (Windows name, alias, or IANA identifier)

    Returns:
        Canonical IANA timezone identifier or None if invalid

    Examples:
        >>> normalize_timezone_name("Pacific Standard Time")
        'America/Los_Angeles'
        >>> normalize_timezone_name("Invalid/Timezone") is None
        True
    """
    if not tz_str:
        return None

    tz_str = tz_str.strip()
    candidate = windows_tz_to_iana(tz_str) or resolve_timezone_alias(tz_str)

    try:
        zoneinfo.ZoneInfo(candidate)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Could not resolve timezone name %r", tz_str)
        return None
    return candidate


@lru_cache(maxsize=32)
def resolve_timezone(tz_str: str) -> zoneinfo.ZoneInfo:
    """Resolve a timezone name to a ZoneInfo instance.

    Args:
        tz_str: Windows name, alias, or IANA identifier

    Returns:
        ZoneInfo for the resolved zone

    Raises:
        TimezoneResolutionError: If the name cannot be resolved
    """
    iana = normalize_timezone_name(tz_str)
    if iana is None:
        raise TimezoneResolutionError(f"Unknown timezone: {tz_str!r}")
    return zoneinfo.ZoneInfo(iana)


def get_default_timezone(fallback: str = DEFAULT_TIMEZONE) -> str:
    """Get default timezone from environment with validation.

    Checks the CADENCE_DEFAULT_TIMEZONE environment variable first, then
    falls back to the provided fallback timezone.

    Args:
        fallback: Fallback timezone if not configured or invalid

    Returns:
        Valid IANA timezone string
    """
    configured = os.environ.get("CADENCE_DEFAULT_TIMEZONE", fallback)
    resolved = normalize_timezone_name(configured)
    if resolved is None:
        logger.warning("Invalid timezone %r, falling back to %r", configured, fallback)
        return fallback
    return resolved


def coerce_datetime(value: Any, tzinfo: datetime.tzinfo | None = None) -> datetime.datetime | None:
    """Coerce a window bound or stored timestamp into a datetime.

    Accepts datetimes, dates (taken at midnight) and ISO-8601 strings. Naive
    results are localized to ``tzinfo`` when one is given.

    Args:
        value: Candidate timestamp
        tzinfo: Zone used for naive values

    Returns:
        Datetime, or None when the value is missing or unparseable
    """
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, datetime.date):
        dt = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str) and value.strip():
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            logger.debug("Unparseable timestamp %r", value)
            return None
    else:
        return None

    if dt.tzinfo is None and tzinfo is not None:
        dt = dt.replace(tzinfo=tzinfo)
    return dt


def to_zone(dt: datetime.datetime, tzinfo: datetime.tzinfo | None) -> datetime.datetime:
    """Express ``dt`` in ``tzinfo`` for day-granularity comparisons.

    Aware datetimes are converted; naive datetimes are taken as wall time in
    the target zone. A naive target keeps the wall time and drops the zone.
    """
    if tzinfo is None:
        return dt.replace(tzinfo=None)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tzinfo)
    return dt.astimezone(tzinfo)
