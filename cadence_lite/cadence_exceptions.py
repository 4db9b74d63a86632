"""Custom exception hierarchy for cadence_lite.

Recurrence expansion itself never raises into a rendering call stack; these
exceptions are raised at the boundaries only: parsing stored recurrence data,
resolving explicitly requested time zones and loading configuration.
"""


class CadenceError(Exception):
    """Base exception for all cadence_lite errors."""


class RecurrenceParseError(CadenceError):
    """Stored recurrence data could not be turned into a RecurrenceRule.

    Raised when:
    - A required field is missing or has the wrong type
    - ``every`` or ``count`` is not a positive integer
    - The weekly day set does not have exactly seven entries
    """


class TimezoneResolutionError(CadenceError):
    """A time zone name could not be resolved to an IANA zone.

    Windows zone names, obsolete aliases and IANA identifiers are all
    accepted; anything else raises this error.
    """


class ConfigError(CadenceError):
    """Configuration file is malformed.

    Raised when the file cannot be parsed as YAML or its top level is not
    a mapping.
    """
