"""Timezone-aware time utilities.

Centralizes datetime parsing so model output is handled consistently.
Naive datetimes are assumed to be in the configured timezone (Pacific Time
unless overridden).
"""
from datetime import datetime, timezone as dt_timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from dateutil import parser as dateutil_parser

PACIFIC = ZoneInfo("America/Los_Angeles")

# Two fill-in dates that differ in year, month, day and weekday. A string that
# parses identically against both pins down a full calendar date on its own.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def to_iso_instant(value: datetime) -> str:
    """Format an aware datetime as a UTC instant with millisecond precision.

    Example: 2026-03-15T02:00:00.000Z
    """
    utc = value.astimezone(dt_timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_datetime_string(value: Any, default_tz: Optional[str] = None) -> Optional[str]:
    """Best-effort parse of a model-supplied datetime string.

    Returns the canonical ISO instant, or None if the value is missing,
    not a string, or not a real calendar date. Partial values such as "8pm"
    or "Friday" are rejected rather than completed from today's date.
    Bad input never raises.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed, check = [dateutil_parser.parse(value.strip(), default=d) for d in _FILL_DEFAULTS]
    except (ValueError, OverflowError):
        return None

    if parsed != check:
        return None

    if parsed.tzinfo is None:
        tz = ZoneInfo(default_tz) if default_tz else PACIFIC
        parsed = parsed.replace(tzinfo=tz)

    try:
        return to_iso_instant(parsed)
    except (ValueError, OverflowError):
        # Out of range once shifted to UTC (e.g. year 1 with a negative offset)
        return None
