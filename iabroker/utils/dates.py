"""Date utilities for scene scoring and tide requests."""
from datetime import datetime, timezone

from dateutil.parser import isoparse

EPOCH_2015 = datetime(2015, 1, 1, tzinfo=timezone.utc)
TEN_YEARS_SECONDS = 60.0 * 60.0 * 24.0 * 365.0 * 10.0
TIDE_DTG_FORMAT = "%Y-%m-%d-%H-%M"


def parse_acquired(value):
    """
    Parse an RFC 3339 acquisition timestamp.

    Args:
        value: Timestamp string such as 2017-04-17T15:28:42Z

    Returns:
        Timezone-aware datetime (naive values are taken as UTC) or None
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now():
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_tide_dtg(acquired):
    """
    Format an acquisition time the way the tide service expects it.

    Args:
        acquired: Timezone-aware datetime

    Returns:
        String in YYYY-MM-DD-HH-MM format (UTC)
    """
    return acquired.astimezone(timezone.utc).strftime(TIDE_DTG_FORMAT)
