"""
Timezone utilities for Kubux Grid.

Grid cells are local calendar dates, while event instants may carry any
timezone. These helpers project an instant onto the configured local zone
so it can be matched against a cell.
"""

from datetime import datetime, date, time as dt_time
import time as _time
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """Set the local timezone used to project instants onto dates."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.
    
    Returns:
        pytz timezone object for the configured local timezone.
    """
    try:
        return pytz.timezone(_local_timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback: fixed offset of the host clock
        is_dst = _time.localtime().tm_isdst
        if is_dst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def to_local_datetime(dt: datetime) -> datetime:
    """
    Convert an aware datetime to the local timezone.
    
    Args:
        dt: A datetime object, with or without tzinfo.
    
    Returns:
        A timezone-aware datetime in the local timezone.
        If input has no tzinfo, returns it unchanged.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(get_local_timezone())
    return dt


def to_aware_datetime(value) -> datetime:
    """
    Aware datetime for comparing mixed event values.

    Plain dates become local midnight; naive datetimes are taken as local
    time. Aware datetimes are returned unchanged.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, dt_time.min)
    if value.tzinfo is None:
        return get_local_timezone().localize(value)
    return value


def to_local_date(value) -> date:
    """Local calendar date of a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return to_local_datetime(value).date()
    return value
