"""
Centralized DateTime Utilities
==============================

All gate timestamps are timezone-aware. Calendar days (which decide whether a
scan belongs to today's attendance record) are taken in the timezone
configured as LOCAL_TIMEZONE, not in UTC.

Functions:
- now(): current time in the gate's local timezone
- utc_now(): current UTC time, for values persisted to MongoDB
- ensure_utc(): normalize a datetime to aware UTC
- to_local(): convert a stored datetime into the local timezone
"""
# Standard library imports
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

# Local application imports
from ..core.config import get_settings

logger = logging.getLogger(__name__)


def get_app_timezone() -> tzinfo:
    """
    Get the gate's local timezone from config.
    Returns UTC if the configured name is invalid.
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s', falling back to UTC", tz_str)
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def now() -> datetime:
    """Current datetime in the gate's local timezone."""
    return datetime.now(get_app_timezone())


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime read from MongoDB into the local timezone.

    PyMongo returns naive datetimes that represent UTC, so naive input is
    treated as UTC first.
    """
    utc_dt = ensure_utc(dt)
    if utc_dt is None:
        return None
    return utc_dt.astimezone(get_app_timezone())

