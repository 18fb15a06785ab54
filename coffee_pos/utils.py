"""
Clock, timestamp and timezone helpers
"""
import logging
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalise aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Fixed-width ISO-8601 UTC string
    
    Every stored timestamp has the same width, so comparing the strings
    orders them in time.
    """
    return ensure_utc(value).strftime(TIMESTAMP_FORMAT)


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """ZoneInfo for name, falling back to UTC when unset or unknown"""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone %s, using UTC", name)
        return timezone.utc
