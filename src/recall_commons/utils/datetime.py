"""
DateTime utilities for consistent timezone handling.
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current UTC time with timezone awareness.
    
    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, accepting a trailing ``Z`` for UTC.
    
    Args:
        value: ISO-8601 formatted string
    
    Returns:
        datetime: Parsed datetime, or None if the string is not a valid timestamp
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
