"""Utility helpers for recall-commons."""

from .datetime import utc_now, parse_iso_datetime
from .ids import generate_uuid_v7, generate_record_id

__all__ = [
    "utc_now",
    "parse_iso_datetime",
    "generate_uuid_v7",
    "generate_record_id",
]
