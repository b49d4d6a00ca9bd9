"""Identifier utilities for recall-commons."""

import time
import uuid
from typing import Optional


def generate_uuid_v7() -> str:
    """
    Generate a UUIDv7 with time-based ordering.
    
    Time-ordered identifiers keep store indexes compact and make ``id`` a
    usable tie-break for cursor pagination.
    
    Returns:
        String representation of UUIDv7
    """
    timestamp_ms = int(time.time() * 1000)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder="big")
    random_bytes = uuid.uuid4().bytes[6:]
    uuid_bytes = timestamp_bytes + random_bytes
    
    # Version 7
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]
    # RFC 4122 variant
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]
    
    return str(uuid.UUID(bytes=uuid_bytes))


def generate_record_id(prefix: Optional[str] = None) -> str:
    """
    Generate a record identifier of the form ``<prefix>-<uuid7>``.
    
    Args:
        prefix: Entity prefix such as ``client`` or ``ep_mem``
        
    Returns:
        New record identifier
    """
    value = generate_uuid_v7()
    return f"{prefix}-{value}" if prefix else value
