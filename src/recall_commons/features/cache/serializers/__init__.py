"""Record serializers for the cache tier."""

from .record_serializer import (
    record_to_dict,
    build_record,
    encode_flat_value,
    decode_flat_value,
    to_flat,
    from_flat,
    to_document,
    from_document,
)

__all__ = [
    "record_to_dict",
    "build_record",
    "encode_flat_value",
    "decode_flat_value",
    "to_flat",
    "from_flat",
    "to_document",
    "from_document",
]
