"""Record serialization between typed records and cache representations.

Flat records carry no schema. Values are reconstructed on load by trying, in
this exact order:

1. JSON parsing (numbers, booleans, objects, arrays)
2. ISO-8601 timestamps (``YYYY-MM-DDT...``)
3. ``"true"`` / ``"false"``
4. all-digit strings as integers
5. decimal strings as floats
6. otherwise the raw string

Changing the order changes what ambiguous strings decode to, so readers and
writers sharing a cache must agree on it.
"""

import json
import re
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import (
    Any,
    Dict,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ....core.exceptions import CacheSerializationError
from ....utils.datetime import parse_iso_datetime

T = TypeVar("T")

ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T")
INTEGER_PATTERN = re.compile(r"^\d+$")
FLOAT_PATTERN = re.compile(r"^\d+\.\d+$")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Shallow field mapping of a dataclass record or mapping."""
    if is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in fields(record)}
    if isinstance(record, Mapping):
        return dict(record)
    raise CacheSerializationError(
        f"Cannot serialize {type(record).__name__} for the cache",
        details={"type": type(record).__name__},
    )


def build_record(record_type: Type[T], data: Mapping[str, Any]) -> T:
    """Construct a record from a mapping, ignoring unknown fields.

    Raises:
        CacheSerializationError: If required fields are missing or the data
            does not fit the record's constructor.
    """
    accepted = {f.name for f in fields(record_type) if f.init}
    try:
        return record_type(**{k: v for k, v in data.items() if k in accepted})
    except TypeError as e:
        raise CacheSerializationError(
            f"Data does not match {record_type.__name__}: {e}",
            details={"type": record_type.__name__, "fields": sorted(data)},
        ) from e


# Flat form

def encode_flat_value(value: Any) -> str:
    """Encode a single value for the flat cache form."""
    # bool is checked before int since it is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return repr(value)
    try:
        return json.dumps(value, default=_json_default)
    except (TypeError, ValueError) as e:
        raise CacheSerializationError(
            f"Cannot encode value of type {type(value).__name__}",
            details={"type": type(value).__name__},
        ) from e


def decode_flat_value(raw: Union[str, bytes]) -> Any:
    """Reconstruct a value stored in the flat cache form."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        pass

    if ISO_DATETIME_PATTERN.match(raw):
        parsed = parse_iso_datetime(raw)
        if parsed is not None:
            return parsed
    if raw == "true":
        return True
    if raw == "false":
        return False
    if INTEGER_PATTERN.match(raw):
        return int(raw)
    if FLOAT_PATTERN.match(raw):
        return float(raw)
    return raw


def to_flat(record: Any) -> Dict[str, str]:
    """Serialize a record to a field -> string map, dropping null fields."""
    return {
        name: encode_flat_value(value)
        for name, value in record_to_dict(record).items()
        if value is not None
    }


def from_flat(data: Mapping[str, Any], record_type: Optional[Type[T]] = None) -> Union[T, Dict[str, Any]]:
    """Deserialize a flat cache record.

    Args:
        data: Field -> string map as read from the cache
        record_type: Dataclass to build, a plain dict is returned when omitted
    """
    decoded = {name: decode_flat_value(value) for name, value in data.items()}
    if record_type is None:
        return decoded
    return build_record(record_type, decoded)


# Document form

def _to_tree(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): _to_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_tree(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        return _to_tree(record_to_dict(value))
    return value


def to_document(record: Any) -> Dict[str, Any]:
    """Serialize a record to a JSON-compatible tree, dropping null fields.

    Nested objects and vectors keep their shape. Only timestamps and enums are
    converted, since the document store speaks JSON.
    """
    return {
        name: _to_tree(value)
        for name, value in record_to_dict(record).items()
        if value is not None
    }


def _is_datetime_hint(hint: Any) -> bool:
    if hint is datetime:
        return True
    if get_origin(hint) is Union:
        return datetime in get_args(hint)
    return False


def from_document(data: Mapping[str, Any], record_type: Optional[Type[T]] = None) -> Union[T, Dict[str, Any]]:
    """Deserialize a document cache record.

    Fields annotated as datetimes on ``record_type`` are parsed back from
    their ISO form. Everything else is passed through untouched.
    """
    if record_type is None:
        return dict(data)

    hints = get_type_hints(record_type)
    restored: Dict[str, Any] = {}
    for name, value in data.items():
        if isinstance(value, str) and _is_datetime_hint(hints.get(name)):
            parsed = parse_iso_datetime(value)
            if parsed is None:
                raise CacheSerializationError(
                    f"Invalid timestamp for {record_type.__name__}.{name}",
                    details={"field": name, "value": value},
                )
            value = parsed
        restored[name] = value
    return build_record(record_type, restored)
