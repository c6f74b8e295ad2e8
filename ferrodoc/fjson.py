"""Generic FJSON marshalling of documents, arrays and scalar values."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from .numbers import (
    decode_double,
    decode_int64,
    decode_timestamp,
    encode_bool,
    encode_double,
    encode_int32,
    encode_int64,
    encode_timestamp,
)
from .scalars import (
    decode_binary,
    decode_cstring,
    decode_datetime,
    decode_objectid,
    decode_regex,
    decode_string,
    encode_binary,
    encode_cstring,
    encode_datetime,
    encode_objectid,
    encode_regex,
    encode_string,
)
from .values import (
    INT32_MAX,
    INT32_MIN,
    Binary,
    CString,
    Document,
    FJSONError,
    Int64,
    ObjectID,
    Regex,
    Timestamp,
    _json_kind,
    _parse_json,
)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=True)


def _to_int32(value: int | float) -> int:
    """Convert a bare JSON number into a 32-bit int, truncating fractions."""
    if isinstance(value, float) and not math.isfinite(value):
        raise FJSONError(f"number {value} is out of range")
    number = int(value)
    if not INT32_MIN <= number <= INT32_MAX:
        raise FJSONError(f"number {value} overflows int32")
    return number


def _document_from_json(obj: Any) -> Document:
    if not isinstance(obj, dict):
        raise FJSONError(f"cannot decode {_json_kind(obj)} as document")
    if "$k" not in obj:
        raise FJSONError("missing $k")

    keys = obj["$k"]
    if keys is None:
        keys = []
    if not isinstance(keys, list) or not all(isinstance(key, str) for key in keys):
        raise FJSONError("$k must be an array of strings")
    if len(keys) + 1 != len(obj):
        raise FJSONError(f"{len(keys)} elements in $k, {len(obj)} in total")

    doc = Document()
    for key in keys:
        if key not in obj:
            raise FJSONError(f"missing key {key!r}")
        doc[decode_string(_dump(key))] = _decode_value(obj[key])
    return doc


_TAGGED_DECODERS: tuple[tuple[str, Callable[[str], Any] | None], ...] = (
    ("$f", decode_double),
    ("$k", None),
    ("$b", decode_binary),
    ("$o", decode_objectid),
    ("$d", decode_datetime),
    ("$r", decode_regex),
    ("$t", decode_timestamp),
    ("$l", decode_int64),
    ("$c", decode_cstring),
)


def _decode_object(obj: dict[str, Any]) -> Any:
    for tag, decoder in _TAGGED_DECODERS:
        if obj.get(tag) is None:
            continue
        if decoder is None:
            return _document_from_json(obj)
        return decoder(_dump(obj))
    raise FJSONError(f"unhandled map {obj!r}")


def _decode_value(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, dict):
        return _decode_object(value)
    if isinstance(value, list):
        return [_decode_value(item) for item in value]
    if isinstance(value, str):
        return decode_string(_dump(value))
    if isinstance(value, (int, float)):
        return _to_int32(value)
    raise FJSONError(f"unhandled element {value!r}")


def unmarshal(data: str | bytes) -> Any:
    """Decode an FJSON text into the matching Python value."""
    return _decode_value(_parse_json(data))


def decode_document(data: str | bytes) -> Document:
    """Decode an FJSON document object with its ``$k`` key order."""
    return _document_from_json(_parse_json(data, allow_null=False))


def decode_array(data: str | bytes) -> list[Any]:
    """Decode a JSON array of FJSON values."""
    value = _parse_json(data, allow_null=False)
    if not isinstance(value, list):
        raise FJSONError(f"cannot decode {_json_kind(value)} as array")
    return [_decode_value(item) for item in value]


def encode_document(doc: Mapping[str, Any]) -> str:
    """Encode a mapping as an FJSON document, keeping its key order."""
    if not isinstance(doc, Mapping):
        raise FJSONError(f"expected a mapping, got {type(doc).__name__}")
    keys = list(doc)
    for key in keys:
        if not isinstance(key, str):
            raise FJSONError(f"document keys must be strings, got {type(key).__name__}")
    quoted = [encode_string(key) for key in keys]
    fields = "".join(f",{name}:{marshal(doc[key])}" for key, name in zip(keys, quoted))
    return '{"$k":[' + ",".join(quoted) + "]" + fields + "}"


def encode_array(values: list[Any] | tuple[Any, ...]) -> str:
    """Encode a sequence of values as a JSON array."""
    if not isinstance(values, (list, tuple)):
        raise FJSONError(f"expected a list, got {type(values).__name__}")
    return "[" + ",".join(marshal(item) for item in values) + "]"


def marshal(value: Any) -> str:
    """Encode a supported Python value into FJSON text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return encode_bool(value)
    if isinstance(value, Int64):
        return encode_int64(value)
    if isinstance(value, Timestamp):
        return encode_timestamp(value)
    if isinstance(value, int):
        return encode_int32(value)
    if isinstance(value, float):
        return encode_double(value)
    if isinstance(value, CString):
        return encode_cstring(value)
    if isinstance(value, str):
        return encode_string(value)
    if isinstance(value, Mapping):
        return encode_document(value)
    if isinstance(value, (list, tuple)):
        return encode_array(value)
    if isinstance(value, datetime):
        return encode_datetime(value)
    if isinstance(value, Binary):
        return encode_binary(value)
    if isinstance(value, ObjectID):
        return encode_objectid(value)
    if isinstance(value, Regex):
        return encode_regex(value)
    raise TypeError(f"cannot marshal value of type {type(value).__name__}")