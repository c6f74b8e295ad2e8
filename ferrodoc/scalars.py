"""FJSON encoding of binary data, strings, datetimes, object ids and regexes."""

from __future__ import annotations

import base64
import binascii
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from .values import (
    INT64_MAX,
    INT64_MIN,
    Binary,
    CString,
    FJSONError,
    ObjectID,
    Regex,
    _json_kind,
    _object_fields,
    _parse_json,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _build_quote_table() -> dict[int, str]:
    table = {code: f"\\u{code:04x}" for code in range(0x20)}
    table.update(
        {
            ord("\n"): "\\n",
            ord("\r"): "\\r",
            ord("\t"): "\\t",
            ord('"'): '\\"',
            ord("\\"): "\\\\",
            ord("<"): "\\u003c",
            ord(">"): "\\u003e",
            ord("&"): "\\u0026",
            0x2028: "\\u2028",
            0x2029: "\\u2029",
        }
    )
    table.update({code: "\ufffd" for code in range(0xD800, 0xE000)})
    return table


_QUOTE_TABLE = _build_quote_table()


def _quote(text: str) -> str:
    """Quote a string as JSON, escaping HTML-sensitive characters."""
    return '"' + text.translate(_QUOTE_TABLE) + '"'


def _clean(text: str) -> str:
    """Replace lone surrogates left by JSON escapes with the replacement character."""
    return _LONE_SURROGATE.sub("\ufffd", text)


def _string_field(fields: dict[str, Any], key: str, type_name: str) -> str:
    raw = fields.get(key)
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise FJSONError(f"{key} of {type_name} must be a string, got {_json_kind(raw)}")
    return _clean(raw)


def encode_binary(value: Binary) -> str:
    """Encode binary data as ``{"$b": "<base64>", "s": <subtype>}``."""
    if not isinstance(value, Binary):
        raise FJSONError(f"expected Binary, got {type(value).__name__}")
    encoded = base64.b64encode(value.data).decode("ascii")
    return f'{{"$b":"{encoded}","s":{int(value.subtype)}}}'


def decode_binary(data: str | bytes) -> Binary:
    """Decode ``{"$b": "<base64>", "s": <subtype>}`` into Binary."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$b", "s"), "binary")

    raw = fields.get("$b")
    if raw is None:
        payload = b""
    elif isinstance(raw, str):
        try:
            payload = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise FJSONError(f"illegal base64 data: {exc}") from None
    else:
        raise FJSONError(f"$b of binary must be a string, got {_json_kind(raw)}")

    subtype = fields.get("s")
    if subtype is None:
        subtype = 0
    elif isinstance(subtype, bool) or not isinstance(subtype, int):
        raise FJSONError(f"cannot decode {_json_kind(subtype)} {subtype!r} as binary subtype")
    elif not 0 <= subtype <= 0xFF:
        raise FJSONError(f"binary subtype {subtype} does not fit in a byte")

    return Binary(payload, subtype)


def encode_cstring(value: str) -> str:
    """Encode a zero-terminated string as ``{"$c": "<string>"}``."""
    if not isinstance(value, str):
        raise FJSONError(f"expected str, got {type(value).__name__}")
    return f'{{"$c":{_quote(value)}}}'


def decode_cstring(data: str | bytes) -> CString:
    """Decode ``{"$c": "<string>"}`` into a CString."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$c",), "cstring")
    return CString(_string_field(fields, "$c", "cstring"))


def encode_datetime(value: datetime) -> str:
    """Encode a datetime as ``{"$d": <milliseconds since epoch>}``.

    Naive datetimes are taken to be in UTC.
    """
    if not isinstance(value, datetime):
        raise FJSONError(f"expected datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    millis = (value - _EPOCH) // _MILLISECOND
    return f'{{"$d":{millis}}}'


def decode_datetime(data: str | bytes) -> datetime:
    """Decode ``{"$d": <milliseconds>}`` into an aware UTC datetime."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$d",), "datetime")
    raw = fields.get("$d")
    if raw is None:
        raw = 0
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise FJSONError(f"cannot decode {_json_kind(raw)} {raw!r} as datetime milliseconds")
    if not INT64_MIN <= raw <= INT64_MAX:
        raise FJSONError(f"number {raw} overflows int64")
    try:
        return _EPOCH + timedelta(milliseconds=raw)
    except OverflowError:
        raise FJSONError(f"datetime {raw} ms is out of the supported range") from None


def encode_objectid(value: ObjectID) -> str:
    """Encode an object id as ``{"$o": "<hex>"}``."""
    if not isinstance(value, ObjectID):
        raise FJSONError(f"expected ObjectID, got {type(value).__name__}")
    return f'{{"$o":"{value.hex()}"}}'


def decode_objectid(data: str | bytes) -> ObjectID:
    """Decode ``{"$o": "<hex>"}`` into an ObjectID."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$o",), "objectid")
    return ObjectID.from_hex(_string_field(fields, "$o", "objectid"))


def encode_regex(value: Regex) -> str:
    """Encode a regex as ``{"$r": "<pattern>", "o": "<options>"}``."""
    if not isinstance(value, Regex):
        raise FJSONError(f"expected Regex, got {type(value).__name__}")
    return f'{{"$r":{_quote(value.pattern)},"o":{_quote(value.options)}}}'


def decode_regex(data: str | bytes) -> Regex:
    """Decode ``{"$r": "<pattern>", "o": "<options>"}`` into a Regex."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$r", "o"), "regex")
    return Regex(_string_field(fields, "$r", "regex"), _string_field(fields, "o", "regex"))


def encode_string(value: str) -> str:
    """Encode a string as a JSON string."""
    if not isinstance(value, str):
        raise FJSONError(f"expected str, got {type(value).__name__}")
    return _quote(value)


def decode_string(data: str | bytes) -> str:
    """Decode a bare JSON string."""
    value = _parse_json(data, allow_null=False)
    if not isinstance(value, str):
        raise FJSONError(f"cannot decode {_json_kind(value)} as string")
    return _clean(value)