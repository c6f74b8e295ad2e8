"""Value types of the document model and the strict JSON reading they share.

FJSON maps values to JSON as follows:

    Document        {"$k": ["<key 1>", ...], "<key 1>": <value 1>, ...}
    list            JSON array
    float           {"$f": JSON number} or {"$f": "Infinity|-Infinity|NaN"}
    str             JSON string
    Binary          {"$b": "<base 64 string>", "s": <subtype number>}
    ObjectID        {"$o": "<24 character hex string>"}
    bool            JSON true / false
    datetime        {"$d": milliseconds since epoch as JSON number}
    None            JSON null
    Regex           {"$r": "<pattern>", "o": "<options>"}
    int             JSON number (32-bit)
    Timestamp       {"$t": "<number as string>"}
    Int64           {"$l": "<number as string>"}
    CString         {"$c": "<string>"}
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Any, Iterable

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_JSON_WHITESPACE = " \t\n\r"
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


class FJSONError(ValueError):
    """Raised when a value cannot be encoded to or decoded from FJSON."""


class BinarySubtype(enum.IntEnum):
    """Known subtypes of binary data."""

    GENERIC = 0x00
    FUNCTION = 0x01
    GENERIC_OLD = 0x02
    UUID_OLD = 0x03
    UUID = 0x04
    MD5 = 0x05
    ENCRYPTED = 0x06
    USER = 0x80


def _normalize_subtype(value: int) -> int:
    number = int(value)
    if not 0 <= number <= 0xFF:
        raise FJSONError(f"binary subtype {number} does not fit in a byte")
    try:
        return BinarySubtype(number)
    except ValueError:
        return number


@dataclass(frozen=True)
class Binary:
    """Binary data with a one-byte subtype."""

    data: bytes = b""
    subtype: int = BinarySubtype.GENERIC

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "subtype", _normalize_subtype(self.subtype))


@dataclass(frozen=True)
class ObjectID:
    """A 12-byte object identifier."""

    raw: bytes = bytes(12)

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != 12:
            raise FJSONError(f"ObjectID must be 12 bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    def hex(self) -> str:
        """Return the identifier as 24 lower-case hex digits."""
        return self.raw.hex()

    @classmethod
    def from_hex(cls, text: str) -> ObjectID:
        """Parse an identifier from its hex form."""
        if _HEX_DIGITS.fullmatch(text) is None:
            raise FJSONError(f"invalid hex string {text!r}")
        if len(text) % 2:
            raise FJSONError("odd length hex string")
        return cls(bytes.fromhex(text))


@dataclass(frozen=True)
class Regex:
    """A regular expression pattern with its option letters."""

    pattern: str
    options: str = ""


class Timestamp(int):
    """An unsigned 64-bit replication timestamp."""

    def __new__(cls, value: Any = 0) -> Timestamp:
        number = int.__new__(cls, value)
        if not 0 <= number <= UINT64_MAX:
            raise FJSONError(f"value {int(number)} is out of range for Timestamp")
        return number

    def __repr__(self) -> str:
        return f"Timestamp({int(self)})"


class Int64(int):
    """A signed 64-bit integer, kept apart from plain 32-bit ints."""

    def __new__(cls, value: Any = 0) -> Int64:
        number = int.__new__(cls, value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise FJSONError(f"value {int(number)} is out of range for Int64")
        return number

    def __repr__(self) -> str:
        return f"Int64({int(self)})"


class CString(str):
    """A zero-terminated string value."""

    def __repr__(self) -> str:
        return f"CString({str.__repr__(self)})"


class Document(dict):
    """An ordered mapping of field names to values."""

    def command(self) -> str:
        """Return the first key in lower case, or an empty string."""
        return next(iter(self), "").lower()

    def __repr__(self) -> str:
        return f"Document({dict.__repr__(self)})"


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _reject_constant(name: str) -> Any:
    raise FJSONError(f"invalid character {name[0]!r} looking for beginning of value")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def _parse_json(data: str | bytes, *, allow_null: bool = True) -> Any:
    """Parse exactly one JSON value, rejecting anything that follows it."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        text = bytes(data).decode("utf-8", errors="replace")
    else:
        text = data
    start = len(text) - len(text.lstrip(_JSON_WHITESPACE))
    if start == len(text):
        raise FJSONError("EOF")
    try:
        value, end = _DECODER.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        if exc.pos >= len(text) or exc.msg.startswith("Unterminated string"):
            raise FJSONError("unexpected EOF") from None
        raise FJSONError(f"{exc.msg} at offset {exc.pos}") from None
    if end != len(text):
        rest = text[end:]
        raise FJSONError(f"{len(rest)} bytes remain after the value: {rest}")
    if value is None and not allow_null:
        raise FJSONError("null data")
    return value


def _object_fields(value: Any, fields: Iterable[str], type_name: str) -> dict[str, Any]:
    """Map an object's keys onto known fields, matching case-insensitively."""
    if not isinstance(value, dict):
        raise FJSONError(f"cannot decode {_json_kind(value)} as {type_name}")
    known = tuple(fields)
    result: dict[str, Any] = {}
    for key, item in value.items():
        if key in known:
            field = key
        else:
            field = next((f for f in known if f.casefold() == key.casefold()), None)
        if field is None:
            raise FJSONError(f'json: unknown field "{key}"')
        result[field] = item
    return result