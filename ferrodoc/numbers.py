"""FJSON encoding of doubles, integers, timestamps and booleans."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable

from .values import (
    INT32_MAX,
    INT32_MIN,
    FJSONError,
    Int64,
    Timestamp,
    _json_kind,
    _object_fields,
    _parse_json,
)

_SPECIAL_DOUBLES = {"Infinity": math.inf, "-Infinity": -math.inf, "NaN": math.nan}
_SIGNED_INTEGER = re.compile(r"-?(?:0|[1-9][0-9]*)")
_UNSIGNED_INTEGER = re.compile(r"0|[1-9][0-9]*")


def _format_float(number: float) -> str:
    """Format a finite float as the shortest JSON number that reads back the same."""
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    sign = "-" if number < 0 else ""
    magnitude = abs(number)
    shortest = Decimal(repr(magnitude)).normalize()
    if 1e-6 <= magnitude < 1e21:
        return sign + format(shortest, "f")
    _, digits, exponent = shortest.as_tuple()
    text = "".join(map(str, digits))
    mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
    power = len(text) - 1 + exponent
    suffix = f"+{power:02d}" if power >= 0 else f"-{-power}"
    return f"{sign}{mantissa}e{suffix}"


def encode_double(value: float) -> str:
    """Encode a float as ``{"$f": ...}``."""
    number = float(value)
    if math.isnan(number):
        payload = '"NaN"'
    elif math.isinf(number):
        payload = '"Infinity"' if number > 0 else '"-Infinity"'
    else:
        payload = _format_float(number)
    return f'{{"$f":{payload}}}'


def decode_double(data: str | bytes) -> float:
    """Decode ``{"$f": ...}`` into a float."""
    fields = _object_fields(_parse_json(data, allow_null=False), ("$f",), "double")
    raw = fields.get("$f")
    if isinstance(raw, str):
        try:
            return _SPECIAL_DOUBLES[raw]
        except KeyError:
            raise FJSONError(f"unexpected string {raw!r} for double") from None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            number = float(raw)
        except OverflowError:
            raise FJSONError(f"number {raw} is out of range for double") from None
        if math.isinf(number):
            raise FJSONError("number is out of range for double")
        return number
    raise FJSONError(f"unexpected {_json_kind(raw)} for double")


def encode_int32(value: int) -> str:
    """Encode a 32-bit integer as a bare JSON number."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FJSONError(f"expected int, got {type(value).__name__}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise FJSONError(f"value {value} is out of range for int32")
    return str(int(value))


def decode_int32(data: str | bytes) -> int:
    """Decode a bare JSON integer that fits in 32 bits."""
    value = _parse_json(data, allow_null=False)
    if isinstance(value, bool) or not isinstance(value, int):
        raise FJSONError(f"cannot decode {_json_kind(value)} {value!r} as int32")
    if not INT32_MIN <= value <= INT32_MAX:
        raise FJSONError(f"number {value} overflows int32")
    return value


def _decode_quoted_integer(
    data: str | bytes,
    key: str,
    pattern: re.Pattern[str],
    factory: Callable[[int], Any],
    type_name: str,
) -> Any:
    fields = _object_fields(_parse_json(data, allow_null=False), (key,), type_name)
    raw = fields.get(key, "0")
    if not isinstance(raw, str):
        raise FJSONError(f"{key} must be a quoted integer, got {_json_kind(raw)}")
    if pattern.fullmatch(raw) is None:
        raise FJSONError(f"invalid {type_name} literal {raw!r}")
    try:
        return factory(int(raw))
    except ValueError as exc:
        raise FJSONError(f"{type_name} value {raw} is out of range") from exc


def encode_int64(value: int) -> str:
    """Encode a 64-bit integer as ``{"$l": "<number>"}``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FJSONError(f"expected int, got {type(value).__name__}")
    return f'{{"$l":"{int(Int64(value))}"}}'


def decode_int64(data: str | bytes) -> Int64:
    """Decode ``{"$l": "<number>"}`` into an Int64."""
    return _decode_quoted_integer(data, "$l", _SIGNED_INTEGER, Int64, "int64")


def encode_timestamp(value: int) -> str:
    """Encode a timestamp as ``{"$t": "<number>"}``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FJSONError(f"expected int, got {type(value).__name__}")
    return f'{{"$t":"{int(Timestamp(value))}"}}'


def decode_timestamp(data: str | bytes) -> Timestamp:
    """Decode ``{"$t": "<number>"}`` into a Timestamp."""
    return _decode_quoted_integer(data, "$t", _UNSIGNED_INTEGER, Timestamp, "timestamp")


def encode_bool(value: bool) -> str:
    """Encode a boolean as JSON ``true`` or ``false``."""
    if not isinstance(value, bool):
        raise FJSONError(f"expected bool, got {type(value).__name__}")
    return "true" if value else "false"


def decode_bool(data: str | bytes) -> bool:
    """Decode JSON ``true`` or ``false``."""
    value = _parse_json(data, allow_null=False)
    if not isinstance(value, bool):
        raise FJSONError(f"cannot decode {_json_kind(value)} as bool")
    return value