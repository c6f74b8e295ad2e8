from datetime import datetime, timedelta, timezone

import pytest

from ferrodoc.scalars import (
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
from ferrodoc.values import Binary, BinarySubtype, CString, FJSONError, ObjectID, Regex

UTC = timezone.utc


# binary

def test_binary_foo_round_trip():
    value = Binary(b"foo", BinarySubtype.USER)
    assert encode_binary(value) == '{"$b":"Zm9v","s":128}'
    assert decode_binary('{"$b":"Zm9v","s":128}') == value


def test_binary_empty_without_subtype():
    decoded = decode_binary('{"$b":""}')
    assert decoded == Binary(b"", BinarySubtype.GENERIC)
    assert encode_binary(decoded) == '{"$b":"","s":0}'


def test_binary_invalid_subtype_kept():
    decoded = decode_binary('{"$b":"","s":255}')
    assert decoded == Binary(b"", 255)
    assert encode_binary(decoded) == '{"$b":"","s":255}'


def test_binary_extra_fields_rejected():
    with pytest.raises(FJSONError, match='json: unknown field "foo"'):
        decode_binary('{"$b":"Zm9v","s":128,"foo":"bar"}')


def test_binary_eof():
    with pytest.raises(FJSONError) as info:
        decode_binary("{")
    assert str(info.value) == "unexpected EOF"


def test_binary_bad_base64():
    with pytest.raises(FJSONError):
        decode_binary('{"$b":"!!!","s":0}')


def test_binary_subtype_out_of_range():
    with pytest.raises(FJSONError):
        decode_binary('{"$b":"","s":256}')


# cstring

@pytest.mark.parametrize(
    "value, text",
    [("foo", '{"$c":"foo"}'), ("", '{"$c":""}')],
)
def test_cstring_round_trip(value, text):
    assert encode_cstring(CString(value)) == text
    decoded = decode_cstring(text)
    assert decoded == value
    assert isinstance(decoded, CString)


def test_cstring_eof():
    with pytest.raises(FJSONError) as info:
        decode_cstring("{")
    assert str(info.value) == "unexpected EOF"


# datetime

@pytest.mark.parametrize(
    "value, text",
    [
        (datetime(2021, 11, 1, 10, 18, 42, 123000, tzinfo=UTC), '{"$d":1635761922123}'),
        (datetime(1970, 1, 1, tzinfo=UTC), '{"$d":0}'),
        (datetime(9999, 12, 31, 23, 59, 59, 999000, tzinfo=UTC), '{"$d":253402300799999}'),
        (datetime(1, 1, 1, tzinfo=UTC), '{"$d":-62135596800000}'),
    ],
)
def test_datetime_round_trip(value, text):
    assert encode_datetime(value) == text
    assert decode_datetime(text) == value


def test_datetime_other_zone_encodes_same_instant():
    local = datetime(2021, 11, 1, 13, 18, 42, 123000, tzinfo=timezone(timedelta(hours=3)))
    assert encode_datetime(local) == '{"$d":1635761922123}'


def test_datetime_year_zero_unrepresentable():
    with pytest.raises(FJSONError):
        decode_datetime('{"$d":-62167219200000}')


def test_datetime_fraction_rejected():
    with pytest.raises(FJSONError):
        decode_datetime('{"$d":1.5}')


def test_datetime_eof():
    with pytest.raises(FJSONError) as info:
        decode_datetime("{")
    assert str(info.value) == "unexpected EOF"


# objectid

def test_objectid_normal():
    value = ObjectID(bytes([0x01] * 12))
    assert encode_objectid(value) == '{"$o":"010101010101010101010101"}'
    assert decode_objectid('{"$o":"010101010101010101010101"}') == value


def test_objectid_eof():
    with pytest.raises(FJSONError) as info:
        decode_objectid("{")
    assert str(info.value) == "unexpected EOF"


@pytest.mark.parametrize("text", ['{"$o":"0101"}', '{"$o":"zz0101010101010101010101"}', '{"$o":"010"}'])
def test_objectid_invalid(text):
    with pytest.raises(FJSONError):
        decode_objectid(text)


# regex

@pytest.mark.parametrize(
    "value, text",
    [
        (Regex("hoffman", "i"), '{"$r":"hoffman","o":"i"}'),
        (Regex("", ""), '{"$r":"","o":""}'),
    ],
)
def test_regex_round_trip(value, text):
    assert encode_regex(value) == text
    assert decode_regex(text) == value


def test_regex_eof():
    with pytest.raises(FJSONError) as info:
        decode_regex("{")
    assert str(info.value) == "unexpected EOF"


# string

@pytest.mark.parametrize(
    "value, text",
    [("foo", '"foo"'), ("", '""'), ("\x00", '"\\u0000"')],
)
def test_string_round_trip(value, text):
    assert encode_string(value) == text
    assert decode_string(text) == value


def test_string_html_escaping():
    assert encode_string("a<b>&c") == '"a\\u003cb\\u003e\\u0026c"'
    assert decode_string('"a\\u003cb\\u003e\\u0026c"') == "a<b>&c"


def test_string_rejects_number():
    with pytest.raises(FJSONError):
        decode_string("42")


def test_string_rejects_null():
    with pytest.raises(FJSONError):
        decode_string("null")