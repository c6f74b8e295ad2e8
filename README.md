# ferrodoc

Building blocks for a document database front-end:

- **FJSON** (`ferrodoc.fjson`, `ferrodoc.numbers`, `ferrodoc.scalars`): a JSON dialect that keeps BSON value types through a round trip.
- **Typed document values** (`ferrodoc.values`): `Document`, `Binary`, `BinarySubtype`, `ObjectID`, `Regex`, `Timestamp`, `CString` and `Int64`.
- **Wire protocol errors** (`ferrodoc.errors`): `ProtocolError`, `ErrorCode`, and helpers that check request parameters.
- **SQL condition builders** (`ferrodoc.where`): `logic_expr` for `$or` / `$and` / `$nor`, and `in_array` for `$in`-style lists.
- **Command table** (`ferrodoc.commands`): `COMMANDS`, `Command` and the `list_commands()` reply.

The package has no runtime dependencies.

## FJSON mapping

| Python value | FJSON                                                        |
|--------------|--------------------------------------------------------------|
| `Document`   | `{"$k": ["k1", ...], "k1": <v1>, ...}`                       |
| `list`       | JSON array                                                   |
| `float`      | `{"$f": number}` or `{"$f": "Infinity"/"-Infinity"/"NaN"}`   |
| `str`        | JSON string                                                  |
| `Binary`     | `{"$b": "<base64>", "s": <subtype>}`                         |
| `ObjectID`   | `{"$o": "<24 hex chars>"}`                                   |
| `bool`       | `true` / `false`                                             |
| `datetime`   | `{"$d": <milliseconds since epoch>}`                         |
| `None`       | `null`                                                       |
| `Regex`      | `{"$r": "<pattern>", "o": "<options>"}`                      |
| `int`        | JSON number (32-bit)                                         |
| `Timestamp`  | `{"$t": "<number>"}`                                         |
| `Int64`      | `{"$l": "<number>"}`                                         |
| `CString`    | `{"$c": "<string>"}`                                         |

Naive datetimes are encoded as UTC; decoded datetimes are timezone-aware UTC.
A bare JSON number always decodes to a 32-bit `int`.

## Usage

```python
from ferrodoc.values import Document, Int64
from ferrodoc.fjson import marshal, unmarshal

doc = Document({"ping": 1, "n": Int64(42), "ratio": 0.5})
data = marshal(doc)
# '{"$k":["ping","n","ratio"],"ping":1,"n":{"$l":"42"},"ratio":{"$f":0.5}}'
assert unmarshal(data) == doc
```

`marshal` returns a `str`; `unmarshal` and the `decode_*` functions accept `str` or `bytes`.
Each type also has its own pair of functions, such as `encode_int64` / `decode_int64`
in `ferrodoc.numbers` and `encode_binary` / `decode_binary` in `ferrodoc.scalars`.
Malformed input raises `ferrodoc.values.FJSONError`.

The helpers in `ferrodoc.errors` check request parameters and build protocol errors:

```python
from ferrodoc.values import Document
from ferrodoc.errors import ErrorCode, ProtocolError, get_required_param

try:
    get_required_param(Document({"find": 1}), "find", str)
except ProtocolError as err:
    print(err.code is ErrorCode.BAD_VALUE, err.document())
```

`to_protocol_error(err)` finds a `ProtocolError` in an exception's cause chain, or wraps
the exception as an `InternalError`. `unimplemented` and `unimplemented_non_default` raise
`NotImplemented` errors for unsupported fields, and `ignored` logs them at debug level.

`ferrodoc.where.logic_expr(op, exprs, placeholder, where_pair)` joins the SQL that
`where_pair` builds for each key and value of each expression document, and
`in_array(values, placeholder, scalar)` builds a parenthesised list. Both return
`(sql, args)`.

`ferrodoc.commands.list_commands()` returns the `listCommands` reply document for the
commands in `COMMANDS`.

## What this package does not do

It does not listen on a network port, read or write wire protocol messages, or store
documents. The command table holds only names and help texts; no command is run by
this package.

## Running the tests

```
pip install -e .[test]
pytest
```