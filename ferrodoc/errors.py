"""Wire protocol errors and helpers for checking command parameters."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any, Callable

from .values import CString, Document, Int64, Timestamp


class ErrorCode(enum.IntEnum):
    """Wire protocol error codes."""

    INTERNAL_ERROR = 1
    BAD_VALUE = 2
    NAMESPACE_NOT_FOUND = 26
    NAMESPACE_EXISTS = 48
    COMMAND_NOT_FOUND = 59
    NOT_IMPLEMENTED = 238
    REGEX_OPTIONS = 51075

    @property
    def code_name(self) -> str:
        """The name clients see in the ``codeName`` field."""
        return _CODE_NAMES[self]

    def __str__(self) -> str:
        return self.code_name


_CODE_NAMES = {
    ErrorCode.INTERNAL_ERROR: "InternalError",
    ErrorCode.BAD_VALUE: "BadValue",
    ErrorCode.NAMESPACE_NOT_FOUND: "NamespaceNotFound",
    ErrorCode.NAMESPACE_EXISTS: "NamespaceExists",
    ErrorCode.COMMAND_NOT_FOUND: "CommandNotFound",
    ErrorCode.NOT_IMPLEMENTED: "NotImplemented",
    ErrorCode.REGEX_OPTIONS: "Location51075",
}


class ProtocolError(Exception):
    """An error that is reported to the client as an error document."""

    def __init__(self, code: ErrorCode | int, cause: str | BaseException) -> None:
        if int(code) == 0:
            raise ValueError("error code must not be 0")
        if cause is None:
            raise ValueError("error cause must not be None")
        self.code = ErrorCode(code)
        self.message = str(cause)
        super().__init__(f"{self.code.code_name} ({int(self.code)}): {self.message}")
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def document(self) -> Document:
        """Return the error document sent to the client."""
        return Document(
            {
                "ok": 0.0,
                "errmsg": self.message,
                "code": int(self.code),
                "codeName": self.code.code_name,
            }
        )


def to_protocol_error(err: BaseException) -> tuple[ProtocolError, bool]:
    """Convert any error into a protocol error.

    A ProtocolError found in the error or its cause chain is returned with True;
    anything else is wrapped as an internal error and returned with False.
    """
    if err is None:
        raise TypeError("err must not be None")
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ProtocolError):
            return current, True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return ProtocolError(ErrorCode.INTERNAL_ERROR, err), False


def _matches(value: Any, expected_type: type) -> bool:
    if not isinstance(value, expected_type):
        return False
    if isinstance(value, bool) and expected_type is not bool and expected_type is not object:
        return False
    if expected_type is int and isinstance(value, (Int64, Timestamp)):
        return False
    if expected_type is str and isinstance(value, CString):
        return False
    return True


def _type_name(value_type: type) -> str:
    return value_type.__name__


def _command(doc: Mapping[str, Any]) -> str:
    return next(iter(doc), "").lower()


def get_required_param(doc: Mapping[str, Any], key: str, expected_type: type) -> Any:
    """Return ``doc[key]``, raising BadValue if it is missing or of the wrong type."""
    if key not in doc:
        raise ProtocolError(ErrorCode.BAD_VALUE, f'required parameter "{key}" is missing')
    value = doc[key]
    if not _matches(value, expected_type):
        raise ProtocolError(
            ErrorCode.BAD_VALUE,
            f'required parameter "{key}" has type {_type_name(type(value))} '
            f"(expected {_type_name(expected_type)})",
        )
    return value


def assert_type(value: Any, expected_type: type) -> Any:
    """Return value if it has the expected type, raising BadValue otherwise."""
    if not _matches(value, expected_type):
        raise ProtocolError(
            ErrorCode.BAD_VALUE,
            f"got type {_type_name(type(value))}, expected {_type_name(expected_type)}",
        )
    return value


def unimplemented(doc: Mapping[str, Any], *fields: str) -> None:
    """Raise NotImplemented if doc has any of the given fields."""
    for field in fields:
        if field in doc:
            raise ProtocolError(
                ErrorCode.NOT_IMPLEMENTED,
                f'{_command(doc)}: support for field "{field}" is not implemented yet',
            )


def unimplemented_non_default(
    doc: Mapping[str, Any], field: str, is_default: Callable[[Any], bool]
) -> None:
    """Raise NotImplemented if doc has field and its value is not a default one."""
    if field not in doc:
        return
    value = doc[field]
    if is_default(value):
        return
    raise ProtocolError(
        ErrorCode.NOT_IMPLEMENTED,
        f'{_command(doc)}: support for field "{field}" with non-default value {value} '
        "is not implemented yet",
    )


def ignored(doc: Mapping[str, Any], logger: logging.Logger, *fields: str) -> None:
    """Log a debug message for each of the given fields that doc has."""
    for field in fields:
        if field in doc:
            logger.debug("ignoring field %r of command %r", field, _command(doc))