"""Build JSON values from a format string and a list of arguments."""

from __future__ import annotations

import numbers
import operator
from typing import Any, Iterator, Optional, Sequence, Union

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.objects import JsonObject
from jsonvalue.scanner import Scanner, UnpackFlag
from jsonvalue.utf import check_string
from jsonvalue.values import (
    JsonArray,
    JsonInteger,
    JsonReal,
    JsonValue,
    json_false,
    json_null,
    json_true,
    string_nocheck,
)

_LENGTH_MARKS = ("#", "%")
_STRING_MODIFIERS = ("#", "%", "+")


class _Packer:
    """Consumes arguments in the order the format string asks for them."""

    def __init__(self, scanner: Scanner, args: Sequence[Any]) -> None:
        self.scanner = scanner
        self._args: Iterator[Any] = iter(args)

    def _arg(self) -> Any:
        try:
            return next(self._args)
        except StopIteration:
            raise self.scanner.error(
                "<args>", ErrorCode.INVALID_ARGUMENT, "Not enough arguments"
            ) from None

    def _bytes(self, arg: Any) -> bytes:
        if isinstance(arg, str):
            return arg.encode("utf-8", "surrogatepass")
        if isinstance(arg, (bytes, bytearray, memoryview)):
            return bytes(arg)
        raise TypeError(f"expected str or bytes, got {type(arg).__name__}")

    def _invalid_utf8(self, purpose: str) -> JsonError:
        return self.scanner.error("<args>", ErrorCode.INVALID_UTF8, f"Invalid UTF-8 {purpose}")

    def _null(self, purpose: str) -> JsonError:
        return self.scanner.error("<args>", ErrorCode.NULL_VALUE, f"NULL {purpose}")

    def _read_string(self, purpose: str, optional: bool) -> Optional[bytes]:
        s = self.scanner
        s.next_token()
        following = s.token
        s.prev_token()

        if following not in _STRING_MODIFIERS:
            arg = self._arg()
            if arg is None:
                if not optional:
                    raise self._null(purpose)
                return None
            data = self._bytes(arg)
            if not check_string(data):
                raise self._invalid_utf8(purpose)
            return data

        if optional:
            raise s.error(
                "<format>",
                ErrorCode.INVALID_FORMAT,
                f"Cannot use '{following}' on optional strings",
            )

        parts = []
        while True:
            arg = self._arg()
            if arg is None:
                raise self._null(purpose)
            data = self._bytes(arg)

            s.next_token()
            if s.token in _LENGTH_MARKS:
                length = operator.index(self._arg())
                if not 0 <= length <= len(data):
                    raise s.error(
                        "<args>", ErrorCode.INVALID_ARGUMENT, "Invalid string length"
                    )
                data = data[:length]
            else:
                s.prev_token()
            parts.append(data)

            s.next_token()
            if s.token != "+":
                s.prev_token()
                break

        joined = b"".join(parts)
        if not check_string(joined):
            raise self._invalid_utf8(purpose)
        return joined

    def _unexpected_end(self) -> JsonError:
        return self.scanner.error(
            "<format>", ErrorCode.INVALID_FORMAT, "Unexpected end of format string"
        )

    def _pack_object(self) -> JsonObject:
        s = self.scanner
        result = JsonObject()
        s.next_token()

        while s.token != "}":
            if not s.token:
                raise self._unexpected_end()
            if s.token != "s":
                raise s.error(
                    "<format>",
                    ErrorCode.INVALID_FORMAT,
                    f"Expected format 's', got '{s.token}'",
                )

            key = self._read_string("object key", optional=False)
            s.next_token()

            s.next_token()
            value_optional = s.token
            s.prev_token()

            value = self.pack()
            if value is None:
                if value_optional != "*":
                    raise s.error("<args>", ErrorCode.NULL_VALUE, "NULL object value")
                s.next_token()
                continue

            result.set_nocheck(key, value)
            s.next_token()

        return result

    def _pack_array(self) -> JsonArray:
        s = self.scanner
        result = JsonArray()
        s.next_token()

        while s.token != "]":
            if not s.token:
                raise self._unexpected_end()

            s.next_token()
            value_optional = s.token
            s.prev_token()

            value = self.pack()
            if value is None:
                if value_optional != "*":
                    raise s.error("<args>", ErrorCode.NULL_VALUE, "NULL array value")
                s.next_token()
                continue

            result.append(value)
            s.next_token()

        return result

    def _pack_string(self) -> Optional[JsonValue]:
        s = self.scanner
        s.next_token()
        marker = s.token
        optional = marker in ("?", "*")
        if not optional:
            s.prev_token()

        data = self._read_string("string", optional)
        if data is None:
            return json_null() if marker == "?" else None
        return string_nocheck(data)

    def _pack_value(self) -> Optional[JsonValue]:
        s = self.scanner
        s.next_token()
        marker = s.token
        if marker not in ("?", "*"):
            s.prev_token()

        arg = self._arg()
        if arg is not None:
            if not isinstance(arg, JsonValue):
                raise TypeError(f"expected a JSON value, got {type(arg).__name__}")
            return arg
        if marker == "?":
            return json_null()
        if marker == "*":
            return None
        raise s.error("<args>", ErrorCode.NULL_VALUE, "NULL object")

    def _pack_integer(self) -> JsonInteger:
        try:
            return JsonInteger(self._arg())
        except OverflowError:
            raise self.scanner.error(
                "<args>", ErrorCode.NUMERIC_OVERFLOW, "Invalid integer value"
            ) from None

    def _pack_real(self) -> JsonReal:
        arg = self._arg()
        if not isinstance(arg, numbers.Real):
            raise TypeError(f"expected a real number, got {type(arg).__name__}")
        try:
            return JsonReal(arg)
        except (ValueError, OverflowError):
            raise self.scanner.error(
                "<args>", ErrorCode.NUMERIC_OVERFLOW, "Invalid floating point value"
            ) from None

    def pack(self) -> Optional[JsonValue]:
        """Pack the value the current token describes; None means it was omitted."""
        token = self.scanner.token
        if token == "{":
            return self._pack_object()
        if token == "[":
            return self._pack_array()
        if token == "s":
            return self._pack_string()
        if token == "n":
            return json_null()
        if token == "b":
            return json_true() if self._arg() else json_false()
        if token in ("i", "I"):
            return self._pack_integer()
        if token == "f":
            return self._pack_real()
        if token in ("O", "o"):
            return self._pack_value()
        raise self.scanner.error(
            "<format>",
            ErrorCode.INVALID_FORMAT,
            f"Unexpected format character '{token or chr(0)}'",
        )


def pack(fmt: str, *args: Any, flags: Union[UnpackFlag, int] = UnpackFlag.NONE) -> JsonValue:
    """Build a JSON value as ``fmt`` describes, taking values from ``args`` in order.

    Raises JsonError when the format is malformed or an argument is unusable.
    """
    if not fmt:
        raise JsonError(
            "NULL or empty format string",
            ErrorCode.INVALID_ARGUMENT,
            "<format>",
            -1,
            -1,
            0,
        )

    scanner = Scanner(fmt, flags)
    scanner.next_token()
    value = _Packer(scanner, args).pack()
    if value is None:
        raise scanner.error("<args>", ErrorCode.NULL_VALUE, "NULL value omitted")

    scanner.next_token()
    if scanner.token:
        raise scanner.error(
            "<format>", ErrorCode.INVALID_FORMAT, "Garbage after format string"
        )
    return value