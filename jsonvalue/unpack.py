"""Take JSON values apart as a format string describes."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Union

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.objects import JsonObject
from jsonvalue.scanner import Scanner, UnpackFlag
from jsonvalue.values import (
    JsonArray,
    JsonInteger,
    JsonReal,
    JsonString,
    JsonType,
    JsonValue,
    number_value,
)

_VALUE_STARTERS = "{[siIbfFOon"

Format = Union[str, Sequence[Any]]


def _as_c_int(value: int) -> int:
    """Wrap a 64-bit integer to a 32-bit signed one, as a C int conversion does."""
    return ((value + 2**31) % 2**32) - 2**31


def _type_name(value: JsonValue) -> str:
    return value.type.value


class _Unpacker:
    """Walks a value alongside the format and gathers what the format asks for."""

    def __init__(self, scanner: Scanner, keys: Sequence[Any]) -> None:
        self.scanner = scanner
        self._keys: Iterator[Any] = iter(keys)
        self.validate_only = bool(scanner.flags & UnpackFlag.VALIDATE_ONLY)
        self.strict_flag = bool(scanner.flags & UnpackFlag.STRICT)
        self.results: List[Any] = []

    def _emit(self, value: Any) -> None:
        self.results.append(value)

    def _format_error(self, text: str) -> JsonError:
        return self.scanner.error("<format>", ErrorCode.INVALID_FORMAT, text)

    def _wrong_type(self, expected: str, root: JsonValue) -> JsonError:
        return self.scanner.error(
            "<validation>",
            ErrorCode.WRONG_TYPE,
            f"Expected {expected}, got {_type_name(root)}",
        )

    def _next_key(self) -> str:
        try:
            key = next(self._keys)
        except StopIteration:
            raise self.scanner.error(
                "<args>", ErrorCode.INVALID_ARGUMENT, "Not enough arguments"
            ) from None
        if key is None:
            raise self.scanner.error("<args>", ErrorCode.NULL_VALUE, "NULL object key")
        if isinstance(key, str):
            return key
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key).decode("utf-8", "surrogateescape")
        raise TypeError(f"object key must be str or bytes, got {type(key).__name__}")

    def _strict_mark(self, strict: int) -> str:
        return "!" if strict == 1 else "*"

    def _unpack_object(self, root: Optional[JsonValue]) -> None:
        s = self.scanner
        strict = 0
        got_optional = False
        seen: set = set()

        if root is not None and not isinstance(root, JsonObject):
            raise self._wrong_type("object", root)
        s.next_token()

        while s.token != "}":
            if strict != 0:
                raise self._format_error(
                    f"Expected '}}' after '{self._strict_mark(strict)}', "
                    f"got '{s.token or chr(0)}'"
                )
            if not s.token:
                raise self._format_error("Unexpected end of format string")
            if s.token in ("!", "*"):
                strict = 1 if s.token == "!" else -1
                s.next_token()
                continue
            if s.token != "s":
                raise self._format_error(f"Expected format 's', got '{s.token}'")

            key = self._next_key()
            s.next_token()

            optional = False
            if s.token == "?":
                optional = got_optional = True
                s.next_token()

            value: Optional[JsonValue]
            if root is None:
                value = None
            else:
                value = root.get(key)
                if value is None and not optional:
                    raise s.error(
                        "<validation>",
                        ErrorCode.ITEM_NOT_FOUND,
                        f"Object item not found: {key}",
                    )

            self.unpack(value)
            seen.add(key)
            s.next_token()

        if strict == 0 and self.strict_flag:
            strict = 1

        if root is not None and strict == 1:
            if got_optional or len(root) != len(seen):
                left = [key for key in root if key not in seen]
                if left:
                    raise s.error(
                        "<validation>",
                        ErrorCode.END_OF_INPUT_EXPECTED,
                        f"{len(left)} object item(s) left unpacked: {', '.join(left)}",
                    )

    def _unpack_array(self, root: Optional[JsonValue]) -> None:
        s = self.scanner
        strict = 0
        index = 0

        if root is not None and not isinstance(root, JsonArray):
            raise self._wrong_type("array", root)
        s.next_token()

        while s.token != "]":
            if strict != 0:
                raise self._format_error(
                    f"Expected ']' after '{self._strict_mark(strict)}', "
                    f"got '{s.token or chr(0)}'"
                )
            if not s.token:
                raise self._format_error("Unexpected end of format string")
            if s.token in ("!", "*"):
                strict = 1 if s.token == "!" else -1
                s.next_token()
                continue
            if s.token not in _VALUE_STARTERS:
                raise self._format_error(f"Unexpected format character '{s.token}'")

            value: Optional[JsonValue]
            if root is None:
                value = None
            elif index < len(root):
                value = root[index]
            else:
                raise s.error(
                    "<validation>",
                    ErrorCode.INDEX_OUT_OF_RANGE,
                    f"Array index {index} out of range",
                )

            self.unpack(value)
            s.next_token()
            index += 1

        if strict == 0 and self.strict_flag:
            strict = 1

        if root is not None and strict == 1 and index != len(root):
            raise s.error(
                "<validation>",
                ErrorCode.END_OF_INPUT_EXPECTED,
                f"{len(root) - index} array item(s) left unpacked",
            )

    def _unpack_string(self, root: Optional[JsonValue]) -> None:
        s = self.scanner
        if root is not None and not isinstance(root, JsonString):
            raise self._wrong_type("string", root)
        if self.validate_only:
            return

        s.next_token()
        with_length = s.token == "%"
        if not with_length:
            s.prev_token()

        self._emit(None if root is None else root.value)
        if with_length:
            self._emit(None if root is None else len(root))

    def unpack(self, root: Optional[JsonValue]) -> None:
        """Unpack ``root`` as the current token describes; None means skip it."""
        token = self.scanner.token
        if token == "{":
            self._unpack_object(root)
        elif token == "[":
            self._unpack_array(root)
        elif token == "s":
            self._unpack_string(root)
        elif token in ("i", "I"):
            if root is not None and not isinstance(root, JsonInteger):
                raise self._wrong_type("integer", root)
            if not self.validate_only:
                if root is None:
                    self._emit(None)
                else:
                    self._emit(_as_c_int(root.value) if token == "i" else root.value)
        elif token == "b":
            if root is not None and root.type not in (JsonType.TRUE, JsonType.FALSE):
                raise self._wrong_type("true or false", root)
            if not self.validate_only:
                self._emit(None if root is None else root.type is JsonType.TRUE)
        elif token == "f":
            if root is not None and not isinstance(root, JsonReal):
                raise self._wrong_type("real", root)
            if not self.validate_only:
                self._emit(None if root is None else root.value)
        elif token == "F":
            if root is not None and not isinstance(root, (JsonInteger, JsonReal)):
                raise self._wrong_type("real or integer", root)
            if not self.validate_only:
                self._emit(None if root is None else number_value(root))
        elif token in ("O", "o"):
            if not self.validate_only:
                self._emit(root)
        elif token == "n":
            if root is not None and root.type is not JsonType.NULL:
                raise self._wrong_type("null", root)
        else:
            raise self._format_error(f"Unexpected format character '{token or chr(0)}'")


def unpack(
    root: JsonValue,
    fmt: Format,
    flags: Union[UnpackFlag, int] = UnpackFlag.NONE,
) -> List[Any]:
    """Check ``root`` against a format and return the values it extracts, in order.

    ``fmt`` is either the format string alone or a sequence whose first item
    is the format string and whose remaining items are the object keys that
    the format's object ``s`` entries name, in order. ``s%`` yields the text
    and its length in bytes; ``n`` yields nothing; values skipped because an
    optional key is missing come back as None. With
    ``UnpackFlag.VALIDATE_ONLY`` nothing is extracted and the list is empty.
    Raises JsonError when the value does not match or the format is malformed.
    """
    if isinstance(fmt, str):
        text, keys = fmt, ()
    else:
        text, *keys = fmt

    if root is None:
        raise JsonError("NULL root value", ErrorCode.NULL_VALUE, "<root>", -1, -1, 0)
    if not isinstance(root, JsonValue):
        raise TypeError(f"expected a JSON value, got {type(root).__name__}")
    if not text:
        raise JsonError(
            "NULL or empty format string",
            ErrorCode.INVALID_ARGUMENT,
            "<format>",
            -1,
            -1,
            0,
        )

    scanner = Scanner(text, flags)
    scanner.next_token()
    unpacker = _Unpacker(scanner, keys)
    unpacker.unpack(root)

    scanner.next_token()
    if scanner.token:
        raise scanner.error(
            "<format>", ErrorCode.INVALID_FORMAT, "Garbage after format string"
        )
    return unpacker.results