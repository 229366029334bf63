"""JSON value types: strings, numbers, arrays and the literals true, false and null."""

from __future__ import annotations

import contextlib
import enum
import math
import operator
from typing import Iterable, Iterator, Union

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.utf import check_string

INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1

StrOrBytes = Union[str, bytes, bytearray, memoryview]


class JsonType(enum.Enum):
    """The kind of a JSON value; the value of each member is its name in messages."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


@contextlib.contextmanager
def _loop_guard(parents: set, container: "JsonValue") -> Iterator[None]:
    """Mark a container as being visited; raise ValueError if it already is."""
    key = id(container)
    if key in parents:
        raise ValueError("circular reference")
    parents.add(key)
    try:
        yield
    finally:
        parents.discard(key)


class JsonValue:
    """Base of all JSON values; plain instances are the literals true, false and null.

    Subclasses refine ``copy``, ``_deep_copy`` and ``_equal_to``.
    """

    def __init__(self, type: Union[JsonType, str]) -> None:
        self.type = JsonType(type)

    def copy(self) -> "JsonValue":
        """Return a shallow copy; literals are shared, not copied."""
        return self

    def deep_copy(self) -> "JsonValue":
        """Return a copy sharing nothing mutable; raise ValueError on a cycle."""
        return self._deep_copy(set())

    def _deep_copy(self, parents: set) -> "JsonValue":
        return self.copy()

    def _equal_to(self, other: "JsonValue") -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        if self is other:
            return True
        if self.type is not other.type:
            return False
        return self._equal_to(other)

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"<JSON {self.type.value}>"


def _encode(value: StrOrBytes, check: bool) -> bytes:
    if isinstance(value, str):
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError:
            if check:
                raise JsonError("Invalid UTF-8 string", ErrorCode.INVALID_UTF8) from None
        try:
            return value.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return value.encode("utf-8", "surrogatepass")
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
        if check and not check_string(data):
            raise JsonError("Invalid UTF-8 string", ErrorCode.INVALID_UTF8)
        return data
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")


class JsonString(JsonValue):
    """A string held as UTF-8 bytes, which may contain NUL bytes."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: StrOrBytes) -> None:
        super().__init__(JsonType.STRING)
        self._data = _encode(value, check=True)

    @classmethod
    def _unchecked(cls, value: StrOrBytes) -> "JsonString":
        result = cls.__new__(cls)
        JsonValue.__init__(result, JsonType.STRING)
        result._data = _encode(value, check=False)
        return result

    @property
    def data(self) -> bytes:
        """The raw UTF-8 bytes."""
        return self._data

    @property
    def value(self) -> str:
        """The text of the string."""
        return self._data.decode("utf-8", "surrogateescape")

    @value.setter
    def value(self, value: StrOrBytes) -> None:
        self._data = _encode(value, check=True)

    def set_nocheck(self, value: StrOrBytes) -> None:
        """Replace the contents without validating UTF-8."""
        self._data = _encode(value, check=False)

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> "JsonString":
        return JsonString._unchecked(self._data)

    def _equal_to(self, other: JsonValue) -> bool:
        return self._data == other._data  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"JsonString({self.value!r})"


class JsonInteger(JsonValue):
    """A signed 64-bit integer."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        super().__init__(JsonType.INTEGER)
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        number = operator.index(value)
        if not INTEGER_MIN <= number <= INTEGER_MAX:
            raise OverflowError(f"integer out of 64-bit range: {number}")
        self._value = number

    def __int__(self) -> int:
        return self._value

    def copy(self) -> "JsonInteger":
        return JsonInteger(self._value)

    def _equal_to(self, other: JsonValue) -> bool:
        return self._value == other.value  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"JsonInteger({self._value})"


class JsonReal(JsonValue):
    """A finite floating-point number."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: float) -> None:
        super().__init__(JsonType.REAL)
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"real value must be finite, got {number}")
        self._value = number

    def __float__(self) -> float:
        return self._value

    def copy(self) -> "JsonReal":
        return JsonReal(self._value)

    def _equal_to(self, other: JsonValue) -> bool:
        return self._value == other.value  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"JsonReal({self._value!r})"


class JsonArray(JsonValue):
    """An ordered sequence of JSON values."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, items: Iterable[JsonValue] = ()) -> None:
        super().__init__(JsonType.ARRAY)
        self._items: list[JsonValue] = []
        for item in items:
            self.append(item)

    def _check_value(self, value: object) -> JsonValue:
        if not isinstance(value, JsonValue):
            raise TypeError(f"expected a JSON value, got {type(value).__name__}")
        if value is self:
            raise ValueError("an array cannot contain itself")
        return value

    def _check_index(self, index: int, limit: int) -> int:
        position = operator.index(index)
        if not 0 <= position < limit:
            raise IndexError(f"array index {position} out of range")
        return position

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def __getitem__(self, index: int) -> JsonValue:
        return self._items[self._check_index(index, len(self._items))]

    def __setitem__(self, index: int, value: JsonValue) -> None:
        item = self._check_value(value)
        self._items[self._check_index(index, len(self._items))] = item

    def append(self, value: JsonValue) -> None:
        """Add a value at the end."""
        self._items.append(self._check_value(value))

    def insert(self, index: int, value: JsonValue) -> None:
        """Insert a value before ``index``; ``index`` may equal the length."""
        item = self._check_value(value)
        self._items.insert(self._check_index(index, len(self._items) + 1), item)

    def remove(self, index: int) -> None:
        """Remove the value at ``index``."""
        del self._items[self._check_index(index, len(self._items))]

    def clear(self) -> None:
        """Remove every value."""
        self._items.clear()

    def extend(self, other: "JsonArray") -> None:
        """Append every value of another array."""
        if not isinstance(other, JsonArray):
            raise TypeError(f"expected a JSON array, got {type(other).__name__}")
        self._items.extend(other._items)

    def copy(self) -> "JsonArray":
        return JsonArray(self._items)

    def _deep_copy(self, parents: set) -> "JsonArray":
        with _loop_guard(parents, self):
            return JsonArray(item._deep_copy(parents) for item in self._items)

    def _equal_to(self, other: JsonValue) -> bool:
        others = other._items  # type: ignore[attr-defined]
        return len(self._items) == len(others) and all(
            equal(mine, theirs) for mine, theirs in zip(self._items, others)
        )

    def __repr__(self) -> str:
        return f"JsonArray({self._items!r})"


_TRUE = JsonValue(JsonType.TRUE)
_FALSE = JsonValue(JsonType.FALSE)
_NULL = JsonValue(JsonType.NULL)


def json_true() -> JsonValue:
    """The shared true value."""
    return _TRUE


def json_false() -> JsonValue:
    """The shared false value."""
    return _FALSE


def json_null() -> JsonValue:
    """The shared null value."""
    return _NULL


def string(value: StrOrBytes) -> JsonString:
    """Make a string, raising JsonError if it is not valid UTF-8."""
    return JsonString(value)


def string_nocheck(value: StrOrBytes) -> JsonString:
    """Make a string without validating UTF-8."""
    return JsonString._unchecked(value)


def sprintf(fmt: StrOrBytes, *args: object) -> JsonString:
    """Make a string from a %-style format and its arguments."""
    return JsonString(fmt % args)  # type: ignore[operator]


def number_value(value: object) -> float:
    """The numeric value of an integer or real as a float; 0.0 for anything else."""
    if isinstance(value, JsonInteger):
        return float(value.value)
    if isinstance(value, JsonReal):
        return value.value
    return 0.0


def equal(first: object, second: object) -> bool:
    """Tell whether two JSON values are equal; anything that is not one is unequal."""
    if not isinstance(first, JsonValue) or not isinstance(second, JsonValue):
        return False
    return first == second


def copy(value: JsonValue) -> JsonValue:
    """Shallow copy of a JSON value."""
    if not isinstance(value, JsonValue):
        raise TypeError(f"expected a JSON value, got {type(value).__name__}")
    return value.copy()


def deep_copy(value: JsonValue) -> JsonValue:
    """Deep copy of a JSON value; raises ValueError on circular references."""
    if not isinstance(value, JsonValue):
        raise TypeError(f"expected a JSON value, got {type(value).__name__}")
    return value.deep_copy()