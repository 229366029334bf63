"""JSON objects: ordered mappings from UTF-8 keys to JSON values."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

from jsonvalue.errors import ErrorCode, JsonError
from jsonvalue.utf import check_string
from jsonvalue.values import JsonType, JsonValue, _loop_guard, equal

Key = Union[str, bytes, bytearray, memoryview]


def _key_bytes(key: object) -> bytes:
    """The UTF-8 bytes of a key given as text or bytes."""
    if isinstance(key, str):
        try:
            return key.encode("utf-8")
        except UnicodeEncodeError:
            pass
        try:
            return key.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return key.encode("utf-8", "surrogatepass")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"object key must be str or bytes, got {type(key).__name__}")


def _key_text(key: bytes) -> str:
    return key.decode("utf-8", "surrogateescape")


class JsonObject(JsonValue):
    """A mapping from string keys to JSON values that keeps insertion order.

    Keys may be given as ``str`` or as UTF-8 ``bytes`` and may contain NUL
    characters; they are reported back as ``str``.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        items: Union[Mapping[Key, JsonValue], Iterable[Tuple[Key, JsonValue]]] = (),
    ) -> None:
        super().__init__(JsonType.OBJECT)
        self._table: dict[bytes, JsonValue] = {}
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self[key] = value

    def _check_value(self, value: object) -> JsonValue:
        if not isinstance(value, JsonValue):
            raise TypeError(f"expected a JSON value, got {type(value).__name__}")
        if value is self:
            raise ValueError("an object cannot contain itself")
        return value

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return (_key_text(key) for key in list(self._table))

    def __contains__(self, key: object) -> bool:
        try:
            return _key_bytes(key) in self._table
        except TypeError:
            return False

    def __getitem__(self, key: Key) -> JsonValue:
        data = _key_bytes(key)
        try:
            return self._table[data]
        except KeyError:
            raise KeyError(key) from None

    def get(self, key: Key) -> Optional[JsonValue]:
        """The value stored under ``key``, or None when there is none."""
        return self._table.get(_key_bytes(key))

    def __setitem__(self, key: Key, value: JsonValue) -> None:
        data = _key_bytes(key)
        if not check_string(data):
            raise JsonError("Invalid UTF-8 object key", ErrorCode.INVALID_UTF8)
        self._table[data] = self._check_value(value)

    def set_nocheck(self, key: Key, value: JsonValue) -> None:
        """Store a value without validating that the key is UTF-8."""
        self._table[_key_bytes(key)] = self._check_value(value)

    def __delitem__(self, key: Key) -> None:
        data = _key_bytes(key)
        try:
            del self._table[data]
        except KeyError:
            raise KeyError(key) from None

    def items(self) -> list[Tuple[str, JsonValue]]:
        """The key and value pairs in insertion order."""
        return [(_key_text(key), value) for key, value in self._table.items()]

    def clear(self) -> None:
        """Remove every item."""
        self._table.clear()

    def _require_object(self, other: object) -> "JsonObject":
        if not isinstance(other, JsonObject):
            raise TypeError(f"expected a JSON object, got {type(other).__name__}")
        return other

    def update(self, other: "JsonObject") -> None:  # type: ignore[override]
        """Copy every item of another object into this one."""
        for key, value in list(self._require_object(other)._table.items()):
            self.set_nocheck(key, value)

    def update_existing(self, other: "JsonObject") -> None:
        """Copy the items of another object whose keys are already present."""
        for key, value in list(self._require_object(other)._table.items()):
            if key in self._table:
                self.set_nocheck(key, value)

    def update_missing(self, other: "JsonObject") -> None:
        """Copy the items of another object whose keys are not yet present."""
        for key, value in list(self._require_object(other)._table.items()):
            if key not in self._table:
                self.set_nocheck(key, value)

    def update_recursive(self, other: "JsonObject") -> None:
        """Like update, but merge nested objects instead of replacing them.

        Raises ValueError when ``other`` contains a circular reference.
        """
        self._update_recursive(self._require_object(other), set())

    def _update_recursive(self, other: "JsonObject", parents: set) -> None:
        with _loop_guard(parents, other):
            for key, value in list(other._table.items()):
                mine = self._table.get(key)
                if isinstance(mine, JsonObject) and isinstance(value, JsonObject):
                    mine._update_recursive(value, parents)
                else:
                    self.set_nocheck(key, value)

    def copy(self) -> "JsonObject":
        result = JsonObject()
        result._table = dict(self._table)
        return result

    def _deep_copy(self, parents: set) -> "JsonObject":
        with _loop_guard(parents, self):
            result = JsonObject()
            for key, value in self._table.items():
                result._table[key] = value._deep_copy(parents)
            return result

    def _equal_to(self, other: JsonValue) -> bool:
        theirs = other._table  # type: ignore[attr-defined]
        if len(self._table) != len(theirs):
            return False
        return all(
            equal(value, theirs.get(key)) for key, value in self._table.items()
        )

    def __repr__(self) -> str:
        return f"JsonObject({dict(self.items())!r})"