"""Error reporting for JSON value construction, packing and unpacking."""

from __future__ import annotations

import enum


class ErrorCode(enum.Enum):
    """Classifies why an operation on JSON values failed."""

    UNKNOWN = "unknown"
    OUT_OF_MEMORY = "out_of_memory"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_FORMAT = "invalid_format"
    INVALID_UTF8 = "invalid_utf8"
    NULL_VALUE = "null_value"
    NUMERIC_OVERFLOW = "numeric_overflow"
    WRONG_TYPE = "wrong_type"
    ITEM_NOT_FOUND = "item_not_found"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    END_OF_INPUT_EXPECTED = "end_of_input_expected"


class JsonError(Exception):
    """An error with a message, a code and the place where it was found.

    ``source`` names what was being read (for example ``"<format>"`` or
    ``"<args>"``); ``line``, ``column`` and ``position`` locate the problem
    within it, with -1 meaning the location is not known.
    """

    def __init__(
        self,
        text: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        source: str = "",
        line: int = -1,
        column: int = -1,
        position: int = 0,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.code = code
        self.source = source
        self.line = line
        self.column = column
        self.position = position

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.text!r}, code={self.code}, "
            f"source={self.source!r}, line={self.line}, column={self.column}, "
            f"position={self.position})"
        )

    def __reduce__(self):
        return (
            type(self),
            (self.text, self.code, self.source, self.line, self.column, self.position),
        )