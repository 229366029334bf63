"""Tokenizer for pack and unpack format strings."""

from __future__ import annotations

import dataclasses
import enum
from typing import Union

from jsonvalue.errors import ErrorCode, JsonError

_IGNORED = " \t\n,:"


class UnpackFlag(enum.IntFlag):
    """Flags that change how a format string is applied."""

    NONE = 0
    VALIDATE_ONLY = 0x1
    STRICT = 0x2


@dataclasses.dataclass(frozen=True)
class Token:
    """One format character and where it stands; an empty ``token`` marks the end."""

    line: int = 0
    column: int = 0
    pos: int = 0
    token: str = ""


class Scanner:
    """Walks a format string one significant character at a time.

    Spaces, tabs, newlines, commas and colons are skipped. One token can be
    pushed back with ``prev_token``; the next ``next_token`` brings it back.
    """

    def __init__(self, fmt: str, flags: Union[UnpackFlag, int] = UnpackFlag.NONE) -> None:
        self.fmt = fmt
        self.flags = UnpackFlag(flags)
        self.previous = Token()
        self.current = Token()
        self.pending = Token()
        self._index = 0
        self._line = 1
        self._column = 0
        self._pos = 0

    @property
    def token(self) -> str:
        """The current format character, or an empty string at the end."""
        return self.current.token

    def next_token(self) -> None:
        """Advance to the next significant format character."""
        self.previous = self.current

        if self.pending.line:
            self.current = self.pending
            self.pending = Token()
            return

        fmt = self.fmt
        index = self._index
        if not self.current.token and index >= len(fmt):
            return

        self._column += 1
        self._pos += 1

        while index < len(fmt) and fmt[index] in _IGNORED:
            if fmt[index] == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
            self._pos += 1
            index += 1

        char = fmt[index] if index < len(fmt) else ""
        self.current = Token(self._line, self._column, self._pos, char)
        if char:
            index += 1
        self._index = index

    def prev_token(self) -> None:
        """Step back one token; the current one is kept for the next advance."""
        self.pending = self.current
        self.current = self.previous

    def error(self, source: str, code: ErrorCode, text: str) -> JsonError:
        """Build an error located at the current token."""
        return JsonError(
            text,
            code,
            source,
            self.current.line,
            self.current.column,
            self.current.pos,
        )