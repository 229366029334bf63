"""Strict UTF-8 encoding and validation."""

from __future__ import annotations

import collections
from typing import Iterator, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


def utf8_encode(codepoint: int) -> bytes:
    """Encode one code point as UTF-8.

    Surrogate code points are encoded like any other; values below zero or
    above U+10FFFF raise ValueError.
    """
    if codepoint < 0:
        raise ValueError(f"negative code point: {codepoint}")
    if codepoint < 0x80:
        return bytes((codepoint,))
    if codepoint < 0x800:
        return bytes((0xC0 + ((codepoint & 0x7C0) >> 6), 0x80 + (codepoint & 0x03F)))
    if codepoint < 0x10000:
        return bytes(
            (
                0xE0 + ((codepoint & 0xF000) >> 12),
                0x80 + ((codepoint & 0x0FC0) >> 6),
                0x80 + (codepoint & 0x003F),
            )
        )
    if codepoint <= 0x10FFFF:
        return bytes(
            (
                0xF0 + ((codepoint & 0x1C0000) >> 18),
                0x80 + ((codepoint & 0x03F000) >> 12),
                0x80 + ((codepoint & 0x000FC0) >> 6),
                0x80 + (codepoint & 0x00003F),
            )
        )
    raise ValueError(f"code point out of Unicode range: {codepoint:#x}")


def check_first(byte: int) -> int:
    """Return the length of the sequence a lead byte starts, or 0 if it cannot lead."""
    if byte < 0x80:
        return 1
    if byte <= 0xBF:
        # continuation byte
        return 0
    if byte in (0xC0, 0xC1):
        # overlong encoding of an ASCII byte
        return 0
    if byte <= 0xDF:
        return 2
    if byte <= 0xEF:
        return 3
    if byte <= 0xF4:
        return 4
    # start of a restricted 4-, 5- or 6-byte sequence, or not UTF-8 at all
    return 0


def check_full(buffer: BytesLike) -> Optional[int]:
    """Decode one complete multi-byte sequence.

    The whole buffer is taken as the sequence. Returns the code point, or
    None when the sequence is malformed, overlong, a surrogate or out of range.
    """
    data = bytes(buffer)
    size = len(data)
    masks = {2: 0x1F, 3: 0x0F, 4: 0x07}
    if size not in masks:
        return None

    value = data[0] & masks[size]
    for byte in data[1:]:
        if not 0x80 <= byte <= 0xBF:
            return None
        value = (value << 6) + (byte & 0x3F)

    if value > 0x10FFFF:
        return None
    if 0xD800 <= value <= 0xDFFF:
        return None
    minimum = {2: 0x80, 3: 0x800, 4: 0x10000}[size]
    if value < minimum:
        return None
    return value


def iterate(buffer: BytesLike) -> Iterator[int]:
    """Yield the code points of a UTF-8 buffer, raising ValueError where it is invalid."""
    data = bytes(buffer)
    pos = 0
    end = len(data)
    while pos < end:
        count = check_first(data[pos])
        if count == 0:
            raise ValueError(f"invalid UTF-8 lead byte at offset {pos}")
        if count == 1:
            value: Optional[int] = data[pos]
        elif count > end - pos:
            raise ValueError(f"truncated UTF-8 sequence at offset {pos}")
        else:
            value = check_full(data[pos : pos + count])
            if value is None:
                raise ValueError(f"invalid UTF-8 sequence at offset {pos}")
        yield value
        pos += count


def check_string(data: BytesLike) -> bool:
    """Tell whether a byte string is valid UTF-8."""
    try:
        collections.deque(iterate(data), maxlen=0)
    except ValueError:
        return False
    return True