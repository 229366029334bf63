"""Conversions between decimal text and floating-point numbers."""

from __future__ import annotations

import math
import re
from decimal import Decimal

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def strtod(text: str) -> float:
    """Parse a decimal number.

    Raises ValueError when the text is not a decimal number and
    OverflowError when its magnitude is too large for a float.
    Values too small to represent become zero.
    """
    if not _NUMBER.fullmatch(text):
        raise ValueError(f"not a decimal number: {text!r}")
    value = float(text)
    if math.isinf(value):
        raise OverflowError(f"number out of range: {text}")
    return value


def _shortest_digits(value: float) -> tuple[str, int]:
    """Shortest round-tripping digits of a positive finite value and its decimal point."""
    _, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple))
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    return stripped, len(stripped) + exponent


def _rounded_digits(value: float, ndigits: int) -> tuple[str, int]:
    """At most ``ndigits`` correctly rounded significant digits and the decimal point."""
    mantissa, exponent = format(value, f".{ndigits - 1}e").split("e")
    digits = mantissa.replace(".", "").rstrip("0")
    return digits, int(exponent) + 1


def dtostr(value: float, precision: int = 0) -> str:
    """Format a finite float so that it reads back as a real number.

    A precision of 0 gives the shortest text that reads back as the same
    value; otherwise at most that many significant digits are kept.
    The result always holds a '.' or an exponent, e.g. ``1.0`` or ``1e17``.
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite value: {value}")

    negative = math.copysign(1.0, value) < 0
    magnitude = abs(value)
    if magnitude == 0.0:
        digits, decpt = "0", 1
    elif precision == 0:
        digits, decpt = _shortest_digits(magnitude)
    else:
        digits, decpt = _rounded_digits(magnitude, max(1, precision))

    use_exp = decpt <= -4 or decpt > 16
    exp = 0
    if use_exp:
        exp = decpt - 1
        decpt = 1

    ndigits = len(digits)
    vdigits_start = decpt - 1 if decpt <= 0 else 0
    vdigits_end = max(ndigits, decpt if use_exp else decpt + 1)

    parts = ["-"] if negative else []

    # zero padding on the left of the digits
    if decpt <= 0:
        parts.append("0" * (decpt - vdigits_start) + "." + "0" * (-decpt))
    else:
        parts.append("0" * (-vdigits_start))

    # the digits, with the decimal point inside them when it falls there
    if 0 < decpt <= ndigits:
        parts.append(digits[:decpt] + "." + digits[decpt:])
    else:
        parts.append(digits)

    # zeros on the right
    if ndigits < decpt:
        parts.append("0" * (decpt - ndigits) + "." + "0" * (vdigits_end - decpt))
    else:
        parts.append("0" * (vdigits_end - ndigits))

    text = "".join(parts)
    if text.endswith("."):
        text = text[:-1]
    if use_exp:
        text += f"e{exp}"
    return text