"""Decimal text parser.

Grammar (no surrounding whitespace):

    [+-] digits [. [digits]] [(e|E) [+-] exponent-digits]
    [+-] . digits [(e|E) [+-] exponent-digits]

The parser produces the raw (unscaled, scale, precision) triple. Inputs of
at most MAX_COMPACT_DIGITS characters after the sign accumulate straight
into an int; longer inputs collect their significant digits first and
convert them in one step.
"""

from __future__ import annotations

from bigdecimal.constants import MAX_COMPACT_DIGITS, MAX_EXPONENT_DIGITS
from bigdecimal.context import MathContext
from bigdecimal.errors import NumberFormatError
from bigdecimal.math.integers import str_to_int
from bigdecimal.math.rounding import do_round

__all__ = [
    "parse_decimal",
    "parse_exponent",
    "DECIMAL_PATTERN",
]

# Input grammar as a regular expression, used for schema documentation
DECIMAL_PATTERN = r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_DIGITS = frozenset("0123456789")


def parse_exponent(text: str, offset: int, length: int) -> int:
    """Parse the exponent starting at the 'e'/'E' found at text[offset].

    Args:
        text: Source text
        offset: Index of the exponent marker
        length: Characters remaining, counting the marker

    Returns:
        Signed exponent value

    Raises:
        NumberFormatError: If digits are missing, too many, or not digits
    """
    offset += 1
    length -= 1
    negative = False
    if length > 0 and text[offset] in "+-":
        negative = text[offset] == "-"
        offset += 1
        length -= 1
    if length <= 0:
        raise NumberFormatError("No exponent digits.")

    # Leading zeros do not count toward the digit limit
    while length > MAX_EXPONENT_DIGITS and text[offset] == "0":
        offset += 1
        length -= 1
    if length > MAX_EXPONENT_DIGITS:
        raise NumberFormatError("Too many nonzero exponent digits.")

    exp = 0
    for c in text[offset : offset + length]:
        if c not in _DIGITS:
            raise NumberFormatError("Not a digit.")
        exp = exp * 10 + (ord(c) - 48)
    return -exp if negative else exp


def _adjust_scale(scale: int, exp: int) -> int:
    adjusted = scale - exp
    if adjusted < _INT32_MIN or adjusted > _INT32_MAX:
        raise NumberFormatError("Scale out of range.")
    return adjusted


def _read_exponent(text: str, offset: int, length: int) -> int:
    exp = parse_exponent(text, offset, length)
    if exp < _INT32_MIN or exp > _INT32_MAX:
        raise NumberFormatError("Exponent overflow.")
    return exp


def _bad_character(c: str) -> NumberFormatError:
    return NumberFormatError(
        f"Character {c} is neither a decimal digit number, decimal point, "
        'nor "e" notation exponential mark.'
    )


def parse_decimal(
    text: str,
    offset: int = 0,
    length: int | None = None,
    mc: MathContext | None = None,
) -> tuple[int, int, int]:
    """Parse text[offset:offset + length] into (unscaled, scale, precision).

    Leading zeros of the coefficient are not significant: "007.50" has
    unscaled value 750, scale 2 and precision 3. A zero coefficient always
    has precision 1.

    Args:
        text: Source text
        offset: First character to read
        length: Number of characters to read (default: rest of text)
        mc: If given with precision > 0, the value is rounded to it

    Returns:
        (unscaled, scale, precision)

    Raises:
        NumberFormatError: If the slice is out of bounds or the text is not a
            valid decimal number
        ScaleOverflowError: If rounding under mc pushes the scale out of range
    """
    if not isinstance(text, str):
        raise TypeError(f"Decimal text must be str, got {type(text).__name__}")
    if length is None:
        length = len(text) - offset
    if offset < 0 or length < 0 or offset + length > len(text):
        raise NumberFormatError("Bad offset or len arguments for char[] input.")
    if length == 0:
        raise NumberFormatError("No digits found.")

    negative = False
    if text[offset] == "-":
        negative = True
        offset += 1
        length -= 1
    elif text[offset] == "+":
        offset += 1
        length -= 1

    if length <= MAX_COMPACT_DIGITS:
        unscaled, scale, prec = _parse_compact(text, offset, length)
    else:
        unscaled, scale, prec = _parse_general(text, offset, length)

    if negative:
        unscaled = -unscaled

    if mc is not None and mc.precision > 0 and prec > mc.precision:
        unscaled, scale, prec = do_round(unscaled, scale, mc, prec)
    return unscaled, scale, prec


def _parse_compact(text: str, offset: int, length: int) -> tuple[int, int, int]:
    prec = 0
    scale = 0
    value = 0
    dot = False
    exp = 0
    end = offset + length
    i = offset
    while i < end:
        c = text[i]
        if c == "0":
            if prec == 0:
                prec = 1
            elif value != 0:
                value *= 10
                prec += 1
            if dot:
                scale += 1
        elif c in _DIGITS:
            # prec unchanged if preceded only by zeros
            if prec != 1 or value != 0:
                prec += 1
            value = value * 10 + (ord(c) - 48)
            if dot:
                scale += 1
        elif c == ".":
            if dot:
                raise NumberFormatError("Character array contains more than one decimal point.")
            dot = True
        elif c in "eE":
            exp = _read_exponent(text, i, end - i)
            break
        else:
            raise _bad_character(c)
        i += 1

    if prec == 0:
        raise NumberFormatError("No digits found.")
    if exp != 0:
        scale = _adjust_scale(scale, exp)
    return value, scale, prec


def _parse_general(text: str, offset: int, length: int) -> tuple[int, int, int]:
    prec = 0
    scale = 0
    dot = False
    exp = 0
    coeff: list[str] = []
    end = offset + length
    i = offset
    while i < end:
        c = text[i]
        if c in _DIGITS:
            if c == "0":
                if prec == 0:
                    prec = 1
                elif coeff:
                    coeff.append(c)
                    prec += 1
                # otherwise a redundant leading zero
                if dot:
                    scale += 1
            else:
                if prec != 1 or coeff:
                    prec += 1
                coeff.append(c)
                if dot:
                    scale += 1
        elif c == ".":
            if dot:
                raise NumberFormatError("Character array contains more than one decimal point.")
            dot = True
        elif c in "eE":
            exp = _read_exponent(text, i, end - i)
            break
        else:
            raise NumberFormatError('Character array is missing "e" notation exponential mark.')
        i += 1

    if prec == 0:
        raise NumberFormatError("No digits found.")
    if exp != 0:
        scale = _adjust_scale(scale, exp)
    value = str_to_int("".join(coeff)) if coeff else 0
    return value, scale, prec
