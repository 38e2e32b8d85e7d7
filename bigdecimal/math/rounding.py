"""Rounding engine.

Every inexact operation funnels through the functions here: an integer
division whose quotient is adjusted by one unit according to a
RoundingMode, and the precision reduction loop built on top of it. The same
code serves compact and arbitrary-precision magnitudes.
"""

from __future__ import annotations

from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import RoundingNecessaryError
from bigdecimal.math.integers import (
    check_scale,
    check_scale_non_zero,
    compare_magnitude,
    digit_length,
    signum,
    ten_power,
)

__all__ = [
    "div_trunc",
    "common_need_increment",
    "need_increment",
    "divide_and_round",
    "divide_and_round_scaled",
    "strip_zeros_to_match_scale",
    "do_round",
]


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // rounds toward negative infinity; decimal quotients are
    truncated toward zero before the rounding decision is made.

    Args:
        a: Dividend (can be positive or negative)
        b: Divisor (must be non-zero)

    Returns:
        a / b truncated toward zero

    Raises:
        ZeroDivisionError: If b is zero

    Examples:
        -7 // 3 == -3
        div_trunc(-7, 3) == -2
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in div_trunc")

    if (a >= 0) == (b >= 0):
        return a // b
    else:
        return -(abs(a) // abs(b))


def common_need_increment(
    mode: RoundingMode, qsign: int, cmp_frac_half: int, odd_quot: bool
) -> bool:
    """Decide whether a truncated quotient must move one unit away from zero.

    Only called when the discarded fraction is non-zero.

    Args:
        mode: Rounding policy
        qsign: Sign of the exact quotient (-1 or 1)
        cmp_frac_half: Discarded fraction compared with one half (-1, 0, 1)
        odd_quot: True if the truncated quotient is odd

    Raises:
        RoundingNecessaryError: If mode is UNNECESSARY
    """
    if mode is RoundingMode.UNNECESSARY:
        raise RoundingNecessaryError("Rounding necessary")
    if mode is RoundingMode.UP:
        return True
    if mode is RoundingMode.DOWN:
        return False
    if mode is RoundingMode.CEILING:
        return qsign > 0
    if mode is RoundingMode.FLOOR:
        return qsign < 0

    # HALF_UP, HALF_DOWN, HALF_EVEN
    if cmp_frac_half < 0:
        return False
    if cmp_frac_half > 0:
        return True
    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    return odd_quot


def need_increment(divisor: int, mode: RoundingMode, qsign: int, q: int, r: int) -> bool:
    """Rounding decision for quotient q with non-zero remainder r.

    The fraction r/divisor is compared with one half as 2*|r| against
    |divisor|, which is exact for odd and even divisors alike.
    """
    cmp_frac_half = compare_magnitude(2 * r, divisor)
    return common_need_increment(mode, qsign, cmp_frac_half, (q & 1) == 1)


def divide_and_round(dividend: int, divisor: int, mode: RoundingMode) -> int:
    """Divide two integers and round the quotient to an integer under mode."""
    q = div_trunc(dividend, divisor)
    r = dividend - q * divisor
    if r != 0:
        qsign = signum(dividend) * signum(divisor)
        if need_increment(divisor, mode, qsign, q, r):
            q += qsign
    return q


def strip_zeros_to_match_scale(value: int, scale: int, preferred_scale: int) -> tuple[int, int]:
    """Remove trailing zeros from value while scale stays above preferred_scale.

    Returns:
        (value, scale) of the same numerical value with fewer trailing zeros

    Raises:
        ScaleOverflowError: If decrementing the scale leaves the valid range
    """
    while abs(value) >= 10 and scale > preferred_scale:
        q, r = divmod(value, 10)
        if r != 0:
            break
        value = q
        scale = check_scale(value, scale - 1)
    return value, scale


def divide_and_round_scaled(
    dividend: int,
    divisor: int,
    scale: int,
    mode: RoundingMode,
    preferred_scale: int,
) -> tuple[int, int]:
    """Divide and round to a quotient at scale, then move toward preferred_scale.

    An inexact quotient keeps the requested scale. An exact one sheds
    trailing zeros until it reaches preferred_scale.

    Returns:
        (unscaled quotient, scale)
    """
    q = div_trunc(dividend, divisor)
    r = dividend - q * divisor
    if r != 0:
        qsign = signum(dividend) * signum(divisor)
        if need_increment(divisor, mode, qsign, q, r):
            q += qsign
        return q, scale
    if preferred_scale != scale:
        return strip_zeros_to_match_scale(q, scale, preferred_scale)
    return q, scale


def do_round(value: int, scale: int, mc: MathContext, precision: int = 0) -> tuple[int, int, int]:
    """Reduce value to at most mc.precision significant digits.

    Rounding can carry into a new digit (999 -> 1000), so the reduction
    repeats until the digit count fits.

    Args:
        value: Unscaled magnitude
        scale: Scale of value
        mc: Target context; precision 0 leaves the value untouched
        precision: Digit count of value if already known, else 0

    Returns:
        (unscaled, scale, precision) of the rounded value
    """
    prec = precision or digit_length(value)
    mcp = mc.precision
    if mcp == 0:
        return value, scale, prec

    drop = prec - mcp
    while drop > 0:
        scale = check_scale_non_zero(scale - drop)
        value = divide_and_round(value, ten_power(drop), mc.rounding)
        prec = digit_length(value)
        drop = prec - mcp
    return value, scale, prec
