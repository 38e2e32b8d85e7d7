"""Division kernels.

Two families of quotient are needed by BigDecimal:

- precision-bounded: the quotient carries a fixed number of significant
  digits (``divide(divisor, mc)`` and everything built on it)
- scale-bounded: the quotient is rounded at a fixed scale
  (``divide(divisor, scale=..., rounding=...)``, ``set_scale``)

Both operate on raw (unscaled, scale) pairs and leave value construction
to the caller.
"""

from __future__ import annotations

from bigdecimal.constants import MAX_COMPACT_DIGITS
from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.math.integers import (
    check_scale,
    check_scale_non_zero,
    compare_magnitude,
    is_compact,
    multiply_power_ten,
)
from bigdecimal.math.rounding import divide_and_round_scaled, do_round

__all__ = [
    "compare_magnitude_normalized",
    "rounded_ten_power",
    "divide_to_precision",
    "divide_to_scale",
]


def compare_magnitude_normalized(xs: int, xscale: int, ys: int, yscale: int) -> int:
    """Compare |xs| and |ys| after padding the one with fewer digits.

    xscale and yscale are the digit counts of xs and ys, so the comparison
    is between the two magnitudes normalized to the same leading position.
    """
    sdiff = xscale - yscale
    if sdiff < 0:
        return compare_magnitude(multiply_power_ten(xs, -sdiff), ys)
    if sdiff > 0:
        return compare_magnitude(xs, multiply_power_ten(ys, sdiff))
    return compare_magnitude(xs, ys)


def rounded_ten_power(qsign: int, raise_: int, scale: int, preferred_scale: int) -> tuple[int, int]:
    """Return qsign * 10**raise_ at scale, moved as close to preferred_scale as it goes.

    This is the exact quotient when both operands have the same normalized
    magnitude.
    """
    if scale > preferred_scale:
        diff = scale - preferred_scale
        if diff < raise_:
            return multiply_power_ten(qsign, raise_ - diff), preferred_scale
        return qsign, scale - raise_
    return multiply_power_ten(qsign, raise_), scale


def _small_operands(xs: int, xprec: int, ys: int, yprec: int, mcp: int) -> bool:
    return (
        is_compact(xs)
        and is_compact(ys)
        and xprec <= yprec < MAX_COMPACT_DIGITS
        and mcp < MAX_COMPACT_DIGITS
    )


def divide_to_precision(
    xs: int,
    xprec: int,
    ys: int,
    yprec: int,
    preferred_scale: int,
    mc: MathContext,
) -> tuple[int, int, int]:
    """Quotient of two non-zero magnitudes rounded to mc.precision digits.

    Both operands are treated as normalized into [0.1, 1): xs is read as
    xs * 10**-xprec and likewise for ys. If the dividend is then larger than
    the divisor, the divisor is shifted one more place so that the quotient
    has exactly mc.precision digits before the final rounding step.

    Args:
        xs: Unscaled dividend (non-zero)
        xprec: Digit count of xs
        ys: Unscaled divisor (non-zero)
        yprec: Digit count of ys
        preferred_scale: scale(dividend) - scale(divisor)
        mc: Context with precision > 0

    Returns:
        (unscaled, scale, precision) of the rounded quotient

    Raises:
        RoundingNecessaryError: If mc rounding is UNNECESSARY and the quotient
            is inexact
        ScaleOverflowError: If the quotient scale leaves the valid range
    """
    mcp = mc.precision
    mode = mc.rounding
    preferred = check_scale_non_zero(preferred_scale)

    cmp = compare_magnitude_normalized(xs, xprec, ys, yprec)
    if cmp == 0 and _small_operands(xs, xprec, ys, yprec, mcp):
        # Same normalized magnitude: the quotient is a signed power of ten
        scl = check_scale_non_zero(preferred_scale + yprec - xprec + mcp)
        qsign = 1 if (xs < 0) == (ys < 0) else -1
        q, scale = rounded_ten_power(qsign, mcp, scl, preferred)
        return do_round(q, scale, mc)

    if cmp > 0:
        yprec -= 1

    scl = check_scale_non_zero(preferred_scale + yprec - xprec + mcp)
    raise_ = check_scale_non_zero(mcp + yprec - xprec)
    if raise_ > 0:
        q, scale = divide_and_round_scaled(
            multiply_power_ten(xs, raise_), ys, scl, mode, preferred
        )
    else:
        new_scale = check_scale_non_zero(xprec - mcp)
        if new_scale == yprec:
            q, scale = divide_and_round_scaled(xs, ys, scl, mode, preferred)
        else:
            raise_ = check_scale_non_zero(new_scale - yprec)
            q, scale = divide_and_round_scaled(
                xs, multiply_power_ten(ys, raise_), scl, mode, preferred
            )
    # Only a carry such as 999 -> 1000 can need another pass here
    return do_round(q, scale, mc)


def divide_to_scale(
    dividend: int,
    dividend_scale: int,
    divisor: int,
    divisor_scale: int,
    scale: int,
    mode: RoundingMode,
) -> tuple[int, int]:
    """Quotient rounded at a fixed scale under mode.

    Whichever operand keeps the arithmetic integral is multiplied by a power
    of ten, then a single rounded integer division produces the result.

    Returns:
        (unscaled, scale) with scale equal to the requested one
    """
    if check_scale(dividend, scale + divisor_scale) > dividend_scale:
        raise_ = scale + divisor_scale - dividend_scale
        return divide_and_round_scaled(
            multiply_power_ten(dividend, raise_), divisor, scale, mode, scale
        )
    new_scale = check_scale(divisor, dividend_scale - scale)
    raise_ = new_scale - divisor_scale
    return divide_and_round_scaled(
        dividend, multiply_power_ten(divisor, raise_), scale, mode, scale
    )
