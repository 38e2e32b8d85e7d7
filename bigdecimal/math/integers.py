"""Integer helpers shared by every decimal operation.

Unscaled magnitudes are plain Python ints. Values within the safe-integer
range (|v| <= 2**53 - 1) are the "compact" representation and get table
driven fast paths; anything larger is handled by the same functions through
arbitrary-precision arithmetic.
"""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache

from bigdecimal.constants import (
    LOG10_2_SCALED,
    MAX_SCALE,
    MAX_STR_CONVERSION_BITS,
    MAX_STR_CONVERSION_DIGITS,
    MIN_SCALE,
    SAFE_INTEGER_MAX,
    TEN_POWERS_TABLE,
    THRESHOLDS_TABLE,
)
from bigdecimal.errors import ScaleOverflowError

__all__ = [
    # Representation
    "is_compact",
    "signum",
    # Digits and magnitudes
    "digit_length",
    "compare_magnitude",
    "ten_power",
    "multiply_power_ten",
    # Scale arithmetic
    "check_scale",
    "check_scale_non_zero",
    "saturate_scale",
    # Text conversion
    "int_to_str",
    "str_to_int",
]


# =============================================================================
# Representation
# =============================================================================


def is_compact(value: int) -> bool:
    """True if value fits the safe-integer (compact) representation."""
    return -SAFE_INTEGER_MAX <= value <= SAFE_INTEGER_MAX


def signum(value: int) -> int:
    """Return -1, 0 or 1 according to the sign of value."""
    return (value > 0) - (value < 0)


# =============================================================================
# Digits and magnitudes
# =============================================================================


def digit_length(value: int) -> int:
    """Number of decimal digits in |value|; zero has one digit.

    Compact values are looked up in the powers-of-ten table. Larger values
    estimate the count from the bit length and correct it by one comparison.

    Examples:
        digit_length(0) == 1
        digit_length(-999) == 3
        digit_length(10**40) == 41
    """
    value = abs(value)
    if value <= SAFE_INTEGER_MAX:
        if value == 0:
            return 1
        return bisect_right(TEN_POWERS_TABLE, value)
    r = ((value.bit_length() + 1) * LOG10_2_SCALED) >> 31
    return r if value < ten_power(r) else r + 1


def compare_magnitude(a: int, b: int) -> int:
    """Compare |a| with |b|, returning -1, 0 or 1."""
    a = abs(a)
    b = abs(b)
    return (a > b) - (a < b)


@lru_cache(maxsize=512)
def _cached_ten_power(n: int) -> int:
    return 10**n


def ten_power(n: int) -> int:
    """Return 10**n for n >= 0, from the table when it is small."""
    if n < len(TEN_POWERS_TABLE):
        return TEN_POWERS_TABLE[n]
    return _cached_ten_power(n)


def multiply_power_ten(value: int, n: int) -> int:
    """Return value * 10**n for n >= 0.

    Stays on native multiplication by a table entry while the product is
    known to remain compact.
    """
    if value == 0 or n <= 0:
        return value
    if n < len(TEN_POWERS_TABLE) and abs(value) <= THRESHOLDS_TABLE[n]:
        return value * TEN_POWERS_TABLE[n]
    return value * ten_power(n)


# =============================================================================
# Scale arithmetic
# =============================================================================


def check_scale(unscaled: int, scale: int) -> int:
    """Validate a computed scale for a value with the given unscaled magnitude.

    A zero value cannot lose information, so its scale is clamped into range
    instead of failing.

    Raises:
        ScaleOverflowError: If unscaled is non-zero and scale is out of range
    """
    if MIN_SCALE <= scale <= MAX_SCALE:
        return scale
    if unscaled == 0:
        return MAX_SCALE if scale > MAX_SCALE else MIN_SCALE
    raise ScaleOverflowError("Underflow" if scale > MAX_SCALE else "Overflow")


def check_scale_non_zero(scale: int) -> int:
    """Validate a scale that belongs to a value known to be non-zero."""
    if MIN_SCALE <= scale <= MAX_SCALE:
        return scale
    raise ScaleOverflowError("Underflow" if scale > MAX_SCALE else "Overflow")


def saturate_scale(scale: int) -> int:
    """Clamp scale into the representable range."""
    return max(MIN_SCALE, min(MAX_SCALE, scale))


# =============================================================================
# Text conversion
# =============================================================================
#
# The interpreter refuses int <-> str conversions beyond a configurable digit
# count. Long values are split at a power of ten and each half converted
# separately, so any length works regardless of that limit.


def int_to_str(value: int) -> str:
    """Decimal text of value, for any magnitude."""
    if value < 0:
        return "-" + int_to_str(-value)
    if value.bit_length() <= MAX_STR_CONVERSION_BITS:
        return str(value)
    half = digit_length(value) // 2
    high, low = divmod(value, ten_power(half))
    return int_to_str(high) + int_to_str(low).zfill(half)


def str_to_int(text: str) -> int:
    """Parse a run of ASCII digits (optionally signed), for any length."""
    if text[:1] in ("-", "+"):
        magnitude = str_to_int(text[1:])
        return -magnitude if text[0] == "-" else magnitude
    if len(text) <= MAX_STR_CONVERSION_DIGITS:
        return int(text)
    half = len(text) // 2
    return str_to_int(text[:-half]) * ten_power(half) + str_to_int(text[-half:])
