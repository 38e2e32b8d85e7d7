"""Numeric limits and shared lookup tables.

Centralizes the bounds of the value representation and the small tables
used by the integer helpers, the parser and the formatter. Everything here
is built once at import time and never mutated.
"""

# Scale is a 32-bit signed quantity
MAX_SCALE = 2**31 - 1
MIN_SCALE = -(2**31)

# Below any reachable scale; used as the preferred scale when stripping
# every trailing zero
UNBOUNDED_PREFERRED_SCALE = -(2**63)

# Largest magnitude kept in the compact (native) representation
SAFE_INTEGER_MAX = 2**53 - 1
SAFE_INTEGER_MIN = -SAFE_INTEGER_MAX

# Inputs of at most this many characters (after the sign) are parsed by
# accumulating directly into a native integer
MAX_COMPACT_DIGITS = 15

# Exponent part of the input grammar: at most 10 significant digits
MAX_EXPONENT_DIGITS = 10

# pow() accepts exponents with |n| <= 999_999_999
MAX_POW_EXPONENT = 999_999_999

# Formatting switches to exponential notation below this adjusted exponent
MIN_PLAIN_ADJUSTED_EXPONENT = -6

# Plain str()/int() conversions stay below the interpreter's digit cap;
# longer values are split recursively by powers of ten
MAX_STR_CONVERSION_DIGITS = 4000
MAX_STR_CONVERSION_BITS = 13000

# 10**0 .. 10**15, every entry a safe integer
TEN_POWERS_TABLE = tuple(10**i for i in range(MAX_COMPACT_DIGITS + 1))

# THRESHOLDS_TABLE[n] is the largest magnitude that can be multiplied by
# 10**n without leaving the safe-integer range
THRESHOLDS_TABLE = tuple(SAFE_INTEGER_MAX // p for p in TEN_POWERS_TABLE)

# Digit-pair lookup used by the two-decimal ("currency") formatting path
DIGIT_TENS = tuple(str(i // 10) for i in range(100))
DIGIT_ONES = tuple(str(i % 10) for i in range(100))

# Seed precision of the float estimate used by sqrt()
SQRT_GUESS_PRECISION = 15

# ceil(log10(2) * 2**31), used to estimate digit counts from bit lengths
LOG10_2_SCALED = 646456993
