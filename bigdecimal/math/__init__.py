"""Integer-level primitives for the decimal engine.

This package holds the arithmetic that works on raw unscaled magnitudes:
- integers: digit counts, powers of ten, scale range checks, text conversion
- rounding: rounded integer division and precision reduction
- division: precision-bounded and scale-bounded quotient kernels
"""

from bigdecimal.math.division import divide_to_precision, divide_to_scale
from bigdecimal.math.integers import digit_length, int_to_str, str_to_int
from bigdecimal.math.rounding import divide_and_round, do_round

__all__ = [
    "digit_length",
    "int_to_str",
    "str_to_int",
    "divide_and_round",
    "do_round",
    "divide_to_precision",
    "divide_to_scale",
]
