"""Rounding policies and precision contexts.

A MathContext pairs a precision (number of significant digits, 0 meaning
unlimited) with a RoundingMode. Contexts are immutable and can be shared
freely between operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from bigdecimal.errors import InvalidPrecisionError, InvalidRoundingModeError

__all__ = [
    "RoundingMode",
    "MathContext",
    "MC",
    "UNLIMITED",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
]


class RoundingMode(Enum):
    """Policy used to resolve digits discarded by a rounding step.

    Result of rounding the input to one digit:

        input  UP  DOWN  CEILING  FLOOR  HALF_UP  HALF_DOWN  HALF_EVEN
         5.5    6    5      6       5       6        5          6
         2.5    3    2      3       2       3        2          2
         1.6    2    1      2       1       2        2          2
         1.1    2    1      2       1       1        1          1
        -1.1   -2   -1     -1      -2      -1       -1         -1
        -2.5   -3   -2     -2      -3      -3       -2         -2

    UNNECESSARY raises RoundingNecessaryError for every inexact row.
    """

    UP = 0
    DOWN = 1
    CEILING = 2
    FLOOR = 3
    HALF_UP = 4
    HALF_DOWN = 5
    HALF_EVEN = 6
    UNNECESSARY = 7

    @classmethod
    def coerce(cls, value: RoundingMode | int | str) -> RoundingMode:
        """Resolve a member, its integer value or its name.

        Raises:
            InvalidRoundingModeError: If value names no rounding mode
        """
        if isinstance(value, RoundingMode):
            return value
        if isinstance(value, bool):
            raise InvalidRoundingModeError(f"RoundingMode is invalid: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as err:
                raise InvalidRoundingModeError(f"RoundingMode is invalid: {value}") from err
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as err:
                raise InvalidRoundingModeError(f"RoundingMode is invalid: {value!r}") from err
        raise InvalidRoundingModeError(f"RoundingMode is invalid: {value!r}")


@dataclass(frozen=True)
class MathContext:
    """Precision and rounding settings for a bounded operation.

    Attributes:
        precision: Number of significant digits of the result. 0 requests an
            exact result, in which case the rounding mode is never consulted.
        rounding: Policy applied to discarded digits (default: HALF_UP)

    Examples:
        MathContext(3)                          # 3 digits, HALF_UP
        MathContext(5, RoundingMode.HALF_EVEN)
        MathContext(5, "floor")                 # names are accepted too
    """

    DEFAULT_ROUNDING: ClassVar[RoundingMode] = RoundingMode.HALF_UP

    precision: int
    rounding: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise InvalidPrecisionError(
                f"MathContext precision must be an integer, got {type(self.precision).__name__}"
            )
        if self.precision < 0:
            raise InvalidPrecisionError("MathContext precision cannot be less than 0")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "rounding", RoundingMode.coerce(self.rounding))

    @property
    def is_unlimited(self) -> bool:
        """True if results are exact (precision 0)."""
        return self.precision == 0

    def with_precision(self, precision: int) -> MathContext:
        """Return a context with the same rounding and a new precision."""
        return MathContext(precision, self.rounding)

    def with_rounding(self, rounding: RoundingMode | int | str) -> MathContext:
        """Return a context with the same precision and a new rounding mode."""
        return MathContext(self.precision, RoundingMode.coerce(rounding))

    def __str__(self) -> str:
        return f"precision={self.precision} roundingMode={self.rounding.name}"


# Unlimited precision: exact arithmetic
UNLIMITED = MathContext(0, RoundingMode.HALF_UP)

# Precision of the IEEE 754 decimal formats (exponent ranges are not modeled)
DECIMAL32 = MathContext(7, RoundingMode.HALF_EVEN)
DECIMAL64 = MathContext(16, RoundingMode.HALF_EVEN)
DECIMAL128 = MathContext(34, RoundingMode.HALF_EVEN)

# Convenience alias for concise code
MC = MathContext
