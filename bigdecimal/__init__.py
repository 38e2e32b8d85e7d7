"""Arbitrary-precision decimal arithmetic - Python implementation."""

from bigdecimal.context import (
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    MC,
    UNLIMITED,
    MathContext,
    RoundingMode,
)
from bigdecimal.core import Big, BigDecimal
from bigdecimal.errors import (
    BigDecimalError,
    DivisionByZeroError,
    DivisionImpossibleError,
    DivisionUndefinedError,
    InvalidContextError,
    InvalidOperationError,
    InvalidPrecisionError,
    InvalidRoundingModeError,
    NegativeSquareRootError,
    NonTerminatingExpansionError,
    NumberFormatError,
    RoundingNecessaryError,
    ScaleOverflowError,
    SqrtVerificationError,
)

__version__ = "0.1.0"
__all__ = [
    # Values
    "BigDecimal",
    "Big",
    # Contexts
    "MathContext",
    "MC",
    "RoundingMode",
    "UNLIMITED",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
    # Errors
    "BigDecimalError",
    "NumberFormatError",
    "ScaleOverflowError",
    "DivisionByZeroError",
    "DivisionUndefinedError",
    "NonTerminatingExpansionError",
    "DivisionImpossibleError",
    "RoundingNecessaryError",
    "InvalidContextError",
    "InvalidPrecisionError",
    "InvalidRoundingModeError",
    "InvalidOperationError",
    "NegativeSquareRootError",
    "SqrtVerificationError",
    "__version__",
]
