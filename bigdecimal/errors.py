"""BigDecimal error classes.

Every failure of the engine is raised synchronously to the caller. The
classes below map to the invariant that was violated.
"""


class BigDecimalError(ArithmeticError):
    """Base error for BigDecimal operations."""

    pass


class NumberFormatError(BigDecimalError, ValueError):
    """Input text (or a native number) cannot be converted to a BigDecimal."""

    pass


class ScaleOverflowError(BigDecimalError):
    """Scale arithmetic would leave the 32-bit signed range."""

    pass


class DivisionByZeroError(BigDecimalError, ZeroDivisionError):
    """Non-zero dividend divided by zero."""

    pass


class DivisionUndefinedError(BigDecimalError, ZeroDivisionError):
    """Zero divided by zero."""

    pass


class NonTerminatingExpansionError(BigDecimalError):
    """Exact quotient has no finite decimal representation."""

    pass


class DivisionImpossibleError(BigDecimalError):
    """Integral quotient does not fit the requested precision."""

    pass


class RoundingNecessaryError(BigDecimalError):
    """UNNECESSARY rounding requested but a non-zero digit would be discarded."""

    pass


class InvalidContextError(BigDecimalError, ValueError):
    """MathContext settings are not valid."""

    pass


class InvalidPrecisionError(InvalidContextError):
    """Precision must be a non-negative integer."""

    pass


class InvalidRoundingModeError(InvalidContextError):
    """Rounding mode is not one of the eight known policies."""

    pass


class InvalidOperationError(BigDecimalError):
    """Arguments are outside the domain of the operation."""

    pass


class NegativeSquareRootError(InvalidOperationError):
    """Square root of a negative value."""

    pass


class SqrtVerificationError(BigDecimalError):
    """Computed square root failed its rounding self-check."""

    pass
