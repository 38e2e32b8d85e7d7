"""Immutable arbitrary-precision decimal numbers.

A BigDecimal is an unscaled integer and a 32-bit scale:

    value = unscaled * 10**-scale

Unscaled values within the safe-integer range are held in the compact slot;
larger ones move to the inflated slot and compact is None. The algorithms
are the same for both; the split only decides storage and a few table
driven fast paths.

Usage pattern:
    from bigdecimal import BigDecimal, MathContext, RoundingMode

    price = BigDecimal.from_str("19.99")
    total = price.multiply(BigDecimal.from_int(3))           # 59.97
    share = total.divide(BigDecimal.from_int(7), MathContext(5))  # 8.5671

Two values of the same numerical magnitude but different scale (2.0 and
2.00) belong to the same cohort: compare_to() reports them equal while
equals() and == do not.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import ClassVar

import structlog

from bigdecimal.constants import (
    MAX_POW_EXPONENT,
    MAX_SCALE,
    MIN_SCALE,
    SAFE_INTEGER_MAX,
    SAFE_INTEGER_MIN,
    SQRT_GUESS_PRECISION,
    TEN_POWERS_TABLE,
    UNBOUNDED_PREFERRED_SCALE,
)
from bigdecimal.context import MathContext, RoundingMode
from bigdecimal.errors import (
    BigDecimalError,
    DivisionByZeroError,
    DivisionImpossibleError,
    DivisionUndefinedError,
    InvalidOperationError,
    NegativeSquareRootError,
    NonTerminatingExpansionError,
    NumberFormatError,
    RoundingNecessaryError,
    ScaleOverflowError,
    SqrtVerificationError,
)
from bigdecimal.formatting import layout_chars, to_plain_string
from bigdecimal.math.division import divide_to_precision, divide_to_scale
from bigdecimal.math.integers import (
    check_scale,
    check_scale_non_zero,
    compare_magnitude,
    digit_length,
    is_compact,
    multiply_power_ten,
    saturate_scale,
    str_to_int,
    ten_power,
)
from bigdecimal.math.integers import signum as int_signum
from bigdecimal.math.rounding import (
    div_trunc,
    divide_and_round_scaled,
    do_round,
    strip_zeros_to_match_scale,
)
from bigdecimal.parsing import parse_decimal

logger = structlog.get_logger()

__all__ = ["BigDecimal", "Big"]

_HALF_MODES = (RoundingMode.HALF_UP, RoundingMode.HALF_DOWN, RoundingMode.HALF_EVEN)
_DOWNWARD_MODES = (RoundingMode.DOWN, RoundingMode.FLOOR)
_UPWARD_MODES = (RoundingMode.UP, RoundingMode.CEILING)


def _ceil_ten_thirds(precision: int) -> int:
    """ceil(10 * precision / 3), the digit bound of an exact quotient."""
    return -(-10 * precision // 3)


class BigDecimal:
    """Immutable arbitrary-precision signed decimal number.

    Instances are created through the factory classmethods (from_str,
    from_int, from_bigint, ...) or the Big() shorthand. The constructor
    itself takes the raw representation and is meant for internal use.

    Attributes:
        scale: Power-of-ten exponent, negated (read-only)
        precision: Number of significant digits of the unscaled value
        unscaled_value: The integer u in u * 10**-scale
    """

    __slots__ = ("_int_compact", "_int_val", "_scale", "_precision", "_string_cache")
    _int_compact: int | None
    _int_val: int | None
    _scale: int
    _precision: int
    _string_cache: str | None

    ZERO: ClassVar[BigDecimal]
    ONE: ClassVar[BigDecimal]
    TWO: ClassVar[BigDecimal]
    TEN: ClassVar[BigDecimal]
    ONE_TENTH: ClassVar[BigDecimal]
    ONE_HALF: ClassVar[BigDecimal]

    def __init__(self, unscaled: int, scale: int = 0, precision: int = 0) -> None:
        """Create a BigDecimal from its raw representation.

        Args:
            unscaled: Unscaled value
            scale: Scale in the 32-bit signed range
            precision: Digit count of unscaled if known, else 0

        Raises:
            TypeError: If unscaled or scale is not an int
            ScaleOverflowError: If scale is outside the 32-bit range
        """
        if isinstance(unscaled, bool) or not isinstance(unscaled, int):
            raise TypeError(f"Unscaled value must be int, got {type(unscaled).__name__}")
        if isinstance(scale, bool) or not isinstance(scale, int):
            raise TypeError(f"Scale must be int, got {type(scale).__name__}")
        if scale < MIN_SCALE or scale > MAX_SCALE:
            raise ScaleOverflowError(f"Scale out of range: {scale}")
        if is_compact(unscaled):
            self._int_compact = unscaled
            self._int_val = None
        else:
            self._int_compact = None
            self._int_val = unscaled
        self._scale = scale
        self._precision = precision
        self._string_cache = None

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_str(cls, text: str, mc: MathContext | None = None) -> BigDecimal:
        """Parse decimal text such as "-12.5e3", optionally rounding to mc.

        Raises:
            NumberFormatError: If text is not a valid decimal number
        """
        unscaled, scale, prec = parse_decimal(text, mc=mc)
        return _value_of(unscaled, scale, prec)

    @classmethod
    def from_substring(
        cls, text: str, offset: int, length: int, mc: MathContext | None = None
    ) -> BigDecimal:
        """Parse text[offset:offset + length].

        Raises:
            NumberFormatError: If the slice lies outside text or is not a
                valid decimal number
        """
        unscaled, scale, prec = parse_decimal(text, offset, length, mc)
        return _value_of(unscaled, scale, prec)

    @classmethod
    def from_int(
        cls, value: int, scale: int | None = None, mc: MathContext | None = None
    ) -> BigDecimal:
        """Create from a native integer in the safe range (|value| <= 2**53 - 1).

        Either a scale or a rounding context may be given, not both.

        Raises:
            NumberFormatError: If value lies outside the safe-integer range
            InvalidOperationError: If both scale and mc are given
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        if value < SAFE_INTEGER_MIN or value > SAFE_INTEGER_MAX:
            raise NumberFormatError(f"Value outside the safe integer range: {value}")
        if scale is not None and mc is not None:
            raise InvalidOperationError("from_int accepts a scale or a MathContext, not both")
        if mc is not None:
            return _value_of(*do_round(value, 0, mc))
        return _value_of(value, 0 if scale is None else scale)

    @classmethod
    def from_bigint(
        cls, value: int, scale: int | None = None, mc: MathContext | None = None
    ) -> BigDecimal:
        """Create from an integer of any size, as value * 10**-scale.

        If mc is given the result is rounded to it after the scale is applied.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        scale = 0 if scale is None else scale
        if mc is not None:
            return _value_of(*do_round(value, scale, mc))
        return _value_of(value, scale)

    @classmethod
    def copy_of(cls, value: BigDecimal, mc: MathContext | None = None) -> BigDecimal:
        """Copy value, rounding it to mc if given."""
        if not isinstance(value, BigDecimal):
            raise TypeError(f"Expected BigDecimal, got {type(value).__name__}")
        if mc is not None:
            return value._round_to(mc)
        return BigDecimal(value._unscaled, value._scale, value._precision)

    @classmethod
    def from_float(cls, value: float) -> BigDecimal:
        """Create from the shortest text that round-trips value (1.1 -> 1.1).

        Raises:
            NumberFormatError: If value is infinite or NaN
        """
        if not isinstance(value, float):
            raise TypeError(f"Expected float, got {type(value).__name__}")
        if not math.isfinite(value):
            raise NumberFormatError(f"Infinite or NaN: {value}")
        return cls.from_str(repr(value))

    @classmethod
    def from_decimal(cls, value: Decimal) -> BigDecimal:
        """Create from a finite decimal.Decimal, keeping its exponent.

        Raises:
            NumberFormatError: If value is infinite or NaN
            ScaleOverflowError: If the exponent is outside the scale range
        """
        if not isinstance(value, Decimal):
            raise TypeError(f"Expected Decimal, got {type(value).__name__}")
        if not value.is_finite():
            raise NumberFormatError(f"Infinite or NaN: {value}")
        sign, digits, exponent = value.as_tuple()
        unscaled = str_to_int("".join(map(str, digits)))
        if sign:
            unscaled = -unscaled
        return _value_of(unscaled, check_scale(unscaled, -exponent))

    # =========================================================================
    # Representation
    # =========================================================================

    @property
    def _unscaled(self) -> int:
        compact = self._int_compact
        return self._int_val if compact is None else compact  # type: ignore[return-value]

    @property
    def scale(self) -> int:
        """Power-of-ten exponent, negated."""
        return self._scale

    @property
    def precision(self) -> int:
        """Number of significant digits; zero has precision 1."""
        prec = self._precision
        if prec == 0:
            prec = digit_length(self._unscaled)
            self._precision = prec
        return prec

    @property
    def unscaled_value(self) -> int:
        """The integer u such that self == u * 10**-scale."""
        return self._unscaled

    def signum(self) -> int:
        """Return -1, 0 or 1 according to the sign of the value."""
        return int_signum(self._unscaled)

    def _round_to(self, mc: MathContext) -> BigDecimal:
        if mc.precision == 0 or self.precision <= mc.precision:
            return self
        return _value_of(*do_round(self._unscaled, self._scale, mc, self.precision))

    # =========================================================================
    # Sign and rounding
    # =========================================================================

    def negate(self, mc: MathContext | None = None) -> BigDecimal:
        """Return -self, rounded to mc if given."""
        result = _value_of(-self._unscaled, self._scale, self._precision)
        return result if mc is None else result._round_to(mc)

    def plus(self, mc: MathContext | None = None) -> BigDecimal:
        """Return +self, rounded to mc if given."""
        return self if mc is None else self._round_to(mc)

    def round(self, mc: MathContext) -> BigDecimal:
        """Return self rounded to mc.precision significant digits."""
        return self._round_to(mc)

    def abs(self, mc: MathContext | None = None) -> BigDecimal:
        """Return |self|, rounded to mc if given."""
        return self.negate(mc) if self.signum() < 0 else self.plus(mc)

    # =========================================================================
    # Addition, subtraction, multiplication
    # =========================================================================

    def add(self, augend: BigDecimal | int | str, mc: MathContext | None = None) -> BigDecimal:
        """Return self + augend.

        The exact result has scale max(self.scale, augend.scale). Under a
        bounded context the sum is rounded and its scale moved as close to
        that preferred scale as the precision allows.
        """
        augend = _operand(augend)
        if mc is None or mc.precision == 0:
            return self._add_exact(augend)

        lhs = self
        lhs_zero = lhs.signum() == 0
        augend_zero = augend.signum() == 0
        if lhs_zero or augend_zero:
            preferred = max(lhs._scale, augend._scale)
            if lhs_zero and augend_zero:
                return _zero_value_of(preferred)
            result = augend._round_to(mc) if lhs_zero else lhs._round_to(mc)
            if result._scale == preferred:
                return result
            if result._scale > preferred:
                return _value_of(
                    *strip_zeros_to_match_scale(result._unscaled, result._scale, preferred)
                )
            precision_diff = mc.precision - result.precision
            scale_diff = preferred - result._scale
            if precision_diff >= scale_diff:
                return result.set_scale(preferred)
            return result.set_scale(result._scale + precision_diff)

        padding = lhs._scale - augend._scale
        if padding != 0:
            lhs, augend = _pre_align(lhs, augend, padding, mc)
            if lhs._scale < augend._scale:
                lhs = lhs.set_scale(augend._scale)
            elif augend._scale < lhs._scale:
                augend = augend.set_scale(lhs._scale)
        return _value_of(*do_round(lhs._unscaled + augend._unscaled, lhs._scale, mc))

    def _add_exact(self, augend: BigDecimal) -> BigDecimal:
        xs = self._unscaled
        ys = augend._unscaled
        sdiff = self._scale - augend._scale
        if sdiff == 0:
            return _value_of(xs + ys, self._scale)
        if sdiff < 0:
            raise_ = check_scale(xs, -sdiff)
            return _value_of(multiply_power_ten(xs, raise_) + ys, augend._scale)
        raise_ = check_scale(ys, sdiff)
        return _value_of(xs + multiply_power_ten(ys, raise_), self._scale)

    def subtract(
        self, subtrahend: BigDecimal | int | str, mc: MathContext | None = None
    ) -> BigDecimal:
        """Return self - subtrahend, with the scale rules of add()."""
        return self.add(_operand(subtrahend).negate(), mc)

    def multiply(
        self, multiplicand: BigDecimal | int | str, mc: MathContext | None = None
    ) -> BigDecimal:
        """Return self * multiplicand; the exact scale is the sum of the scales."""
        multiplicand = _operand(multiplicand)
        product = self._unscaled * multiplicand._unscaled
        scale = check_scale(product, self._scale + multiplicand._scale)
        if mc is None or mc.precision == 0:
            return _value_of(product, scale)
        return _value_of(*do_round(product, scale, mc))

    # =========================================================================
    # Division
    # =========================================================================

    def _check_divisor(self, divisor: BigDecimal) -> None:
        if divisor.signum() == 0:
            if self.signum() == 0:
                raise DivisionUndefinedError("Division undefined")
            raise DivisionByZeroError("Division by zero")

    def divide(
        self,
        divisor: BigDecimal | int | str,
        mc: MathContext | None = None,
        *,
        scale: int | None = None,
        rounding: RoundingMode | int | str | None = None,
    ) -> BigDecimal:
        """Return self / divisor.

        Three forms:
            divide(d)                         exact quotient
            divide(d, mc)                     quotient rounded to mc.precision
            divide(d, scale=s, rounding=rm)   quotient rounded at scale s
                                              (scale defaults to self.scale,
                                              rounding to UNNECESSARY)

        The exact quotient prefers scale self.scale - divisor.scale, and uses
        the smallest larger scale that represents the result exactly.

        Raises:
            DivisionByZeroError: If divisor is zero and self is not
            DivisionUndefinedError: If both are zero
            NonTerminatingExpansionError: If the exact quotient has an
                infinite decimal expansion
            RoundingNecessaryError: If UNNECESSARY rounding would lose digits
            InvalidOperationError: If mc is combined with scale or rounding
        """
        divisor = _operand(divisor)
        if scale is not None or rounding is not None:
            if mc is not None:
                raise InvalidOperationError(
                    "divide accepts a MathContext or scale/rounding, not both"
                )
            mode = RoundingMode.UNNECESSARY if rounding is None else RoundingMode.coerce(rounding)
            return self._divide_to_scale(divisor, self._scale if scale is None else scale, mode)
        if mc is None or mc.precision == 0:
            return self._divide_exact(divisor)
        return self._divide_to_precision(divisor, mc)

    def _divide_exact(self, divisor: BigDecimal) -> BigDecimal:
        self._check_divisor(divisor)
        preferred = saturate_scale(self._scale - divisor._scale)
        if self.signum() == 0:
            return _zero_value_of(preferred)

        mc = MathContext(
            min(self.precision + _ceil_ten_thirds(divisor.precision), MAX_SCALE),
            RoundingMode.UNNECESSARY,
        )
        try:
            quotient = self._divide_to_precision(divisor, mc)
        except BigDecimalError as err:
            logger.debug("non_terminating_division", dividend=str(self), divisor=str(divisor))
            raise NonTerminatingExpansionError(
                "Non-terminating decimal expansion; no exact representable decimal result."
            ) from err
        if preferred > quotient._scale:
            return quotient.set_scale(preferred, RoundingMode.UNNECESSARY)
        return quotient

    def _divide_to_precision(self, divisor: BigDecimal, mc: MathContext) -> BigDecimal:
        self._check_divisor(divisor)
        preferred = self._scale - divisor._scale
        if self.signum() == 0:
            return _zero_value_of(saturate_scale(preferred))
        return _value_of(
            *divide_to_precision(
                self._unscaled, self.precision, divisor._unscaled, divisor.precision, preferred, mc
            )
        )

    def _divide_to_scale(self, divisor: BigDecimal, scale: int, mode: RoundingMode) -> BigDecimal:
        self._check_divisor(divisor)
        return _value_of(
            *divide_to_scale(
                self._unscaled, self._scale, divisor._unscaled, divisor._scale, scale, mode
            )
        )

    def divide_to_integral_value(
        self, divisor: BigDecimal | int | str, mc: MathContext | None = None
    ) -> BigDecimal:
        """Integer part of self / divisor, truncated toward zero.

        The preferred scale is self.scale - divisor.scale. With a bounded
        context the integer part must fit in mc.precision digits.

        Raises:
            DivisionByZeroError: If divisor is zero and self is not
            DivisionUndefinedError: If both are zero
            DivisionImpossibleError: If the integer part needs more than
                mc.precision digits
        """
        divisor = _operand(divisor)
        self._check_divisor(divisor)
        if mc is None or mc.precision == 0 or self._compare_magnitude(divisor) < 0:
            return self._divide_to_integral_exact(divisor)

        preferred = saturate_scale(self._scale - divisor._scale)
        result = self._divide_to_precision(divisor, MathContext(mc.precision, RoundingMode.DOWN))
        if result._scale < 0:
            # Digits left of the retained precision were dropped; they must all be zero
            product = result.multiply(divisor)
            if self.subtract(product)._compare_magnitude(divisor) >= 0:
                logger.debug(
                    "division_impossible",
                    dividend=str(self),
                    divisor=str(divisor),
                    precision=mc.precision,
                )
                raise DivisionImpossibleError("Division impossible")
        elif result._scale > 0:
            result = result.set_scale(0, RoundingMode.DOWN)

        if preferred > result._scale:
            precision_diff = mc.precision - result.precision
            if precision_diff > 0:
                return result.set_scale(
                    result._scale + min(precision_diff, preferred - result._scale)
                )
        return _value_of(*strip_zeros_to_match_scale(result._unscaled, result._scale, preferred))

    def _divide_to_integral_exact(self, divisor: BigDecimal) -> BigDecimal:
        preferred = saturate_scale(self._scale - divisor._scale)
        if self._compare_magnitude(divisor) < 0:
            return _zero_value_of(preferred)

        max_digits = min(
            self.precision
            + _ceil_ten_thirds(divisor.precision)
            + abs(self._scale - divisor._scale)
            + 2,
            MAX_SCALE,
        )
        quotient = self._divide_to_precision(divisor, MathContext(max_digits, RoundingMode.DOWN))
        if quotient._scale > 0:
            quotient = quotient.set_scale(0, RoundingMode.DOWN)
            quotient = _value_of(
                *strip_zeros_to_match_scale(quotient._unscaled, quotient._scale, preferred)
            )
        if quotient._scale < preferred:
            quotient = quotient.set_scale(preferred, RoundingMode.UNNECESSARY)
        return quotient

    def remainder(
        self, divisor: BigDecimal | int | str, mc: MathContext | None = None
    ) -> BigDecimal:
        """Return self - self.divide_to_integral_value(divisor) * divisor.

        The result has the sign of self.
        """
        return self.divide_and_remainder(divisor, mc)[1]

    def divide_and_remainder(
        self, divisor: BigDecimal | int | str, mc: MathContext | None = None
    ) -> tuple[BigDecimal, BigDecimal]:
        """Return (divide_to_integral_value(divisor), remainder(divisor))."""
        divisor = _operand(divisor)
        quotient = self.divide_to_integral_value(divisor, mc)
        return quotient, self.subtract(quotient.multiply(divisor))

    # =========================================================================
    # Powers and roots
    # =========================================================================

    def pow(self, n: int, mc: MathContext | None = None) -> BigDecimal:
        """Return self**n.

        Without a context (or with precision 0) n must lie in
        [0, 999_999_999] and the result is exact with scale self.scale * n.
        With a bounded context n may be negative, down to -999_999_999, and
        the result is computed at a working precision of
        mc.precision + digits(|n|) + 1 before the final rounding.

        Raises:
            InvalidOperationError: If n is out of range, or has more digits
                than mc.precision
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        if mc is None or mc.precision == 0:
            if n < 0 or n > MAX_POW_EXPONENT:
                raise InvalidOperationError("Invalid operation")
            unscaled = self._unscaled
            return _value_of(unscaled**n, check_scale(unscaled, self._scale * n))

        if n < -MAX_POW_EXPONENT or n > MAX_POW_EXPONENT:
            raise InvalidOperationError("Invalid operation")
        if n == 0:
            return BigDecimal.ONE
        mag = abs(n)
        elength = digit_length(mag)
        if elength > mc.precision:
            raise InvalidOperationError("Invalid operation")
        workmc = MathContext(mc.precision + elength + 1, mc.rounding)

        # Left-to-right binary exponentiation
        acc = BigDecimal.ONE
        for bit in bin(mag)[2:]:
            acc = acc.multiply(acc, workmc)
            if bit == "1":
                acc = acc.multiply(self, workmc)
        if n < 0:
            acc = BigDecimal.ONE.divide(acc, workmc)
        return acc._round_to(mc)

    def sqrt(self, mc: MathContext) -> BigDecimal:
        """Square root rounded according to mc.

        The preferred scale is self.scale // 2 (truncated toward zero). An
        exact result is returned at the preferred scale when mc.precision
        allows. Precision 0 or UNNECESSARY rounding require an exact root.

        Raises:
            NegativeSquareRootError: If self is negative
            RoundingNecessaryError: If an exact root was required but the
                root is not representable
            SqrtVerificationError: If the rounded root fails its self-check
        """
        sign = self.signum()
        if sign < 0:
            raise NegativeSquareRootError("Attempted square root of negative BigDecimal")
        preferred_scale = div_trunc(self._scale, 2)
        if sign == 0:
            return _zero_value_of(preferred_scale)
        zero_with_preferred = _zero_value_of(preferred_scale)

        stripped = self.strip_trailing_zeros()
        stripped_scale = stripped._scale
        if stripped._unscaled == 1 and stripped_scale % 2 == 0:
            result = _value_of(1, stripped_scale // 2)
            if result._scale != preferred_scale:
                result = result.add(zero_with_preferred, mc)
            return result

        # Normalize to working in [0.1, 10) by an even power of ten
        scale = stripped_scale - stripped.precision + 1
        scale_adjust = scale if scale % 2 == 0 else scale - 1
        working = stripped.scale_by_power_of_ten(scale_adjust)

        guess = BigDecimal.from_float(math.sqrt(working.number_value()))
        guess_precision = SQRT_GUESS_PRECISION
        original_precision = mc.precision
        if original_precision == 0:
            target_precision = stripped.precision // 2 + 1
        elif mc.rounding in _HALF_MODES:
            # Newton to 2p digits so a single final rounding is correct
            target_precision = 2 * original_precision
        else:
            target_precision = original_precision

        approx = guess
        working_precision = working.precision
        while True:
            tmp_precision = max(guess_precision, target_precision + 2, working_precision)
            mc_tmp = MathContext(tmp_precision, RoundingMode.HALF_EVEN)
            approx = BigDecimal.ONE_HALF.multiply(
                approx.add(working.divide(approx, mc_tmp), mc_tmp)
            )
            guess_precision *= 2
            if guess_precision >= target_precision + 2:
                break

        target_rm = mc.rounding
        if target_rm is RoundingMode.UNNECESSARY or original_precision == 0:
            tmp_rm = RoundingMode.DOWN if target_rm is RoundingMode.UNNECESSARY else target_rm
            result = approx.scale_by_power_of_ten(-(scale_adjust // 2)).round(
                MathContext(target_precision, tmp_rm)
            )
            if self.subtract(result.multiply(result)).signum() != 0:
                logger.debug("sqrt_not_exact", value=str(self), precision=original_precision)
                raise RoundingNecessaryError("Computed square root not exact.")
        else:
            result = approx.scale_by_power_of_ten(-(scale_adjust // 2)).round(mc)
            if target_rm in _DOWNWARD_MODES:
                if result.multiply(result).compare_to(self) > 0:
                    ulp = result.ulp()
                    # Below a power of ten the next smaller value is a tenth as far away
                    if approx.compare_to(BigDecimal.ONE) == 0:
                        ulp = ulp.multiply(BigDecimal.ONE_TENTH)
                    result = result.subtract(ulp)
            elif target_rm in _UPWARD_MODES:
                if result.multiply(result).compare_to(self) < 0:
                    result = result.add(result.ulp())

        if not self._sqrt_result_holds(result, mc):
            logger.error(
                "sqrt_verification_failed",
                value=str(self),
                result=str(result),
                precision=mc.precision,
                rounding=mc.rounding.name,
            )
            raise SqrtVerificationError(
                f"Square root of {self} under {mc} failed verification: {result}"
            )

        if result._scale != preferred_scale:
            result = result.strip_trailing_zeros().add(
                zero_with_preferred, MathContext(original_precision, RoundingMode.UNNECESSARY)
            )
        return result

    def _sqrt_result_holds(self, result: BigDecimal, mc: MathContext) -> bool:
        """Check that result is the correctly rounded square root of self.

        The neighbors of result are the adjacent values with as many digits.
        When result is a power of ten the lower neighbor is a tenth of an
        ulp away, so 1.0 sits between 0.99 and 1.1.
        """
        if result.signum() != 1 or self.signum() != 1:
            return False

        rm = mc.rounding
        ulp_up = result.ulp()
        ulp_down = ulp_up
        if result._unscaled == ten_power(result.precision - 1):
            ulp_down = ulp_up.multiply(BigDecimal.ONE_TENTH)
        square = result.multiply(result)

        if rm in _DOWNWARD_MODES:
            neighbor_up = result.add(ulp_up)
            return (
                square.compare_to(self) <= 0
                and neighbor_up.multiply(neighbor_up).compare_to(self) > 0
            )
        if rm in _UPWARD_MODES:
            neighbor_down = result.subtract(ulp_down)
            return (
                square.compare_to(self) >= 0
                and neighbor_down.multiply(neighbor_down).compare_to(self) < 0
            )
        if rm in _HALF_MODES:
            # The root lies between the midpoints to both neighbors
            mid_up = result.add(ulp_up.multiply(BigDecimal.ONE_HALF))
            mid_down = result.subtract(ulp_down.multiply(BigDecimal.ONE_HALF))
            return (
                mid_down.multiply(mid_down).compare_to(self) <= 0
                and mid_up.multiply(mid_up).compare_to(self) >= 0
            )
        return True

    # =========================================================================
    # Scale manipulation
    # =========================================================================

    def set_scale(
        self, new_scale: int, rounding: RoundingMode | int | str = RoundingMode.UNNECESSARY
    ) -> BigDecimal:
        """Return a value with the given scale, rounding discarded digits.

        Raises:
            RoundingNecessaryError: If rounding is UNNECESSARY and a non-zero
                digit would be discarded
            ScaleOverflowError: If new_scale is outside the scale range
            InvalidRoundingModeError: If rounding is not a known policy
        """
        mode = RoundingMode.coerce(rounding)
        old_scale = self._scale
        if new_scale == old_scale:
            return self
        if self.signum() == 0:
            return _zero_value_of(new_scale)
        if new_scale > old_scale:
            raise_ = check_scale_non_zero(new_scale - old_scale)
            prec = self._precision + raise_ if self._precision > 0 else 0
            return BigDecimal(multiply_power_ten(self._unscaled, raise_), new_scale, prec)
        raise_ = check_scale_non_zero(old_scale - new_scale)
        return _value_of(
            *divide_and_round_scaled(self._unscaled, ten_power(raise_), new_scale, mode, new_scale)
        )

    def move_point_left(self, n: int) -> BigDecimal:
        """Return self * 10**-n, with a non-negative scale."""
        if n == 0:
            return self
        new_scale = check_scale(self._unscaled, self._scale + n)
        num = BigDecimal(self._unscaled, new_scale, self._precision)
        return num.set_scale(0) if num._scale < 0 else num

    def move_point_right(self, n: int) -> BigDecimal:
        """Return self * 10**n, with a non-negative scale."""
        if n == 0:
            return self
        new_scale = check_scale(self._unscaled, self._scale - n)
        num = BigDecimal(self._unscaled, new_scale, self._precision)
        return num.set_scale(0) if num._scale < 0 else num

    def scale_by_power_of_ten(self, n: int) -> BigDecimal:
        """Return self * 10**n by adjusting the scale only."""
        return BigDecimal(
            self._unscaled, check_scale(self._unscaled, self._scale - n), self._precision
        )

    def strip_trailing_zeros(self) -> BigDecimal:
        """Return the member of the cohort with the fewest digits.

        Zero strips to BigDecimal.ZERO (scale 0).
        """
        if self.signum() == 0:
            return BigDecimal.ZERO
        return _value_of(
            *strip_zeros_to_match_scale(self._unscaled, self._scale, UNBOUNDED_PREFERRED_SCALE)
        )

    def ulp(self) -> BigDecimal:
        """Unit in the last place: 1 * 10**-scale."""
        return _value_of(1, self._scale, 1)

    # =========================================================================
    # Comparison
    # =========================================================================

    def _compare_magnitude(self, other: BigDecimal) -> int:
        xs = self._unscaled
        ys = other._unscaled
        if xs == 0:
            return 0 if ys == 0 else -1
        if ys == 0:
            return 1
        sdiff = self._scale - other._scale
        if sdiff != 0:
            # Position of the leading digit decides unless it is the same
            xae = self.precision - self._scale
            yae = other.precision - other._scale
            if xae < yae:
                return -1
            if xae > yae:
                return 1
            if sdiff < 0:
                xs = multiply_power_ten(xs, -sdiff)
            else:
                ys = multiply_power_ten(ys, sdiff)
        return compare_magnitude(xs, ys)

    def compare_to(self, other: BigDecimal | int | str) -> int:
        """Numerical comparison ignoring scale: returns -1, 0 or 1."""
        other = _operand(other)
        if self._scale == other._scale:
            xs = self._unscaled
            ys = other._unscaled
            return (xs > ys) - (xs < ys)
        xsign = self.signum()
        ysign = other.signum()
        if xsign != ysign:
            return 1 if xsign > ysign else -1
        if xsign == 0:
            return 0
        cmp = self._compare_magnitude(other)
        return cmp if xsign > 0 else -cmp

    def equals(self, other: object) -> bool:
        """True if other is a BigDecimal with the same unscaled value and scale."""
        if self is other:
            return True
        if not isinstance(other, BigDecimal):
            return False
        return self._scale == other._scale and self._unscaled == other._unscaled

    def min(self, other: BigDecimal | int | str) -> BigDecimal:
        """Smaller of self and other; self when they compare equal."""
        other = _operand(other)
        return self if self.compare_to(other) <= 0 else other

    def max(self, other: BigDecimal | int | str) -> BigDecimal:
        """Larger of self and other; self when they compare equal."""
        other = _operand(other)
        return self if self.compare_to(other) >= 0 else other

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_string(self) -> str:
        """Scientific notation when an exponent is needed ("1.23E+7")."""
        text = self._string_cache
        if text is None:
            text = layout_chars(self._unscaled, self._scale, True)
            self._string_cache = text
        return text

    def to_engineering_string(self) -> str:
        """Like to_string(), with the exponent a multiple of three."""
        return layout_chars(self._unscaled, self._scale, False)

    def to_plain_string(self) -> str:
        """Text without an exponent field."""
        return to_plain_string(self._unscaled, self._scale)

    def number_value(self) -> float:
        """Nearest float to the value."""
        compact = self._int_compact
        scale = self._scale
        if compact is not None and -len(TEN_POWERS_TABLE) < scale < len(TEN_POWERS_TABLE):
            if scale == 0:
                return float(compact)
            if scale > 0:
                return compact / TEN_POWERS_TABLE[scale]
            return float(compact * TEN_POWERS_TABLE[-scale])
        return float(self.to_string())

    def to_int(self) -> int:
        """Integer part, truncated toward zero."""
        if self.precision - self._scale <= 0:
            return 0
        return self.set_scale(0, RoundingMode.DOWN)._unscaled

    def to_int_exact(self) -> int:
        """Integer value.

        Raises:
            RoundingNecessaryError: If the value has a non-zero fraction
        """
        return self.set_scale(0, RoundingMode.UNNECESSARY)._unscaled

    def to_decimal(self) -> Decimal:
        """Exact decimal.Decimal with the same coefficient and exponent."""
        return Decimal(self.to_string())

    # =========================================================================
    # Python protocol
    # =========================================================================

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigDecimal('{self.to_string()}')"

    def __hash__(self) -> int:
        if self._scale == 0:
            return hash(self._unscaled)
        return hash((self._unscaled, self._scale))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BigDecimal):
            return self.equals(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self._scale == 0 and self._unscaled == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        other_bd = _coerce_comparand(other)
        if other_bd is None:
            return NotImplemented
        return self.compare_to(other_bd) < 0

    def __le__(self, other: object) -> bool:
        other_bd = _coerce_comparand(other)
        if other_bd is None:
            return NotImplemented
        return self.compare_to(other_bd) <= 0

    def __gt__(self, other: object) -> bool:
        other_bd = _coerce_comparand(other)
        if other_bd is None:
            return NotImplemented
        return self.compare_to(other_bd) > 0

    def __ge__(self, other: object) -> bool:
        other_bd = _coerce_comparand(other)
        if other_bd is None:
            return NotImplemented
        return self.compare_to(other_bd) >= 0

    def __bool__(self) -> bool:
        return self.signum() != 0

    def __float__(self) -> float:
        return self.number_value()

    def __int__(self) -> int:
        return self.to_int()

    def __neg__(self) -> BigDecimal:
        return self.negate()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        return self.abs()

    def __add__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.add(other_bd)

    def __radd__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.add(self)

    def __sub__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.subtract(other_bd)

    def __rsub__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.subtract(self)

    def __mul__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.multiply(other_bd)

    def __rmul__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.multiply(self)

    def __truediv__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.divide(other_bd)

    def __rtruediv__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.divide(self)

    def __floordiv__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.divide_to_integral_value(other_bd)

    def __rfloordiv__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.divide_to_integral_value(self)

    def __mod__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.remainder(other_bd)

    def __rmod__(self, other: object) -> BigDecimal:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.remainder(self)

    def __divmod__(self, other: object) -> tuple[BigDecimal, BigDecimal]:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return self.divide_and_remainder(other_bd)

    def __rdivmod__(self, other: object) -> tuple[BigDecimal, BigDecimal]:
        other_bd = _coerce_operand(other)
        if other_bd is None:
            return NotImplemented
        return other_bd.divide_and_remainder(self)

    def __pow__(self, n: object, modulo: object = None) -> BigDecimal:
        if modulo is not None or isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return self.pow(n)


# =============================================================================
# Value cache and helpers
# =============================================================================


def _value_of(unscaled: int, scale: int = 0, precision: int = 0) -> BigDecimal:
    """Build a value, reusing the cached small integers and zeros."""
    if scale == 0 and 0 <= unscaled <= 10:
        return _ZERO_THROUGH_TEN[unscaled]
    if unscaled == 0:
        return _zero_value_of(scale)
    return BigDecimal(unscaled, scale, precision)


def _zero_value_of(scale: int) -> BigDecimal:
    if 0 <= scale < len(_ZERO_SCALED_BY):
        return _ZERO_SCALED_BY[scale]
    return BigDecimal(0, scale, 1)


def _pre_align(
    lhs: BigDecimal, augend: BigDecimal, padding: int, mc: MathContext
) -> tuple[BigDecimal, BigDecimal]:
    """Shrink an operand that lies entirely below the rounding position.

    When the smaller-magnitude operand cannot affect any retained digit, it
    is replaced by a one-digit stand-in of the same sign placed just below
    the rounding position. The rounded sum is unchanged and the alignment
    stays cheap however far apart the two scales are.
    """
    if padding < 0:
        big, small = lhs, augend
    else:
        big, small = augend, lhs

    est_result_ulp_scale = big._scale - big.precision + mc.precision
    small_high_digit_pos = small._scale - small.precision + 1
    if small_high_digit_pos > big._scale + 2 and small_high_digit_pos > est_result_ulp_scale + 2:
        small = _value_of(
            small.signum(),
            check_scale_non_zero(max(big._scale, est_result_ulp_scale) + 3),
        )
    return big, small


def _coerce_operand(value: object) -> BigDecimal | None:
    """Convert an operator operand, or return None if its type is not accepted."""
    if isinstance(value, BigDecimal):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return BigDecimal.from_bigint(value)
    if isinstance(value, str):
        return BigDecimal.from_str(value)
    return None


def _coerce_comparand(value: object) -> BigDecimal | None:
    """Convert an ordering operand; like ==, str is not accepted."""
    if isinstance(value, str):
        return None
    return _coerce_operand(value)


def _operand(value: object) -> BigDecimal:
    result = _coerce_operand(value)
    if result is None:
        raise TypeError(f"Expected BigDecimal, int or str, got {type(value).__name__}")
    return result


_ZERO_THROUGH_TEN = tuple(BigDecimal(i, 0, 1 if i < 10 else 2) for i in range(11))
_ZERO_SCALED_BY = tuple(BigDecimal(0, scale, 1) for scale in range(16))

BigDecimal.ZERO = _ZERO_THROUGH_TEN[0]
BigDecimal.ONE = _ZERO_THROUGH_TEN[1]
BigDecimal.TWO = _ZERO_THROUGH_TEN[2]
BigDecimal.TEN = _ZERO_THROUGH_TEN[10]
BigDecimal.ONE_TENTH = BigDecimal(1, 1, 1)
BigDecimal.ONE_HALF = BigDecimal(5, 1, 1)


def Big(
    value: BigDecimal | int | float | str | Decimal,
    scale: int | None = None,
    mc: MathContext | None = None,
) -> BigDecimal:
    """Create a BigDecimal from whatever value is at hand.

    Dispatches on the type of value: str is parsed, int takes the native
    path when it is compact and the arbitrary-precision path otherwise,
    float uses its shortest repr, Decimal and BigDecimal are copied. scale
    applies to int only; mc rounds the result.

    Examples:
        Big("1.50")            # 1.50
        Big(150, 2)            # 1.50
        Big(2**80)             # 1208925819614629174706176
        Big("3.14159", mc=MathContext(3))  # 3.14
    """
    if isinstance(value, bool):
        raise TypeError("Cannot create a BigDecimal from bool")
    if isinstance(value, int):
        if is_compact(value) and (scale is None or mc is None):
            return BigDecimal.from_int(value, scale, mc)
        return BigDecimal.from_bigint(value, scale, mc)
    if scale is not None:
        raise InvalidOperationError(
            f"scale is only accepted with int values, got {type(value).__name__}"
        )
    if isinstance(value, str):
        return BigDecimal.from_str(value, mc)
    if isinstance(value, BigDecimal):
        return BigDecimal.copy_of(value, mc)
    if isinstance(value, float):
        result = BigDecimal.from_float(value)
    elif isinstance(value, Decimal):
        result = BigDecimal.from_decimal(value)
    else:
        raise TypeError(f"Cannot create a BigDecimal from {type(value).__name__}")
    return result if mc is None else result._round_to(mc)
