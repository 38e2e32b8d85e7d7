"""Tests for the rounding engine."""

import pytest

from bigdecimal import MathContext, RoundingMode, RoundingNecessaryError, ScaleOverflowError
from bigdecimal.constants import MIN_SCALE
from bigdecimal.math.rounding import (
    common_need_increment,
    div_trunc,
    divide_and_round,
    divide_and_round_scaled,
    do_round,
    need_increment,
    strip_zeros_to_match_scale,
)
from tests.helpers import ROUNDING_TABLE


class TestDivTrunc:
    """Tests for truncating integer division."""

    def test_positive_division(self):
        """Positive division matches floor division."""
        assert div_trunc(100, 7) == 14

    def test_negative_truncates_toward_zero(self):
        """Negative quotients truncate toward zero."""
        assert div_trunc(-7, 3) == -2
        assert div_trunc(7, -3) == -2
        assert div_trunc(-7, -3) == 2

    def test_division_by_zero_raises(self):
        """Zero divisor raises ZeroDivisionError."""
        with pytest.raises(ZeroDivisionError):
            div_trunc(1, 0)


class TestNeedIncrement:
    """Tests for the increment decision."""

    def test_unnecessary_raises(self):
        """UNNECESSARY never decides, it fails."""
        with pytest.raises(RoundingNecessaryError, match="Rounding necessary"):
            common_need_increment(RoundingMode.UNNECESSARY, 1, -1, False)

    @pytest.mark.parametrize(
        "mode,qsign,expected",
        [
            (RoundingMode.UP, 1, True),
            (RoundingMode.UP, -1, True),
            (RoundingMode.DOWN, 1, False),
            (RoundingMode.CEILING, 1, True),
            (RoundingMode.CEILING, -1, False),
            (RoundingMode.FLOOR, 1, False),
            (RoundingMode.FLOOR, -1, True),
        ],
    )
    def test_directed_modes(self, mode, qsign, expected):
        """Directed modes ignore the size of the fraction."""
        assert common_need_increment(mode, qsign, -1, False) is expected

    def test_half_modes_on_tie(self):
        """Ties split the half modes."""
        assert common_need_increment(RoundingMode.HALF_UP, 1, 0, False)
        assert not common_need_increment(RoundingMode.HALF_DOWN, 1, 0, True)
        assert common_need_increment(RoundingMode.HALF_EVEN, 1, 0, True)
        assert not common_need_increment(RoundingMode.HALF_EVEN, 1, 0, False)

    def test_tie_detection_with_odd_divisor(self):
        """2*|r| against |divisor| never reports a false tie."""
        # 4/7: remainder 4 is more than half of 7
        assert need_increment(7, RoundingMode.HALF_DOWN, 1, 0, 4)
        # 3/7: remainder 3 is less than half of 7
        assert not need_increment(7, RoundingMode.HALF_UP, 1, 0, 3)


class TestDivideAndRound:
    """Tests for divide_and_round against the one-digit rounding table."""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_rounding_table(self, mode):
        """Each mode produces the reference row for inputs x10."""
        inputs = (55, 25, 16, 11, 10, -10, -11, -16, -25, -55)
        for numerator, expected in zip(inputs, ROUNDING_TABLE[mode]):
            if expected is None:
                with pytest.raises(RoundingNecessaryError):
                    divide_and_round(numerator, 10, mode)
            else:
                assert divide_and_round(numerator, 10, mode) == int(expected)

    def test_negative_divisor(self):
        """The quotient sign comes from both operands."""
        assert divide_and_round(55, -10, RoundingMode.HALF_UP) == -6
        assert divide_and_round(-55, -10, RoundingMode.FLOOR) == 5

    def test_large_operands(self):
        """Arbitrary-precision operands round the same way."""
        big = 10**40
        assert divide_and_round(5 * big + 1, 10 * big, RoundingMode.HALF_DOWN) == 1
        assert divide_and_round(5 * big, 10 * big, RoundingMode.HALF_DOWN) == 0


class TestStripZeros:
    """Tests for strip_zeros_to_match_scale."""

    @pytest.mark.parametrize(
        "value,scale,preferred,expected",
        [
            (1000, 5, 2, (1, 2)),
            (1200, 3, -10, (12, 1)),
            (-500, 0, -5, (-5, -2)),
            (105, 3, 0, (105, 3)),
            (7, 3, 0, (7, 3)),
        ],
    )
    def test_strip(self, value, scale, preferred, expected):
        """Zeros are removed only down to the preferred scale."""
        assert strip_zeros_to_match_scale(value, scale, preferred) == expected

    def test_underflow_raises(self):
        """Stripping below the minimum scale fails."""
        with pytest.raises(ScaleOverflowError):
            strip_zeros_to_match_scale(100, MIN_SCALE, MIN_SCALE - 5)


class TestDivideAndRoundScaled:
    """Tests for divide_and_round_scaled."""

    def test_exact_quotient_moves_to_preferred(self):
        """Exact quotients shed trailing zeros."""
        assert divide_and_round_scaled(1000, 10, 5, RoundingMode.HALF_UP, 2) == (1, 3)

    def test_inexact_quotient_keeps_scale(self):
        """Inexact quotients keep the requested scale."""
        assert divide_and_round_scaled(10, 3, 4, RoundingMode.HALF_UP, 0) == (3, 4)


class TestDoRound:
    """Tests for precision reduction."""

    def test_reduces_digits(self):
        """Digits beyond the precision are rounded away."""
        assert do_round(123456, 2, MathContext(3)) == (123, -1, 3)

    def test_carry_needs_second_pass(self):
        """A carry into a new digit is rounded again."""
        assert do_round(9999, 0, MathContext(2)) == (10, -3, 2)

    def test_unlimited_is_identity(self):
        """Precision 0 leaves the value alone."""
        assert do_round(123456, 2, MathContext(0)) == (123456, 2, 6)

    def test_short_value_is_identity(self):
        """Values already within precision are unchanged."""
        assert do_round(-12, 1, MathContext(5)) == (-12, 1, 2)

    def test_unnecessary_raises_on_loss(self):
        """UNNECESSARY fails when a non-zero digit is dropped."""
        with pytest.raises(RoundingNecessaryError):
            do_round(1234, 0, MathContext(3, RoundingMode.UNNECESSARY))
        assert do_round(1230, 0, MathContext(3, RoundingMode.UNNECESSARY)) == (123, -1, 3)
