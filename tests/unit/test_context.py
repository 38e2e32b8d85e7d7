"""Tests for RoundingMode and MathContext."""

import dataclasses

import pytest

from bigdecimal import (
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    MC,
    UNLIMITED,
    InvalidPrecisionError,
    InvalidRoundingModeError,
    MathContext,
    RoundingMode,
)


class TestRoundingMode:
    """Tests for RoundingMode resolution."""

    def test_eight_policies(self):
        """Exactly eight policies with stable integer values."""
        assert len(RoundingMode) == 8
        assert RoundingMode.UP.value == 0
        assert RoundingMode.UNNECESSARY.value == 7

    @pytest.mark.parametrize(
        "value,expected",
        [
            (RoundingMode.FLOOR, RoundingMode.FLOOR),
            (6, RoundingMode.HALF_EVEN),
            ("half_even", RoundingMode.HALF_EVEN),
            (" CEILING ", RoundingMode.CEILING),
            ("Down", RoundingMode.DOWN),
        ],
    )
    def test_coerce(self, value, expected):
        """Members, integer values and names all resolve."""
        assert RoundingMode.coerce(value) is expected

    @pytest.mark.parametrize("value", [8, -1, "sideways", True, 1.5, None])
    def test_coerce_invalid(self, value):
        """Anything else is rejected."""
        with pytest.raises(InvalidRoundingModeError):
            RoundingMode.coerce(value)


class TestMathContext:
    """Tests for MathContext construction and helpers."""

    def test_default_rounding_is_half_up(self):
        """A context built with only a precision rounds HALF_UP."""
        mc = MathContext(5)
        assert mc.rounding is RoundingMode.HALF_UP
        assert MathContext.DEFAULT_ROUNDING is RoundingMode.HALF_UP

    def test_rounding_names_accepted(self):
        """The rounding argument is coerced."""
        assert MathContext(5, "floor").rounding is RoundingMode.FLOOR
        assert MathContext(5, 2).rounding is RoundingMode.CEILING

    def test_negative_precision_raises(self):
        """Precision below zero is rejected."""
        with pytest.raises(InvalidPrecisionError, match="cannot be less than 0"):
            MathContext(-1)

    @pytest.mark.parametrize("precision", [True, 1.0, "3", None])
    def test_non_int_precision_raises(self, precision):
        """Precision must be a plain int."""
        with pytest.raises(InvalidPrecisionError):
            MathContext(precision)

    def test_invalid_rounding_raises(self):
        """Unknown rounding modes are rejected at construction."""
        with pytest.raises(InvalidRoundingModeError):
            MathContext(3, 99)

    def test_invalid_context_is_value_error(self):
        """Context errors are ValueErrors too."""
        with pytest.raises(ValueError):
            MathContext(-5)

    def test_frozen(self):
        """Contexts are immutable."""
        mc = MathContext(3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            mc.precision = 4  # type: ignore[misc]

    def test_equality_and_hash(self):
        """Contexts compare by value and can be dict keys."""
        assert MathContext(3) == MathContext(3, RoundingMode.HALF_UP)
        assert MathContext(3) != MathContext(3, RoundingMode.HALF_EVEN)
        assert len({MathContext(3), MathContext(3, "half_up")}) == 1

    def test_with_helpers(self):
        """with_precision and with_rounding return modified copies."""
        mc = MathContext(3, RoundingMode.FLOOR)
        assert mc.with_precision(7) == MathContext(7, RoundingMode.FLOOR)
        assert mc.with_rounding("ceiling") == MathContext(3, RoundingMode.CEILING)
        assert mc == MathContext(3, RoundingMode.FLOOR)

    def test_is_unlimited(self):
        """Precision 0 means unlimited."""
        assert MathContext(0).is_unlimited
        assert not MathContext(1).is_unlimited

    def test_str(self):
        """Text form names precision and rounding mode."""
        assert str(MathContext(7, RoundingMode.HALF_EVEN)) == "precision=7 roundingMode=HALF_EVEN"

    def test_alias(self):
        """MC is an alias for MathContext."""
        assert MC is MathContext


class TestPresets:
    """Tests for the predefined contexts."""

    @pytest.mark.parametrize(
        "mc,precision,rounding",
        [
            (UNLIMITED, 0, RoundingMode.HALF_UP),
            (DECIMAL32, 7, RoundingMode.HALF_EVEN),
            (DECIMAL64, 16, RoundingMode.HALF_EVEN),
            (DECIMAL128, 34, RoundingMode.HALF_EVEN),
        ],
    )
    def test_presets(self, mc, precision, rounding):
        """Presets carry the IEEE 754 decimal precisions."""
        assert mc.precision == precision
        assert mc.rounding is rounding
