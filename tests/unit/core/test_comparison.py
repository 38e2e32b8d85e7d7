"""Tests for comparison, equality and hashing."""

import operator

import pytest

from bigdecimal import Big


class TestCompareTo:
    """Tests for compare_to()."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("2.0", "2.00", 0),
            ("1", "2", -1),
            ("-1", "0.5", -1),
            ("0.5", "-1", 1),
            ("1E+3", "999.999", 1),
            ("-1E+3", "-999.999", -1),
            ("0", "0.000", 0),
            ("0.001", "0", 1),
            ("123.45", "123.450000000000000000001", -1),
        ],
    )
    def test_compare(self, a, b, expected):
        """compare_to orders by numerical value only."""
        assert Big(a).compare_to(Big(b)) == expected

    def test_large_values(self):
        """Arbitrary-precision magnitudes compare correctly."""
        assert Big(10**30).compare_to(Big("9.99E+29")) == 1
        assert Big(10**30).compare_to(Big("1.000E+30")) == 0

    def test_accepts_int_and_str(self):
        """Operands are coerced."""
        assert Big("2.50").compare_to("2.5") == 0
        assert Big("2.50").compare_to(3) == -1


class TestEquals:
    """Tests for equals() and ==."""

    def test_cohort_members_are_not_equal(self):
        """2.0 and 2.00 compare equal but are different values."""
        assert Big("2.0").compare_to(Big("2.00")) == 0
        assert not Big("2.0").equals(Big("2.00"))
        assert Big("2.0") != Big("2.00")

    def test_same_representation_equal(self):
        """Same unscaled value and scale are equal."""
        assert Big("2.00").equals(Big(200, 2))
        assert Big("2.00") == Big(200, 2)

    def test_int_equality(self):
        """An int equals a scale-0 value with the same magnitude."""
        assert Big(5) == 5
        assert Big("5.0") != 5
        assert Big(2**80) == 2**80

    def test_other_types_not_equal(self):
        """Unrelated types are never equal."""
        assert Big(1) != "1"
        assert Big(1) != 1.0
        assert not Big(1).equals(1)


class TestHash:
    """Tests for hashing."""

    def test_consistent_with_equality(self):
        """Equal values hash alike, including the int case."""
        assert hash(Big("1.50")) == hash(Big(150, 2))
        assert hash(Big(5)) == hash(5)

    def test_cohort_members_distinct_in_sets(self):
        """Different scales stay distinct set members."""
        assert len({Big("1.0"), Big("1.00"), Big("1.0")}) == 2


class TestOrdering:
    """Tests for <, <=, >, >=, min and max."""

    def test_operators(self):
        """Ordering operators use compare_to."""
        assert Big("1.5") < Big(2)
        assert Big("2.0") <= Big("2.00")
        assert Big("2.0") >= Big("2.00")
        assert Big("-1") > Big("-1.5")
        assert Big("1.5") < 2
        assert 2 > Big("1.5")

    def test_unsupported_operand(self):
        """Comparing with a float raises TypeError."""
        with pytest.raises(TypeError):
            Big(1) < 1.5  # noqa: B015

    @pytest.mark.parametrize("op", [operator.lt, operator.le, operator.gt, operator.ge])
    def test_str_operand_rejected(self, op):
        """Ordering refuses str just as == never matches it."""
        assert Big("1") != "1"
        with pytest.raises(TypeError):
            op(Big("1"), "1")

    def test_compare_to_still_parses_str(self):
        """The named method keeps accepting decimal text."""
        assert Big("1.5").compare_to("1.49") == 1

    def test_sorted(self):
        """Values sort numerically."""
        values = [Big("10"), Big("-2.5"), Big("0.001"), Big("1E+2")]
        assert [str(v) for v in sorted(values)] == ["-2.5", "0.001", "10", "1E+2"]

    def test_min_max_ties_return_self(self):
        """On a tie the receiver is returned."""
        a = Big("2.0")
        b = Big("2.00")
        assert a.min(b) is a
        assert a.max(b) is a
        assert b.max(a) is b

    def test_min_max(self):
        """min and max pick by value."""
        assert str(Big("1.5").min("1.25")) == "1.25"
        assert str(Big("1.5").max(2)) == "2"
