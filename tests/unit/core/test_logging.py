"""Tests for structured log events on failure paths."""

import pytest

from bigdecimal import (
    Big,
    BigDecimal,
    DivisionImpossibleError,
    MathContext,
    NonTerminatingExpansionError,
    RoundingNecessaryError,
    SqrtVerificationError,
)


class TestFailureEvents:
    """Tests that failures emit one structured event each."""

    def test_non_terminating_division(self, log_output):
        """An exact division failure is logged with its operands."""
        with pytest.raises(NonTerminatingExpansionError):
            Big(1).divide(Big(3))
        assert log_output == [
            {
                "event": "non_terminating_division",
                "dividend": "1",
                "divisor": "3",
                "log_level": "debug",
            }
        ]

    def test_division_impossible(self, log_output):
        """A too-wide integral quotient is logged with the precision."""
        with pytest.raises(DivisionImpossibleError):
            Big(12345).divide_to_integral_value(Big(1), MathContext(2))
        assert len(log_output) == 1
        assert log_output[0]["event"] == "division_impossible"
        assert log_output[0]["precision"] == 2

    def test_sqrt_not_exact(self, log_output):
        """An inexact root where one was required is logged."""
        with pytest.raises(RoundingNecessaryError):
            Big(2).sqrt(MathContext(0))
        assert [entry["event"] for entry in log_output] == ["sqrt_not_exact"]

    def test_sqrt_verification_failure(self, log_output, monkeypatch):
        """A failed self-check is logged at error level before raising."""
        monkeypatch.setattr(BigDecimal, "_sqrt_result_holds", lambda self, result, mc: False)
        with pytest.raises(SqrtVerificationError):
            Big(2).sqrt(MathContext(10))
        assert len(log_output) == 1
        entry = log_output[0]
        assert entry["event"] == "sqrt_verification_failed"
        assert entry["log_level"] == "error"
        assert entry["rounding"] == "HALF_UP"

    def test_success_is_silent(self, log_output):
        """Successful operations do not log."""
        Big(1).divide(Big(8))
        Big(2).sqrt(MathContext(10))
        Big("1.5").set_scale(0, "half_up")
        assert log_output == []
