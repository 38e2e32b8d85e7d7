"""Tests for the pydantic DecimalString field type."""

import pytest
from pydantic import BaseModel, ValidationError

from bigdecimal import Big, BigDecimal
from bigdecimal.types import DecimalString, serialize_decimal, validate_decimal


class Invoice(BaseModel):
    """Small model carrying decimal amounts."""

    amount: DecimalString
    tax: DecimalString | None = None


class TestValidateDecimal:
    """Tests for validate_decimal."""

    def test_string(self):
        """Decimal text becomes a BigDecimal with its scale."""
        result = validate_decimal("1.50")
        assert isinstance(result, BigDecimal)
        assert result.scale == 2
        assert result == Big("1.50")

    def test_int(self):
        """Integers of any size are accepted."""
        assert validate_decimal(2**80).unscaled_value == 2**80

    def test_passthrough(self):
        """A BigDecimal is returned unchanged."""
        value = Big("3.25")
        assert validate_decimal(value) is value

    @pytest.mark.parametrize("value", [1.5, True, None, [1]])
    def test_rejected_types(self, value):
        """Floats and non-numeric types are rejected."""
        with pytest.raises(ValueError):
            validate_decimal(value)

    def test_malformed_text(self):
        """Malformed text is rejected with the parser message."""
        with pytest.raises(ValueError, match="Invalid decimal string"):
            validate_decimal("1.2.3")

    def test_serialize(self):
        """Serialization uses the scientific text form."""
        assert serialize_decimal(Big("1.23E+10")) == "1.23E+10"


class TestDecimalStringField:
    """Tests for DecimalString inside a model."""

    def test_validates_from_json(self):
        """JSON strings become BigDecimal fields."""
        invoice = Invoice.model_validate_json('{"amount": "19.99", "tax": "1.60"}')
        assert invoice.amount == Big("19.99")
        assert invoice.tax == Big("1.60")

    def test_dump_keeps_scale(self):
        """Dumping keeps trailing zeros."""
        invoice = Invoice(amount="10.50")
        assert invoice.model_dump() == {"amount": "10.50", "tax": None}
        assert invoice.model_dump_json() == '{"amount":"10.50","tax":null}'

    def test_invalid_field(self):
        """Bad values raise ValidationError."""
        with pytest.raises(ValidationError):
            Invoice(amount="ten")
        with pytest.raises(ValidationError):
            Invoice(amount=10.5)

    def test_json_schema(self):
        """The schema documents a string with the decimal grammar."""
        schema = Invoice.model_json_schema()
        amount = schema["properties"]["amount"]
        assert amount["type"] == "string"
        assert "pattern" in amount
