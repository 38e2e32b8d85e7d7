"""pydantic field types for models that carry decimal values.

DecimalString validates decimal text (or an int, or a BigDecimal) into a
BigDecimal and always serializes back to text, so values cross JSON
boundaries without passing through binary floating point.
"""

from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from bigdecimal.core import BigDecimal
from bigdecimal.errors import NumberFormatError
from bigdecimal.parsing import DECIMAL_PATTERN


def validate_decimal(value: Any) -> BigDecimal:
    """Validate that a value is a decimal number given exactly.

    Args:
        value: BigDecimal, decimal string or int

    Returns:
        The value as a BigDecimal

    Raises:
        ValueError: If value is a float, another type, or malformed text
    """
    if isinstance(value, BigDecimal):
        return value

    # Accept int directly (bool is not a number here)
    if isinstance(value, int) and not isinstance(value, bool):
        return BigDecimal.from_bigint(value)

    if not isinstance(value, str):
        raise ValueError(f"Decimal must be string or int, got {type(value).__name__}")

    try:
        return BigDecimal.from_str(value)
    except NumberFormatError as err:
        raise ValueError(f"Invalid decimal string '{value}': {err}") from err


def serialize_decimal(value: BigDecimal) -> str:
    """Text form of a decimal (scientific notation when an exponent is needed)."""
    return value.to_string()


# Arbitrary-precision decimal, validated from text and serialized as text
DecimalString = Annotated[
    BigDecimal,
    PlainValidator(validate_decimal),
    PlainSerializer(serialize_decimal, return_type=str),
    WithJsonSchema(
        {
            "type": "string",
            "pattern": DECIMAL_PATTERN,
            "description": "Arbitrary-precision decimal number as string",
        }
    ),
]
