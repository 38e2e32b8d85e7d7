"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: reference tables (rounding, stripping zeros)
- factories: value and context factory functions
"""

from tests.helpers.constants import (
    ROUNDING_INPUTS,
    ROUNDING_TABLE,
    STRIP_ZEROS_CASES,
    rounding_cases,
)
from tests.helpers.factories import D, make_context

__all__ = [
    # Constants
    "ROUNDING_INPUTS",
    "ROUNDING_TABLE",
    "STRIP_ZEROS_CASES",
    "rounding_cases",
    # Factories
    "D",
    "make_context",
]
