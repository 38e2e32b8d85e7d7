"""Decimal value to text.

Three renderings of a (unscaled, scale) pair:

- scientific, used by str(): plain digits when the exponent is small,
  otherwise one leading digit and an "E+n"/"E-n" suffix
- engineering: like scientific, with the exponent forced to a multiple of 3
- plain: never uses an exponent
"""

from __future__ import annotations

from bigdecimal.constants import DIGIT_ONES, DIGIT_TENS, MIN_PLAIN_ADJUSTED_EXPONENT
from bigdecimal.math.integers import check_scale_non_zero, int_to_str, is_compact

__all__ = [
    "layout_chars",
    "to_plain_string",
]


def layout_chars(unscaled: int, scale: int, sci: bool) -> str:
    """Render a value in scientific (sci=True) or engineering notation.

    Examples:
        layout_chars(123, 2, True) == "1.23"
        layout_chars(123, -5, True) == "1.23E+7"
        layout_chars(123, -5, False) == "12.3E+6"
        layout_chars(0, -1, False) == "0.00E+3"
    """
    if scale == 0:
        return int_to_str(unscaled)

    # Two decimals on a small non-negative value ("currency")
    if scale == 2 and unscaled >= 0 and is_compact(unscaled):
        high, low = divmod(unscaled, 100)
        return str(high) + "." + DIGIT_TENS[low] + DIGIT_ONES[low]

    coeff = int_to_str(abs(unscaled))
    coeff_len = len(coeff)
    adjusted = -scale + (coeff_len - 1)
    parts: list[str] = ["-"] if unscaled < 0 else []

    if scale >= 0 and adjusted >= MIN_PLAIN_ADJUSTED_EXPONENT:
        pad = scale - coeff_len
        if pad >= 0:
            parts += ["0.", "0" * pad, coeff]
        else:
            parts += [coeff[:-pad], ".", coeff[-pad:]]
        return "".join(parts)

    if sci:
        parts.append(coeff[0])
        if coeff_len > 1:
            parts += [".", coeff[1:]]
    else:
        sig = adjusted % 3
        adjusted -= sig
        sig += 1
        if unscaled == 0:
            if sig == 1:
                parts.append("0")
            elif sig == 2:
                parts.append("0.00")
                adjusted += 3
            else:
                parts.append("0.0")
                adjusted += 3
        elif sig >= coeff_len:
            parts += [coeff, "0" * (sig - coeff_len)]
        else:
            parts += [coeff[:sig], ".", coeff[sig:]]

    if adjusted != 0:
        parts.append("E+" if adjusted > 0 else "E")
        parts.append(str(adjusted))
    return "".join(parts)


def to_plain_string(unscaled: int, scale: int) -> str:
    """Render a value without an exponent field.

    Examples:
        to_plain_string(123, -3) == "123000"
        to_plain_string(-5, 3) == "-0.005"
        to_plain_string(0, -4) == "0"
    """
    if scale == 0:
        return int_to_str(unscaled)
    if scale < 0:
        if unscaled == 0:
            return "0"
        trailing = check_scale_non_zero(-scale)
        return int_to_str(unscaled) + "0" * trailing

    digits = int_to_str(abs(unscaled))
    sign = "-" if unscaled < 0 else ""
    insertion_point = len(digits) - scale
    if insertion_point == 0:
        return sign + "0." + digits
    if insertion_point > 0:
        return sign + digits[:insertion_point] + "." + digits[insertion_point:]
    return sign + "0." + "0" * -insertion_point + digits
