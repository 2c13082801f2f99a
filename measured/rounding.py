"""
Significant-digit rounding for value and uncertainty display.

Values are rounded half-up, uncertainties are rounded up (away from zero) so a
displayed error never understates the real one. Binary floats rarely sit exactly
on a decimal digit boundary, so both roundings accept a relative tolerance that
absorbs representation noise, e.g. 0.07 * 100 == 7.000000000000001.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value

RoundingMode = Literal["half_up", "nearest", "up"]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FloatText:
    """
    Shortest round-trip text of a float together with its notation.

    Python switches repr() to exponential notation when the leading digit lies
    below 10⁻⁴ or at 10¹⁶ and above. The flag is derived from the decimal exponent
    rather than searched for in the text, and travels with the text to pad_decimal().

    Attributes:
        text: repr() of the number, e.g. "0.7", "1e-07", "1234.0".
        exponential: True if text is in exponential notation.

    Examples:
        >>> FloatText.of(0.0001)
        FloatText(text='0.0001', exponential=False)
        >>> FloatText.of(0.00001)
        FloatText(text='1e-05', exponential=True)
    """
    text: str
    exponential: bool = False

    @classmethod
    def of(cls, number: float) -> Self:
        number = float(number)
        text = repr(number)
        if number == 0 or not math.isfinite(number):
            return cls(text=text, exponential=False)
        exponent = Decimal(text).adjusted()
        return cls(text=text, exponential=not (-4 <= exponent < 16))

    def __str__(self) -> str:
        return self.text


# Methods --------------------------------------------------------------------------------------------------------------

def magnitude(number: int | float) -> int:
    """
    Order of magnitude, the decimal position of the leading digit.

    Returns floor(log10(|number|)) and 0 for zero.

    Examples:
        >>> magnitude(8.4), magnitude(0.7), magnitude(1234.5), magnitude(0)
        (0, -1, 3, 0)
    """
    if not isinstance(number, (int, float)) or isinstance(number, bool):
        raise TypeError(f"number must be int | float, but got {fmt_type(number)}")
    if number == 0:
        return 0
    return math.floor(math.log10(abs(number)))


def leading_digit(number: float, *, first_digit: int | None = None, tolerance: float = 1e-14) -> int:
    """
    Leading decimal digit of a number, 0 for zero.

    A mantissa within the relative tolerance below the next integer counts as that
    integer, so 0.3 / 0.1 == 2.9999999999999996 still reports 3.

    Args:
        number: The number to inspect.
        first_digit: Precomputed magnitude() of number, if known.
        tolerance: Relative tolerance for representation noise.
    """
    if number == 0:
        return 0
    lead = magnitude(number) if first_digit is None else first_digit
    mantissa = abs(number) / 10.0 ** lead
    digit = math.floor(mantissa)
    if digit + 1 - mantissa < tolerance * mantissa:
        digit += 1
    # 9.99... promoted past the decade
    return 1 if digit >= 10 else digit


def round_significant(number: float,
                      digits: int,
                      *,
                      mode: RoundingMode = "half_up",
                      first_digit: int | None = None,
                      tolerance: float = 0.0) -> float:
    """
    Round a number to a count of significant digits.

    Modes:
        - "half_up": round to nearest, ties toward +infinity.
        - "nearest": round to nearest, ties to even.
        - "up": round away from zero.

    Digits of zero or below place the last kept digit left of the leading digit;
    the result then is 0.0, or one unit of that position in "up" mode.

    Args:
        number: The number to round.
        digits: Count of significant digits to keep.
        mode: Rounding direction.
        first_digit: Precomputed magnitude() of number. Lets callers keep the digit
                     position they measured before rescaling the number.
        tolerance: Relative tolerance for ties in "half_up" mode. A scaled number
                   this close below a .5 tie is rounded up.

    Returns:
        float: The rounded number, 0.0 for zero input.

    Raises:
        TypeError: If digits is not an int.
        ValueError: If number is NaN or infinite, or mode is unknown.

    Examples:
        >>> round_significant(123.456, 2)
        120.0
        >>> round_significant(0.123, 2, mode="up")
        0.13
        >>> round_significant(2.5, 1, mode="nearest")
        2.0
    """
    if not isinstance(digits, int) or isinstance(digits, bool):
        raise TypeError(f"digits must be an int, but got {fmt_type(digits)}")
    if mode not in _ROUNDERS:
        raise ValueError(f"rounding mode must be one of {', '.join(_ROUNDERS)}, but got {fmt_value(mode)}")
    if not math.isfinite(number):
        raise ValueError(f"number must be finite, but got {fmt_value(number)}")

    if number == 0:
        return 0.0

    lead = magnitude(number) if first_digit is None else first_digit
    decimals = digits - lead - 1

    # Same decimal shift as scaling by 10^decimals, but dividing by an exact power of ten
    # keeps results like 12 / 10000 equal to the literal 0.0012
    try:
        if decimals >= 0:
            scale = 10.0 ** decimals
            scaled = number * scale
        else:
            scale = 10.0 ** -decimals
            scaled = number / scale
    except OverflowError:
        return float(number)
    if not math.isfinite(scaled):
        return float(number)

    if mode == "half_up":
        scaled += abs(scaled) * tolerance
    rounded = _ROUNDERS[mode](scaled)

    return rounded / scale if decimals >= 0 else rounded * scale


def round_up_resistant(number: float,
                       digits: int,
                       tolerance: float = 1e-14,
                       *,
                       first_digit: int | None = None) -> float:
    """
    Round up to significant digits, ignoring floating-point representation noise.

    Rounds to nearest first. If that changes the number by less than the relative
    tolerance, the difference is noise and the nearest result is kept; otherwise
    the number is rounded up (away from zero).

    Examples:
        >>> round_up_resistant(0.07, 1)    # 0.07 * 100 == 7.000000000000001
        0.07
        >>> round_significant(0.07, 1, mode="up")
        0.08
        >>> round_up_resistant(1.9999999999999998, 2)
        2.0
        >>> round_up_resistant(0.123, 2)
        0.13
    """
    if number == 0:
        return 0.0
    nearest = round_significant(number, digits, mode="nearest", first_digit=first_digit)
    if abs((number - nearest) / (number + nearest)) < tolerance:
        return nearest
    return round_significant(number, digits, mode="up", first_digit=first_digit)


def pad_decimal(text: str, length: int, *, exponential: bool | None = None) -> str:
    """
    Right-pad a decimal number string with zeros up to length.

    Text in exponential notation is returned unchanged, trailing zeros would land in
    the exponent. Never truncates.

    Args:
        text: Decimal text of a number, e.g. "1.2".
        length: Target length of the padded text.
        exponential: Notation flag carried by FloatText. If None, it is taken from
                     the text itself.

    Examples:
        >>> pad_decimal("1.2", 4)
        '1.20'
        >>> pad_decimal("1e-07", 8)
        '1e-07'
        >>> pad_decimal("12.345", 3)
        '12.345'
    """
    if exponential is None:
        exponential = "e" in text.lower()
    if exponential:
        return text
    return text.ljust(length, "0")


# Private Methods ------------------------------------------------------------------------------------------------------

def _round_away(x: float) -> int:
    return math.ceil(x) if x > 0 else math.floor(x)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


_ROUNDERS = {
    "half_up": _round_half_up,
    "nearest": round,
    "up": _round_away,
}
