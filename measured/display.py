"""
Value and uncertainty display formatting for measurement results.

Renders a (value, error) pair of floats as text following the usual conventions
for reporting uncertainties: the error is rounded up to one or two significant
digits, the value is rounded to the same decimal position, and a shared power of
ten is optionally factored out in engineering steps.

    >>> format_measurement(8.4, 0.7)
    '(8.40 ± 0.70)'
    >>> format_measurement(1234.5, 12.3)
    '(1.235 ± 0.013) * 10^3'
    >>> format_measurement(8.4, 0.7, mode="scientific_const")
    '8.40(70)'
"""

# ## Scope
#
# One-way formatting only (numbers → text). Error propagation belongs to the measurement
# types that call in here; they hand over two floats and get a string back.

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import re
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import std_float
from .rounding import FloatText, leading_digit, magnitude, pad_decimal, round_significant, round_up_resistant
from .tools import fmt_type, fmt_value

logger = logging.getLogger(__name__)


# @formatter:off

class DisplayConf:
    """
    Default configuration constants for measurement formatting.

    Attributes:
        EXPONENT_STEP: Power of ten factored out in multiples of this step.
            Default 3 gives engineering notation; 0 disables the factoring.

        ROUNDING_TOLERANCE: Relative difference below which a rounding change is
            treated as floating-point noise.

        SCIENTIFIC_THRESHOLD: In SCIENTIFIC mode, errors with a leading digit below
            this threshold keep two significant digits, others keep one.

        COMPACT_DIGITS: Significant error digits shown in SCIENTIFIC_CONST mode.
    """
    EXPONENT_STEP = 3
    ROUNDING_TOLERANCE = 1e-14
    SCIENTIFIC_THRESHOLD = 3
    COMPACT_DIGITS = 2

# @formatter:on

# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class DisplayMode(StrEnum):
    """
    Display modes for value and uncertainty pairs.

    Attributes:
        TWO_DIGITS: Error with two significant digits
                    Example: "(8.40 ± 0.70)"

        ONE_DIGIT: Error with one significant digit
                   Example: "(8.4 ± 0.7)"

        SCIENTIFIC: Two significant digits if the error starts with 1 or 2, one otherwise
                    Example: "(8.40 ± 0.12)", "(8.4 ± 0.7)"

        SCIENTIFIC_CONST: Compact form, error as two digits in units of the last value digit
                          Example: "8.40(70)"

        FULL: No rounding, value and error padded to the same length
              Example: "(1.500000 ± 0.123456)"

    Member names in CamelCase ("TwoDigits") or upper case ("TWO_DIGITS")
    are accepted as well as the values.
    """
    TWO_DIGITS = "two_digits"
    ONE_DIGIT = "one_digit"
    SCIENTIFIC = "scientific"
    SCIENTIFIC_CONST = "scientific_const"
    FULL = "full"

    @classmethod
    def _missing_(cls, value: object) -> Self | None:
        if not isinstance(value, str):
            return None
        key = value.strip()
        if not ("_" in key or key.isupper() or key.islower()):
            key = re.sub(r"(?<!^)(?=[A-Z])", "_", key)
        key = key.lower()
        for member in cls:
            if member.value == key:
                return member
        return None

# @formatter:on


@dataclass(frozen=True)
class DisplaySymbols:
    """
    Symbols for formatting measurement output.

    Attributes:
        plus_minus: Separator between value and error in parenthetical modes.
        mult: Multiplication sign in the power-of-ten suffix.

    Examples:
        >>> DisplaySymbols()
        DisplaySymbols(plus_minus='±', mult='*')
        >>> format_measurement(8.4, 0.7, symbols=DisplaySymbols.ascii())
        '(8.40 +/- 0.70)'
    """
    plus_minus: str = "±"
    mult: str = "*"

    @classmethod
    def ascii(cls) -> Self:
        """
        ASCII-only symbols for plain text logs, legacy terminals and piped output.
        """
        return cls(plus_minus="+/-", mult="*")

    @classmethod
    def unicode(cls) -> Self:
        """
        Unicode mathematical symbols, ± and ×.
        """
        return cls(plus_minus="±", mult="×")


@dataclass(frozen=True)
class Decomposition:
    """
    Sign, magnitudes and shared power of ten of one value and error pair.

    Built by decompose() and consumed by exactly one composer. After a power of ten
    is factored out, abs_value and abs_error are already divided by 10^power and
    both digit positions are shifted by the same power.

    Attributes:
        negative: True if the value is below zero.
        abs_value: Absolute value, scaled by 10^-power.
        abs_error: Error, scaled by 10^-power.
        first_value_digit: Leading digit position of abs_value, 0 for zero.
        first_error_digit: Leading digit position of abs_error, 0 for zero.
        power: Factored out power of ten, a multiple of the exponent step.
    """
    negative: bool
    abs_value: float
    abs_error: float
    first_value_digit: int
    first_error_digit: int
    power: int = 0


# Methods --------------------------------------------------------------------------------------------------------------

def format_measurement(value: Any,
                       error: Any,
                       exponent_step: int = DisplayConf.EXPONENT_STEP,
                       mode: DisplayMode | str = DisplayMode.TWO_DIGITS,
                       *,
                       symbols: DisplaySymbols | None = None,
                       tolerance: float = DisplayConf.ROUNDING_TOLERANCE) -> str:
    """
    Format a value and its uncertainty as text.

    Args:
        value: Measured value; int, float, Decimal, Fraction or a numeric scalar
               of NumPy, Pandas and similar libraries.
        error: Standard uncertainty of the value, non-negative.
        exponent_step: Factor out powers of ten in multiples of this step
                       (3 for engineering notation, 0 disables).
        mode: Display mode, a DisplayMode or its name.
        symbols: Plus-minus and multiplication symbols, DisplaySymbols() by default.
        tolerance: Relative tolerance for floating-point noise in rounding.

    Returns:
        str: "(value ± error)", "value(error)" in SCIENTIFIC_CONST mode, followed
             by " * 10^N" or " * 10^(-N)" if a power of ten was factored out.

    Raises:
        TypeError: If value or error is not a real number, or exponent_step is not an int.
        ValueError: If value or error is NaN or infinite, error is negative,
                    exponent_step is negative or mode is unknown.

    Examples:
        >>> format_measurement(-4.5, 0.1)
        '-(4.50 ± 0.10)'
        >>> format_measurement(0.00123, 0.00004)
        '(1.230 ± 0.040) * 10^(-3)'
        >>> format_measurement(1234.5, 12.3, exponent_step=0)
        '(1235 ± 13)'
        >>> format_measurement(8.4, 0.7, mode=DisplayMode.ONE_DIGIT)
        '(8.4 ± 0.7)'
    """
    value = std_float(value, name="value")
    error = std_float(error, name="error")
    if error < 0:
        raise ValueError(f"error must be non-negative, but got {fmt_value(error)}")
    _validate_exponent_step(exponent_step)
    mode = _display_mode(mode)
    symbols = DisplaySymbols() if symbols is None else symbols
    if not isinstance(symbols, DisplaySymbols):
        raise TypeError(f"symbols must be DisplaySymbols, but got {fmt_type(symbols)}")

    parts = decompose(value, error, exponent_step)
    logger.debug("format %r ± %r in %s mode: %s", value, error, mode.value, parts)

    if mode == DisplayMode.TWO_DIGITS:
        return compose_parenthetical(parts, 2, symbols=symbols, tolerance=tolerance)
    elif mode == DisplayMode.ONE_DIGIT:
        return compose_parenthetical(parts, 1, symbols=symbols, tolerance=tolerance)
    elif mode == DisplayMode.SCIENTIFIC:
        return compose_parenthetical(parts, scientific_digits(parts, tolerance=tolerance),
                                     symbols=symbols, tolerance=tolerance)
    elif mode == DisplayMode.SCIENTIFIC_CONST:
        return compose_compact(parts, DisplayConf.COMPACT_DIGITS, symbols=symbols, tolerance=tolerance)
    elif mode == DisplayMode.FULL:
        return compose_full(parts, symbols=symbols)
    else:
        raise ValueError(f"display mode not supported: {fmt_value(mode)}")


def rounded_str(measurement: Any,
                exponent_step: int = DisplayConf.EXPONENT_STEP,
                mode: DisplayMode | str = DisplayMode.TWO_DIGITS,
                **kwargs) -> str:
    """
    Format a measurement object as text.

    Accepts a (value, error) pair or any object exposing one of the attribute pairs
    val/err, value/error or nominal_value/std_dev (the latter as in the
    uncertainties package). Other arguments are passed to format_measurement().

    Examples:
        >>> rounded_str((8.4, 0.7))
        '(8.40 ± 0.70)'
        >>> from types import SimpleNamespace
        >>> rounded_str(SimpleNamespace(val=2500.0, err=500.0), mode="full")
        '(2.5 ± 0.5) * 10^3'
    """
    value, error = _measurement_pair(measurement)
    return format_measurement(value, error, exponent_step, mode, **kwargs)


def decompose(value: float, error: float, exponent_step: int = DisplayConf.EXPONENT_STEP) -> Decomposition:
    """
    Split a value and error pair into sign, scaled magnitudes and a shared power of ten.

    If exponent_step > 0, the power is the multiple of exponent_step at or below the
    leading digit position of the value, so the scaled value has its leading digit in
    [10⁰, 10^exponent_step). Values below 1 get negative powers:

        >>> decompose(0.5, 0.01).power
        -3
        >>> decompose(1234.5, 12.3).first_error_digit
        -2
    """
    negative = value < 0
    abs_value = abs(value)
    abs_error = abs(error)
    first_value_digit = magnitude(abs_value)
    first_error_digit = magnitude(abs_error)

    power = 0
    if exponent_step > 0:
        power = (first_value_digit // exponent_step) * exponent_step
        if power != 0:
            first_value_digit -= power
            first_error_digit -= power
            abs_value = _rescaled(abs_value, power)
            abs_error = _rescaled(abs_error, power)

    return Decomposition(negative=negative,
                         abs_value=abs_value,
                         abs_error=abs_error,
                         first_value_digit=first_value_digit,
                         first_error_digit=first_error_digit,
                         power=power)


def power_suffix(power: int, symbols: DisplaySymbols | None = None) -> str:
    """
    Power-of-ten suffix, empty for power 0.

    Negative powers are parenthesized so the minus is not read as a subtraction.

    Examples:
        >>> power_suffix(3)
        ' * 10^3'
        >>> power_suffix(-6)
        ' * 10^(-6)'
        >>> power_suffix(0)
        ''
    """
    if not isinstance(power, int) or isinstance(power, bool):
        raise TypeError(f"power must be an int, but got {fmt_type(power)}")
    mult = (symbols or DisplaySymbols()).mult
    if power == 0:
        return ""
    if power > 0:
        return f" {mult} 10^{power}"
    return f" {mult} 10^({power})"


def scientific_digits(parts: Decomposition, *, tolerance: float = DisplayConf.ROUNDING_TOLERANCE) -> int:
    """
    Significant error digits in SCIENTIFIC mode.

    An error starting with 1 or 2 keeps a second digit, since one digit would round it
    by up to 50%. Errors starting with 3 to 9 keep one digit.
    """
    first = leading_digit(parts.abs_error, first_digit=parts.first_error_digit, tolerance=tolerance)
    return 2 if first < DisplayConf.SCIENTIFIC_THRESHOLD else 1


def compose_parenthetical(parts: Decomposition,
                          significant: int,
                          *,
                          symbols: DisplaySymbols | None = None,
                          tolerance: float = DisplayConf.ROUNDING_TOLERANCE) -> str:
    """
    Compose "(value ± error)" with the error rounded up to significant digits.

    The value is rounded to the decimal position of the last error digit and both
    numbers are zero-padded to the same count of decimal places.
    """
    symbols = symbols or DisplaySymbols()
    value, error = _rounded_pair(parts, significant, tolerance)
    decimals = _decimal_places(parts.first_error_digit, significant)

    value_text = _fixed_text(value, decimals)
    error_text = _fixed_text(error, decimals)
    return (f"{_sign(parts)}({value_text} {symbols.plus_minus} {error_text})"
            f"{power_suffix(parts.power, symbols)}")


def compose_compact(parts: Decomposition,
                    significant: int = DisplayConf.COMPACT_DIGITS,
                    *,
                    symbols: DisplaySymbols | None = None,
                    tolerance: float = DisplayConf.ROUNDING_TOLERANCE) -> str:
    """
    Compose "value(error)", the error given as an integer in units of the last value digit.

    Examples:
        >>> compose_compact(decompose(1.23567, 0.000766, 3))
        '1.23567(77)'
    """
    value, error = _rounded_pair(parts, significant, tolerance)
    last_digit = parts.first_error_digit - significant + 1
    decimals = max(-last_digit, 0)

    # Errors reaching left of the units place are shown in full
    error_digits = round(error / 10.0 ** min(last_digit, 0))

    value_text = _fixed_text(value, decimals)
    return f"{_sign(parts)}{value_text}({error_digits}){power_suffix(parts.power, symbols)}"


def compose_full(parts: Decomposition, *, symbols: DisplaySymbols | None = None) -> str:
    """
    Compose "(value ± error)" without rounding.

    The shorter of the two texts is padded with trailing zeros to the length of the other.
    Exponential texts neither get padded nor set the length.
    """
    symbols = symbols or DisplaySymbols()
    value = FloatText.of(parts.abs_value)
    error = FloatText.of(parts.abs_error)
    width = max((len(t.text) for t in (value, error) if not t.exponential), default=0)

    value_text = pad_decimal(value.text, width, exponential=value.exponential)
    error_text = pad_decimal(error.text, width, exponential=error.exponential)
    return (f"{_sign(parts)}({value_text} {symbols.plus_minus} {error_text})"
            f"{power_suffix(parts.power, symbols)}")


# Private Methods ------------------------------------------------------------------------------------------------------

_MEASUREMENT_ATTRS = (
    ("val", "err"),
    ("value", "error"),
    ("nominal_value", "std_dev"),
)


def _decimal_places(first_error_digit: int, significant: int) -> int:
    """Decimal places down to the last retained error digit."""
    return max(significant - first_error_digit - 1, 0)


def _display_mode(mode: DisplayMode | str) -> DisplayMode:
    if not isinstance(mode, str):
        raise TypeError(f"mode must be DisplayMode or str, but got {fmt_type(mode)}")
    try:
        return DisplayMode(mode)
    except ValueError as exc:
        raise ValueError(f"display mode expected one of {', '.join(m.value for m in DisplayMode)}, "
                         f"but got {fmt_value(mode)}") from exc


def _fixed_text(number: float, decimals: int) -> str:
    """
    Text of a rounded number with exactly `decimals` decimal places.

    Whole numbers without decimal places drop the '.0' of repr(). Exponential
    text is left as is.
    """
    text = FloatText.of(number)
    if text.exponential:
        return text.text
    if decimals == 0:
        return str(int(number)) if number.is_integer() else text.text
    length = text.text.index(".") + 1 + decimals
    return pad_decimal(text.text, length, exponential=False)


def _measurement_pair(measurement: Any) -> tuple[Any, Any]:
    if isinstance(measurement, (tuple, list)):
        if len(measurement) != 2:
            raise ValueError(f"measurement pair must have 2 items (value, error), "
                             f"but got {len(measurement)}")
        return measurement[0], measurement[1]

    for value_attr, error_attr in _MEASUREMENT_ATTRS:
        if hasattr(measurement, value_attr) and hasattr(measurement, error_attr):
            return getattr(measurement, value_attr), getattr(measurement, error_attr)

    raise TypeError(f"measurement must be a (value, error) pair or expose "
                    f"{', '.join('/'.join(pair) for pair in _MEASUREMENT_ATTRS)} attributes, "
                    f"but got {fmt_type(measurement)}")


def _rescaled(number: float, power: int) -> float:
    """Divide by 10^power; powers beyond the float range are applied in two halves."""
    if abs(power) < 300:
        return number / 10.0 ** power
    half = power // 2
    return number / 10.0 ** half / 10.0 ** (power - half)


def _rounded_pair(parts: Decomposition, significant: int, tolerance: float) -> tuple[float, float]:
    """
    Round the error up to significant digits and the value half-up to the same decimal position.

    The value keeps as many more (or fewer) digits as its leading digit sits above
    (or below) the leading error digit.
    """
    value_digits = significant + (parts.first_value_digit - parts.first_error_digit)
    value = round_significant(parts.abs_value, value_digits, mode="half_up",
                              first_digit=parts.first_value_digit, tolerance=tolerance)
    error = round_up_resistant(parts.abs_error, significant, tolerance,
                               first_digit=parts.first_error_digit)
    return value, error


def _sign(parts: Decomposition) -> str:
    return "-" if parts.negative else ""


def _validate_exponent_step(exponent_step: int):
    if not isinstance(exponent_step, int) or isinstance(exponent_step, bool):
        raise TypeError(f"exponent_step must be an int, but got {fmt_type(exponent_step)}")
    if exponent_step < 0:
        raise ValueError(f"exponent_step must be >= 0, but got {fmt_value(exponent_step)}")
