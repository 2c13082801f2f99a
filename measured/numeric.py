"""
Standardize numeric inputs of measurement formatting to finite Python floats.

Values and errors arrive from measurement-arithmetic code that may hold them as
Python numbers, Decimal or Fraction, or NumPy/Pandas/Astropy scalars. Display
rounding works on plain floats only, so every input passes through std_float().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from typing import Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


def std_float(value, *, name: str = "value") -> float:
    """
    Convert a real-number-like value to a finite Python float.

    Parameters
    ----------
    value : various
        Number to convert. Supports int, float, Decimal, Fraction and third-party
        scalars via __index__, .item(), .value (with .unit) or __float__.

    name : str, default "value"
        Argument name used in exception messages.

    Returns
    -------
    float
        The converted number. Python int values are converted exactly where the
        float format allows it.

    Raises
    ------
    TypeError
        For bool, None, str and other types without a numeric protocol.

    ValueError
        For NaN and infinite values, including pandas.NA and numpy.ma.masked,
        and for integers too large to be represented as float.

    Examples
    --------
    >>> std_float(3)
    3.0
    >>> from decimal import Decimal
    >>> std_float(Decimal("0.25"))
    0.25
    >>> std_float(float("inf"))
    Traceback (most recent call last):
        ...
    ValueError: value must be finite, but got <float: inf>
    """
    number = _to_float(value, name)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, but got {fmt_value(number)}")
    return number


def _to_float(value, name: str) -> float:
    """Route value through the first numeric protocol it implements."""

    # bool is an int subclass, rejecting it catches True/False passed by mistake
    if value is None or isinstance(value, (bool, str, bytes)):
        raise TypeError(f"{name} must be a real number, but got {fmt_type(value)}")

    if isinstance(value, (int, float)):
        return _checked_float(value, name)

    # pandas.NA and numpy.ma.masked stand for missing data
    cls = type(value)
    cls_name = getattr(cls, "__name__", "")
    cls_module = getattr(cls, "__module__", "") or ""
    if (cls_name == "NAType" and "pandas" in cls_module) or \
            (cls_name == "MaskedConstant" and cls_module.startswith("numpy.ma")):
        return math.nan

    # NumPy integers; float arrays define __index__ too but refuse it
    if hasattr(value, "__index__"):
        try:
            index = operator.index(value)
        except TypeError:
            index = None
        if index is not None:
            return _checked_float(index, name)

    # Array and tensor scalars
    if callable(getattr(value, "item", None)):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if result is not None and result is not value:
            return _to_float(result, name)

    # Astropy Quantity and similar magnitude-with-unit objects
    if hasattr(value, "value") and hasattr(value, "unit"):
        return _to_float(value.value, name)

    if isinstance(value, SupportsFloat):
        try:
            return float(value)
        except OverflowError as exc:
            raise ValueError(f"{name} is too large for float: {fmt_value(value, max_repr=40)}") from exc
        except (TypeError, ValueError) as exc:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {exc}") from exc

    raise TypeError(f"{name} must be a real number, but got {fmt_type(value)}. "
                    f"Expected int, float, or types implementing __index__, __float__, "
                    f".item(), or having .value attribute")


def _checked_float(value, name: str) -> float:
    try:
        return float(value)
    except OverflowError as exc:
        raise ValueError(f"{name} is too large for float: {fmt_value(value, max_repr=40)}") from exc
