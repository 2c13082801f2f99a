#
# Measured Tools
#

# Standard library -----------------------------------------------------------------------------------------------------

from enum import Enum, unique
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FmtStyle(str, Enum):
    """
    Wrapper styles for fmt_type() and fmt_value() tokens.

    Members are str subclasses and can be passed wherever a style string is expected.
    """
    ASCII = "ascii"
    UNICODE_ANGLE = "unicode-angle"


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, style: str = "ascii", max_repr: int = 120) -> str:
    """Format the type of an object (or a type itself) for exception messages.

    Examples:
        >>> fmt_type(4.5)
        '<type: float>'
        >>> fmt_type(float)
        '<type: float>'
        >>> fmt_type("abc", style="unicode-angle")
        '⟨type: str⟩'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", None) or str(target_type)
    type_name = _fmt_truncate(type_name, max_repr, ellipsis=_fmt_ellipsis(style))
    return _fmt_format_pair("type", type_name, style)


def fmt_value(x: Any, *, style: str = "ascii", max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods do not propagate; the token then names the failure instead.

    Examples:
        >>> fmt_value(-0.3)
        '<float: -0.3>'
        >>> fmt_value("two_digit")
        "<str: 'two_digit'>"
        >>> fmt_value(float("nan"), style="unicode-angle")
        '⟨float: nan⟩'
    """
    type_name = type(x).__name__
    try:
        value_repr = repr(x)
    except Exception as exc:
        value_repr = f"<{type_name} object (repr failed: {type(exc).__name__})>"

    if style == FmtStyle.ASCII:
        value_repr = value_repr.replace(">", "\\>")

    value_repr = _fmt_truncate(value_repr, max_repr, ellipsis=_fmt_ellipsis(style))
    return _fmt_format_pair(type_name, value_repr, style)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "…") -> str:
    """Cut s to max_len characters and append the ellipsis; quoted reprs keep their closing quote."""
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s
    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"
    return s[:max_len] + ellipsis


def _fmt_format_pair(type_name: str, value_repr: str, style: str) -> str:
    if style == FmtStyle.UNICODE_ANGLE:
        return f"⟨{type_name}: {value_repr}⟩"
    return f"<{type_name}: {value_repr}>"


def _fmt_ellipsis(style: str) -> str:
    return "..." if style == FmtStyle.ASCII else "…"
