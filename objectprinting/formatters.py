"""
Formatting helpers for exception messages and text truncation.

fmt_type() and fmt_value() produce short, safe descriptions of arbitrary values
for error messages; they never raise, even on objects with a broken __repr__.
truncate_text() implements the max-length policy applied to printed text fields.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

PRIMITIVE_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
)

# Classes --------------------------------------------------------------------------------------------------------------

Style = Literal["ascii", "equal"]


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_type(obj: Any, *, style: Style = "ascii") -> str:
    """Format type information of a type object or an instance.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(ValueError, style="equal")
        'ValueError'
    """
    return _fmt_type_value(class_name(obj), style=style)


def fmt_value(obj: Any, *, style: Style = "ascii", max_repr: int = 80, ellipsis: str = "...") -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Primitives are shown by their plain repr, other values are labeled
    with their type name.

    Examples:
        >>> fmt_value(42)
        '42'
        >>> fmt_value([1, 2, 3])
        '<list: [1, 2, 3]>'
        >>> fmt_value("hello world", max_repr=5)
        "'hell..."
    """
    repr_ = _safe_repr(obj)
    if style == "ascii":
        repr_ = repr_.replace(">", "\\>")
    repr_ = truncate_text(repr_, max_repr, ellipsis=ellipsis)

    if type(obj) in PRIMITIVE_TYPES:
        return repr_
    return _fmt_type_value(type(obj).__name__, repr_, style=style)


def truncate_text(text: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Cut text to exactly max_len characters and append the ellipsis.

    Text not longer than max_len is returned unchanged. A non-positive max_len
    disables truncation.

    Examples:
        >>> truncate_text("Alexander", 3)
        'Ale...'
        >>> truncate_text("Alex", 4)
        'Alex'
        >>> truncate_text("Alex", 0)
        'Alex'
    """
    if max_len <= 0 or len(text) <= max_len:
        return text
    return text[:max_len] + ellipsis


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_type_value(type_name: str, value_repr: str | None = None, *, style: Style = "ascii") -> str:
    """Combine a type name and a repr into a single display token according to style."""
    if style == "equal":
        return f"{type_name}" if value_repr is None else f"{type_name}={value_repr}"
    return f"<{type_name}>" if value_repr is None else f"<{type_name}: {value_repr}>"


def _safe_repr(obj: Any) -> str:
    """
    repr() that never raises, for objects with a broken __repr__
    """
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
