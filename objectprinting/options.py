"""
Object Printing Options

Rendering limits and output tokens shared by ObjectPrinter instances.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import pathlib
import uuid

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value
from .sentinels import UNSET

# Values rendered by their natural str() form, never expanded into fields or items
TERMINAL_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    dt.date,  # Includes datetime
    dt.time,
    dt.timedelta,
    dt.tzinfo,
    uuid.UUID,
    Enum,
    pathlib.PurePath,
    range,
    type,
)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class PrintOptions:
    """
    Rendering limits and output tokens for ObjectPrinter.

    Limits:
        max_depth: Maximum nesting level of composite values. The root value is at level 0,
                   each field boundary adds one level; mapping and sequence wrapping does not.
        max_items: Maximum number of entries in any single mapping or sequence.

    Output Tokens:
        null_repr: Text printed for None.
        indent: Indentation unit, repeated (depth + 1) times before each field line.
        line_break: Terminator appended to every printed value.
        ellipsis: Marker appended to truncated text.

    Field Discovery:
        include_private: Print attributes starting with a single underscore.
        include_properties: Print public properties as fields.

    Advanced:
        fully_qualified_names: Use module.Class names when wrapping nested collections.
        terminal_types: Types printed by their str() form (isinstance check).

    Examples:
        >>> opts = PrintOptions(max_depth=3, indent="  ")
        >>> opts.merge(max_items=10).max_items
        10
    """
    max_depth: int = 10
    max_items: int = 1000

    null_repr: str = "None"
    indent: str = "\t"
    line_break: str = "\n"
    ellipsis: str = "..."

    include_private: bool = False
    include_properties: bool = False

    fully_qualified_names: bool = False
    terminal_types: tuple[type, ...] = field(default=TERMINAL_TYPES)

    def __post_init__(self) -> None:
        """Validate limits, tokens and terminal types."""
        for name in ("max_depth", "max_items"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f"PrintOptions.{name} must be an int, got {fmt_type(val)}")
            if val < 0:
                raise ValueError(f"PrintOptions.{name} must be >=0, but got {fmt_value(val)}")

        for name in ("null_repr", "indent", "line_break", "ellipsis"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"PrintOptions.{name} must be a str, got {fmt_type(val)}")

        self.terminal_types = tuple(self.terminal_types)
        for typ in self.terminal_types:
            if not isinstance(typ, type):
                raise TypeError(f"PrintOptions.terminal_types must contain types only, got {fmt_value(typ)}")

    # Class Methods ------------------------------------

    @classmethod
    def debug(cls) -> "PrintOptions":
        """
        Options for interactive inspection: shallow depth, private attributes and properties shown.
        """
        return cls(
            max_depth=3,
            max_items=50,
            include_private=True,
            include_properties=True,
        )

    @classmethod
    def compact(cls) -> "PrintOptions":
        """
        Options for log lines: two-space indentation and small collection limit.
        """
        return cls(
            max_depth=5,
            max_items=20,
            indent="  ",
        )

    # Methods ------------------------------------------

    def merge(self, **kwargs: Any) -> "PrintOptions":
        """
        Return a copy of options with given attributes replaced.

        Arguments passed as UNSET are ignored, so callers can forward optional
        parameters without checking them first.

        Raises:
            TypeError: If an unknown attribute name is given.
        """
        known = {f.name for f in fields(self)}
        unknown = set(kwargs) - known
        if unknown:
            raise TypeError(f"Unknown PrintOptions attributes: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in kwargs.items() if v is not UNSET}
        return replace(self, **changes)
