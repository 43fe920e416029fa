"""
Object Printing exceptions.

InvalidSelectorError is raised while configuring a printer; DepthExceededError
and SequenceTooLongError abort a whole print_to_string() call, no partial text
is returned.
"""


class ObjectPrintingError(Exception):
    """Base class for all errors raised by objectprinting."""


class InvalidSelectorError(ObjectPrintingError, ValueError):
    """A field selector does not denote a direct access to a declared field."""


class DepthExceededError(ObjectPrintingError, RecursionError):
    """
    Object graph nesting exceeded the configured maximum depth.

    Attributes:
        max_depth: The configured depth limit.
    """

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"nesting level is deeper than max_depth={max_depth}")


class SequenceTooLongError(ObjectPrintingError, ValueError):
    """
    A mapping or sequence holds more items than the configured maximum.

    Attributes:
        max_items: The configured item limit.
        length: Actual collection length if known, None for lazily iterated sequences.
    """

    def __init__(self, max_items: int, length: int | None = None):
        self.max_items = max_items
        self.length = length
        if length is None:
            msg = f"sequence is longer than max_items={max_items}"
        else:
            msg = f"sequence length {length} is more than max_items={max_items}"
        super().__init__(msg)
