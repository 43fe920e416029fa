"""
Sentinel objects for distinguishing between unset values, None, and absent attributes.

All sentinels use identity checks (using 'is') rather than equality checks.

Sentinels:
    UNSET: An optional argument that was not provided (None may be a legitimate value)
    MISSING: An attribute that is declared on a class but not assigned on an instance
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'MISSING',
    'UnsetType',
    'MissingType',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for singleton sentinel objects.

    Subclasses keep one instance per class, are falsy, and compare by identity.
    """
    __slots__ = ('_name',)

    _instances: dict = {}

    def __new__(cls) -> '_SentinelBase':
        if cls not in _SentinelBase._instances:
            _SentinelBase._instances[cls] = super().__new__(cls)
        return _SentinelBase._instances[cls]

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Unpickle to the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class MissingType(_SentinelBase):
    """
    Sentinel type for MISSING.

    Returned by attribute lookups when a field is declared on the class
    (annotation, slot) but has no value on the instance.
    """
    __slots__ = ()

    def __init__(self) -> None:
        self._name = "MISSING"


class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Used to distinguish between 'not provided' and 'explicitly set to None'.
    """
    __slots__ = ()

    def __init__(self) -> None:
        self._name = "UNSET"


# Sentinel Objects -----------------------------------------------------------------------------------------------------

MISSING: Final[MissingType] = MissingType()
"""Sentinel representing a declared but unassigned attribute."""

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""

