"""
Field identity, field discovery and field selectors.

A field is a named attribute declared by a class: a dataclass field, an annotated
class attribute, a slot, or (optionally) a property. FieldId pins one such field
of one owner type and is used as a key by ObjectPrinter override registries.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ast
import dataclasses
import functools
import inspect
import textwrap
import types
import typing
import warnings

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Union

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidSelectorError
from .formatters import fmt_type, fmt_value
from .sentinels import MISSING
from .utils import class_name

FieldSelector = Union["FieldId", str, Callable[[Any], Any]]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldId:
    """
    Identity of one declared field of one owner type.

    Two FieldId-s are equal iff they name the same field of the same type.
    Use field_id() to build one keyed by the class that declares the field,
    so that a field inherited by subclasses keeps a single identity.

    Attributes:
        owner: The class declaring the field.
        name: Attribute name.
    """
    owner: type
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.owner, type):
            raise TypeError(f"FieldId.owner must be a type, got {fmt_type(self.owner)}")
        if not isinstance(self.name, str) or not self.name:
            raise TypeError(f"FieldId.name must be a non-empty str, got {fmt_value(self.name)}")

    def __str__(self) -> str:
        return f"{class_name(self.owner)}.{self.name}"


class _FieldRecorder:
    """
    Stand-in for a value of a declared type, recording attribute access in a selector.

    Every attribute access is checked against the declared fields of the recorded
    type, or the attributes its __init__ assigns, and returns a new recorder for
    the field value.
    """
    __slots__ = ("_type", "_field")

    def __init__(self, typ: Any, field_id: FieldId | None = None) -> None:
        object.__setattr__(self, "_type", typ)
        object.__setattr__(self, "_field", field_id)

    def __getattribute__(self, name: str) -> Any:
        if name.startswith("__") and name.endswith("__"):
            return object.__getattribute__(self, name)

        typ = object.__getattribute__(self, "_type")
        if not _is_class(typ):
            raise InvalidSelectorError(f"cannot select {name!r}: declared type {typ!r} is not a class")

        declared = declared_fields(typ, include_private=True, include_properties=True)
        if name in declared:
            return _FieldRecorder(declared[name], field_id(typ, name))
        if _is_init_attribute(typ, name):
            return _FieldRecorder(None, field_id(typ, name))

        raise InvalidSelectorError(f"{name!r} is not a declared field of {class_name(typ)}")

    def __setattr__(self, name: str, value: Any) -> None:
        raise InvalidSelectorError("field selector must not assign attributes")


# Methods --------------------------------------------------------------------------------------------------------------

def declared_fields(cls: type,
                    *,
                    include_private: bool = False,
                    include_properties: bool = False) -> dict[str, Any]:
    """
    Return declared fields of a class mapped to their declared types.

    Field order:
        1. Dataclass fields in declaration order, or annotated class attributes
           across the MRO with base classes first (ClassVar-s skipped)
        2. Names from __slots__ not annotated
        3. Public properties, if include_properties is True

    Declared types are taken from typing.get_type_hints(); Optional[X] is reduced to X.
    Unresolvable annotations give None.

    Args:
        cls: The class to inspect.
        include_private: Include names starting with a single underscore.
        include_properties: Include properties, typed by their getter return annotation.

    Returns:
        Ordered dict of field name to declared type (or None when unknown).

    Raises:
        TypeError: If cls is not a class.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     age: int | None = None
        >>> declared_fields(Person)
        {'name': <class 'str'>, 'age': <class 'int'>}
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a type, got {fmt_type(cls)}")

    hints = _class_hints(cls)
    fields_: dict[str, Any] = {}

    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            fields_[f.name] = _declared_type(hints.get(f.name))
    else:
        for name, hint in hints.items():
            if _is_class_var(hint):
                continue
            fields_[name] = _declared_type(hint)

    for base in reversed(cls.__mro__):
        slots = base.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in fields_ and name not in ("__dict__", "__weakref__"):
                fields_[name] = None

    if include_properties:
        for base in reversed(cls.__mro__):
            for name, attr in base.__dict__.items():
                if isinstance(attr, property) and name not in fields_:
                    fields_[name] = _property_type(attr)

    return {
        name: typ for name, typ in fields_.items()
        if not _is_dunder(name) and (include_private or not name.startswith("_"))
    }


def field_id(cls: type, name: str) -> FieldId:
    """
    Return FieldId of the named field keyed by the nearest class in the MRO declaring it.

    A class declares a name if it annotates it, defines it in its own namespace
    (slot, property, class default) or assigns self.<name> in its own __init__.
    Falls back to cls for attributes set elsewhere.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        >>> @dataclass
        ... class Employee(Person):
        ...     title: str
        >>> field_id(Employee, "name") == FieldId(Person, "name")
        True
    """
    for base in cls.__mro__:
        try:
            annotations = inspect.get_annotations(base)
        except Exception:
            annotations = {}
        if name in annotations or name in base.__dict__ or name in _init_attributes(base):
            return FieldId(base, name)
    return FieldId(cls, name)


def instance_fields(obj: Any,
                    *,
                    include_private: bool = False,
                    include_properties: bool = False) -> list[tuple[str, Any, Any]]:
    """
    Return (name, declared_type, value) for every printable field of an instance.

    Declared fields come first in declaration order, followed by public instance
    attributes found in vars(obj) that are not declared (declared type None).
    Declared fields without a value on the instance are skipped, as are
    undeclared callables.

    Properties whose getter raises are skipped with a RuntimeWarning.
    """
    fields_ = []
    declared = declared_fields(type(obj), include_private=include_private, include_properties=include_properties)

    for name, typ in declared.items():
        try:
            value = getattr(obj, name, MISSING)
        except Exception as e:
            warnings.warn(
                f"Skipping {class_name(obj)}.{name}, getter raised {type(e).__name__}: {e}",
                RuntimeWarning,
                stacklevel=2
            )
            continue
        if value is MISSING:
            continue
        fields_.append((name, typ, value))

    for name, value in getattr(obj, "__dict__", {}).items():
        if name in declared or _is_dunder(name):
            continue
        if name.startswith("_") and not include_private:
            continue
        if callable(value):
            continue
        fields_.append((name, None, value))

    return fields_


def resolve_selector(selector: FieldSelector, owner: type | None) -> FieldId:
    """
    Resolve a field selector to a FieldId.

    Supported selectors:
        - FieldId: returned as is
        - str: a declared field name of owner, or an attribute assigned in its __init__
        - callable: a direct attribute access expression evaluated against owner,
          e.g. ``lambda p: p.name`` or ``lambda p: p.address.city``; the FieldId
          of the last accessed attribute is returned

    Args:
        selector: The selector to resolve.
        owner: The type the selector is applied to; required for str and callable selectors.

    Raises:
        InvalidSelectorError: If the selector does not denote a declared field.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        >>> str(resolve_selector(lambda p: p.name, Person))
        'Person.name'
    """
    if isinstance(selector, FieldId):
        return selector

    if owner is None:
        raise InvalidSelectorError(
            f"selector {fmt_value(selector)} requires a printer bound to an owner type, use FieldId instead")

    if isinstance(selector, str):
        declared = declared_fields(owner, include_private=True, include_properties=True)
        if selector not in declared and not _is_init_attribute(owner, selector):
            raise InvalidSelectorError(f"{selector!r} is not a declared field of {class_name(owner)}")
        return field_id(owner, selector)

    if not callable(selector):
        raise InvalidSelectorError(f"selector must be a FieldId, str or callable, got {fmt_type(selector)}")

    try:
        selected = selector(_FieldRecorder(owner))
    except InvalidSelectorError:
        raise
    except Exception as e:
        raise InvalidSelectorError(
            f"selector must be a direct field access, evaluating it raised {type(e).__name__}: {e}") from e

    if not isinstance(selected, _FieldRecorder):
        raise InvalidSelectorError(
            f"selector must return a field access, but returned {fmt_value(selected)}")

    selected_id = object.__getattribute__(selected, "_field")
    if selected_id is None:
        raise InvalidSelectorError("selector must access a field, but returned its argument")
    return selected_id


# Private Methods ------------------------------------------------------------------------------------------------------

def _class_hints(cls: type) -> dict[str, Any]:
    """Type hints of a class with base classes first; raw annotations if hints cannot be resolved."""
    try:
        return typing.get_type_hints(cls)
    except Exception:
        hints = {}
        for base in reversed(cls.__mro__):
            try:
                hints.update(inspect.get_annotations(base))
            except Exception:
                continue
        return hints


def _declared_type(hint: Any) -> Any:
    """Reduce a type hint to the type used for exclusion and truncation checks."""
    if hint is None or isinstance(hint, str):
        return None
    if hint is type(None):
        return hint

    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return _declared_type(args[0])
    return hint


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return None
    try:
        hint = typing.get_type_hints(prop.fget).get("return")
    except Exception:
        return None
    return _declared_type(hint)


def _is_class(typ: Any) -> bool:
    return isinstance(typ, type) and typing.get_origin(typ) is None


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


@functools.cache
def _init_attributes(cls: type) -> frozenset[str]:
    """Names assigned as self.<name> in the own __init__ of cls; empty if its source is unavailable."""
    init = cls.__dict__.get("__init__")
    if not inspect.isfunction(init):
        return frozenset()
    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(init)))
    except (OSError, TypeError, SyntaxError):
        return frozenset()

    func = tree.body[0] if tree.body else None
    if not isinstance(func, (ast.FunctionDef, ast.AsyncFunctionDef)) or not func.args.args:
        return frozenset()
    self_name = func.args.args[0].arg

    names = set()
    for node in ast.walk(func):
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets = [node.target]
        else:
            continue
        for target in targets:
            for sub in ast.walk(target):
                if (isinstance(sub, ast.Attribute)
                        and isinstance(sub.value, ast.Name) and sub.value.id == self_name):
                    names.add(sub.attr)
    return frozenset(name for name in names if not _is_dunder(name))


def _is_init_attribute(cls: type, name: str) -> bool:
    return any(name in _init_attributes(base) for base in cls.__mro__)
