"""
Object Printing Engine

Renders arbitrary object graphs as indented, human-readable text. Rendering of
specific types and fields can be overridden through a fluent configuration API:

    >>> printer = (
    ...     ObjectPrinter.for_type(Person)
    ...     .excluding(uuid.UUID)
    ...     .printing(dt.datetime).using(lambda d: d.isoformat())
    ...     .printing(int).with_formatter(lambda n: f"{n:,}")
    ...     .printing(lambda p: p.name).truncate_to(10)
    ...     .excluding(lambda p: p.age)
    ... )
    >>> text = printer.print_to_string(person)

The output is meant for reading, not for parsing back.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import warnings

from copy import copy
from typing import Any, Callable, Generic, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import DepthExceededError, SequenceTooLongError
from .fields import FieldId, FieldSelector, declared_fields, field_id, instance_fields, resolve_selector
from .formatters import fmt_type, fmt_value, truncate_text
from .options import PrintOptions
from .sentinels import UNSET, UnsetType
from .utils import class_name, strip_line_break

T = TypeVar('T')
V = TypeVar('V')

Renderer = Callable[[Any], str]


# Classes --------------------------------------------------------------------------------------------------------------

class PropertyPrintingConfig(Generic[V]):
    """
    Fluent handle for a rule being configured on an ObjectPrinter.

    Returned by ObjectPrinter.printing(). Carries the selected target, either a
    whole type (field is None) or a single field, and commits the supplied rule
    back to the printer. Every commit returns the printer so configuration can
    continue in the same expression.

    Attributes:
        printer: The printer being configured.
        type_: The selected type, or the declared type of the selected field.
        field: The selected field, None for type-wide rules.
    """

    def __init__(self, printer: "ObjectPrinter", type_: Any = None, field: FieldId | None = None):
        self.printer = printer
        self.type_ = type_
        self.field = field

    def __repr__(self) -> str:
        target = self.field if self.field is not None else fmt_type(self.type_, style="equal")
        return f"{type(self).__name__}(target={target})"

    def using(self, render: Callable[[V], str]) -> "ObjectPrinter":
        """Print the selected type or field with render(value)."""
        return self.printer.set_renderer(render, type_=self.type_, field=self.field)

    def with_formatter(self, format: Callable[[V], str]) -> "ObjectPrinter":
        """Print the selected numeric type or field with a number formatter, e.g. a locale-aware one."""
        return self.printer.set_numeric_formatter(format, type_=self.type_, field=self.field)

    def truncate_to(self, length: int) -> "ObjectPrinter":
        """
        Cut printed text of the selected field to length characters.

        Selecting a type instead of a field sets the printer-wide limit for all text fields.
        """
        return self.printer.set_truncation(length, field=self.field)


class ObjectPrinter:
    """
    Recursive object-to-text printer with configurable dispatch.

    A printer is configured once and may print any number of values. All
    configuration methods return the printer (or a PropertyPrintingConfig whose
    commit returns it), so calls can be chained.

    Printing Pipeline for a value at nesting level `depth`:
        1. None → options.null_repr
        2. Excluded runtime type → nothing at all
        3. depth > max_depth → DepthExceededError
        4. Type renderer registered for the exact runtime type
        5. Numeric formatter registered for the exact runtime type
        6. Terminal types (numbers, text, dates, UUID, Enum, ...) → str(value)
        7. Mappings → "[key]: value" entries on one line
        8. Other iterables → space-separated items on one line
        9. Anything else → type name, then one indented "name = value" line per field

    Field Rules:
        - Fields are skipped if their declared type, their runtime type or the field
          itself is excluded
        - A field renderer replaces the whole pipeline for that field's value
        - Text field values, and values of fields declared as str, are truncated to the
          field limit, or the printer-wide limit

    Notes:
        - Type overrides match exact types only, subclasses are not affected
        - Mappings and iterables do not add a nesting level, fields do
        - There is no cycle detection, self-referencing graphs end with DepthExceededError
        - Not thread safe; configure fully before printing

    Args:
        owner: Type whose fields callable and str selectors refer to. Optional.
        max_depth: Maximum nesting level, overrides options.max_depth.
        max_items: Maximum mapping or sequence length, overrides options.max_items.
        options: Rendering options; PrintOptions() if None.

    Raises:
        TypeError: If owner is not a type or options is not a PrintOptions instance.
    """

    def __init__(self,
                 owner: type | None = None,
                 *,
                 max_depth: int | UnsetType = UNSET,
                 max_items: int | UnsetType = UNSET,
                 options: PrintOptions | None = None):
        if not isinstance(owner, (type, type(None))):
            raise TypeError(f"owner must be a type or None, but found {fmt_type(owner)}")
        if not isinstance(options, (PrintOptions, type(None))):
            raise TypeError(f"options must be a PrintOptions instance, but found {fmt_type(options)}")

        self._owner = owner
        self._options = (options or PrintOptions()).merge(max_depth=max_depth, max_items=max_items)

        self._excluded_types: set[type] = set()
        self._excluded_fields: set[FieldId] = set()
        self._type_renderers: dict[type, Renderer] = {}
        self._numeric_formatters: dict[type, Renderer] = {}
        self._field_renderers: dict[FieldId, Renderer] = {}
        self._field_max_length: dict[FieldId, int] = {}
        self._max_length: int = 0

    def __repr__(self) -> str:
        owner = "None" if self._owner is None else class_name(self._owner)
        return (f"{type(self).__name__}(owner={owner}, max_depth={self.max_depth}, "
                f"max_items={self.max_items})")

    # Class Methods ------------------------------------

    @classmethod
    def for_type(cls, owner: type, **kwargs: Any) -> "ObjectPrinter":
        """Create a printer bound to owner, accepts the same keyword arguments as ObjectPrinter()."""
        return cls(owner, **kwargs)

    # Properties ---------------------------------------

    @property
    def owner(self) -> type | None:
        return self._owner

    @property
    def options(self) -> PrintOptions:
        return self._options

    @property
    def max_depth(self) -> int:
        return self._options.max_depth

    @property
    def max_items(self) -> int:
        return self._options.max_items

    @property
    def max_length(self) -> int:
        """Printer-wide text truncation limit, 0 if disabled."""
        return self._max_length

    # Configuration ------------------------------------

    def excluding(self, target: type | FieldSelector) -> "ObjectPrinter":
        """
        Never print values of a type, or a single field.

        Args:
            target: A type, or a field selector (callable, field name, FieldId).

        Returns:
            Self, to allow chaining.
        """
        if isinstance(target, type):
            return self.exclude_type(target)
        return self.exclude_field(target)

    def exclude_type(self, typ: type) -> "ObjectPrinter":
        """Never print values of exactly this runtime type, nor fields declared with it."""
        if not isinstance(typ, type):
            raise TypeError(f"typ must be a type, got {fmt_type(typ)}")
        self._excluded_types.add(typ)
        return self

    def exclude_field(self, selector: FieldSelector) -> "ObjectPrinter":
        """
        Never print the selected field.

        Raises:
            InvalidSelectorError: If selector does not denote a declared field.
        """
        self._excluded_fields.add(resolve_selector(selector, self._owner))
        return self

    def printing(self, target: type | FieldSelector) -> PropertyPrintingConfig:
        """
        Start configuring how a type or a single field is printed.

        Args:
            target: A type for a type-wide rule, or a field selector for a single field.

        Returns:
            PropertyPrintingConfig; call using(), with_formatter() or truncate_to() on it
            to commit the rule and get the printer back.

        Raises:
            InvalidSelectorError: If target is neither a type nor a valid field selector.

        Examples:
            >>> printer = ObjectPrinter(Person).printing(float).using(lambda x: f"{x:.2f}")
            >>> printer = printer.printing(lambda p: p.name).using(str.upper)
        """
        if isinstance(target, type):
            return PropertyPrintingConfig(self, type_=target)

        field = resolve_selector(target, self._owner)
        declared = declared_fields(field.owner, include_private=True, include_properties=True)
        return PropertyPrintingConfig(self, type_=declared.get(field.name), field=field)

    def trimming_to(self, length: int) -> "ObjectPrinter":
        """Set the printer-wide truncation limit for text fields."""
        return self.set_truncation(length)

    def set_truncation(self, length: int, field: FieldId | None = None) -> "ObjectPrinter":
        """
        Set the text truncation limit printer-wide (field is None) or for a single field.

        Non-positive length disables truncation. A limit on a field not declared as str
        is stored but has no effect on non-text values; a UserWarning is issued.

        Raises:
            TypeError: If length is not an int or field is not a FieldId.
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"length must be an int, got {fmt_type(length)}")

        if field is None:
            self._max_length = length
            return self

        if not isinstance(field, FieldId):
            raise TypeError(f"field must be a FieldId or None, got {fmt_type(field)}")

        declared = declared_fields(field.owner, include_private=True, include_properties=True).get(field.name)
        if declared is not None and declared is not str:
            warnings.warn(
                f"Truncation of {field} has no effect, declared type is {fmt_type(declared, style='equal')}",
                UserWarning,
                stacklevel=3
            )
        self._field_max_length[field] = length
        return self

    def set_renderer(self, render: Renderer, type_: Any = None, field: FieldId | None = None) -> "ObjectPrinter":
        """
        Register render for all values of type_ (field is None) or for a single field.

        Raises:
            TypeError: If render is not callable, or type_ is not a type for a type-wide rule.
        """
        self._register(render, self._type_renderers, type_, field)
        return self

    def set_numeric_formatter(self, format: Renderer, type_: Any = None,
                              field: FieldId | None = None) -> "ObjectPrinter":
        """
        Register a number formatter for type_ (field is None) or for a single field.

        Type-wide formatters are consulted after type renderers for the same type.

        Raises:
            TypeError: If format is not callable, or type_ is not a type for a type-wide rule.
        """
        self._register(format, self._numeric_formatters, type_, field)
        return self

    def copy(self) -> "ObjectPrinter":
        """Return an independent printer with the same owner, options and rules."""
        other = copy(self)
        other._excluded_types = set(self._excluded_types)
        other._excluded_fields = set(self._excluded_fields)
        other._type_renderers = dict(self._type_renderers)
        other._numeric_formatters = dict(self._numeric_formatters)
        other._field_renderers = dict(self._field_renderers)
        other._field_max_length = dict(self._field_max_length)
        return other

    # Printing -----------------------------------------

    def print_to_string(self, obj: Any) -> str:
        """
        Print obj and its nested values to text.

        Raises:
            DepthExceededError: If nesting is deeper than max_depth.
            SequenceTooLongError: If a mapping or sequence holds more than max_items entries.

        Examples:
            >>> ObjectPrinter().print_to_string([1, 2])
            '1 2\\n'
            >>> ObjectPrinter().print_to_string({"a": 1})
            '[a]: 1\\n'
        """
        return self._print(obj, 0)

    # Private Methods ----------------------------------

    def _register(self, render: Renderer, type_registry: dict, type_: Any, field: FieldId | None) -> None:
        if not callable(render):
            raise TypeError(f"renderer must be callable, got {fmt_type(render)}")

        if field is not None:
            if not isinstance(field, FieldId):
                raise TypeError(f"field must be a FieldId or None, got {fmt_type(field)}")
            self._field_renderers[field] = render
        elif isinstance(type_, type):
            type_registry[type_] = render
        else:
            raise TypeError(f"type_ must be a type for a type-wide rule, got {fmt_value(type_)}")

    def _print(self, obj: Any, depth: int) -> str:
        opt = self._options
        lb = opt.line_break

        if obj is None:
            return opt.null_repr + lb

        if self._is_excluded(obj):
            return ""

        if depth > opt.max_depth:
            raise DepthExceededError(opt.max_depth)

        obj_type = type(obj)
        if render := self._type_renderers.get(obj_type):
            return render(obj) + lb

        if render := self._numeric_formatters.get(obj_type):
            return render(obj) + lb

        if self._is_terminal(obj):
            return str(obj) + lb

        if _is_mapping(obj):
            return self._print_mapping(obj, depth)

        if isinstance(obj, abc.Iterable):
            return self._print_sequence(obj, depth)

        return self._print_object(obj, depth)

    def _print_object(self, obj: Any, depth: int) -> str:
        opt = self._options
        indent = opt.indent * (depth + 1)
        lines = [class_name(obj) + opt.line_break]

        fields_ = instance_fields(obj, include_private=opt.include_private,
                                  include_properties=opt.include_properties)
        for name, declared, value in fields_:
            field = field_id(type(obj), name)
            if field in self._excluded_fields or declared in self._excluded_types or self._is_excluded(value):
                continue

            if render := self._field_renderers.get(field):
                text = render(value) + opt.line_break
            else:
                text = self._print(value, depth + 1)

            if isinstance(value, str) or (declared is str and value is not None):
                text = self._truncate(text, field)

            lines.append(f"{indent}{name} = {text}")

        return "".join(lines)

    def _print_mapping(self, obj: Any, depth: int) -> str:
        opt = self._options

        length = len(obj) if isinstance(obj, abc.Sized) else None
        if length is not None and length > opt.max_items:
            raise SequenceTooLongError(opt.max_items, length)

        entries = []
        for index, (key, value) in enumerate(obj.items()):
            if index >= opt.max_items:
                raise SequenceTooLongError(opt.max_items, length)
            if self._is_excluded(key) or self._is_excluded(value):
                continue
            key_text = self._print(key, depth)
            value_text = self._print(value, depth)
            key_text = self._wrap_collection(strip_line_break(key_text, opt.line_break), key)
            value_text = self._wrap_collection(strip_line_break(value_text, opt.line_break), value)
            entries.append(f"[{key_text}]: {value_text}")

        return " ".join(entries) + opt.line_break

    def _print_sequence(self, obj: abc.Iterable, depth: int) -> str:
        # Checked per index, so generators are limited too
        opt = self._options

        items = []
        for index, item in enumerate(obj):
            if index >= opt.max_items:
                length = len(obj) if isinstance(obj, abc.Sized) else None
                raise SequenceTooLongError(opt.max_items, length)
            if self._is_excluded(item):
                continue
            text = self._print(item, depth)
            items.append(self._wrap_collection(strip_line_break(text, opt.line_break), item))

        if isinstance(obj, abc.Set):
            items.sort()

        return " ".join(items) + opt.line_break

    def _wrap_collection(self, text: str, obj: Any) -> str:
        """Wrap printed text as TypeName(text) if obj is a non-terminal collection."""
        if obj is None or self._is_terminal(obj):
            return text
        if _is_mapping(obj) or isinstance(obj, abc.Iterable):
            name = class_name(obj, fully_qualified=self._options.fully_qualified_names)
            return f"{name}({text})"
        return text

    def _truncate(self, text: str, field: FieldId) -> str:
        max_length = self._field_max_length.get(field, self._max_length)
        if max_length <= 0:
            return text
        lb = self._options.line_break
        return truncate_text(strip_line_break(text, lb), max_length, ellipsis=self._options.ellipsis) + lb

    def _is_excluded(self, obj: Any) -> bool:
        return obj is not None and type(obj) in self._excluded_types

    def _is_terminal(self, obj: Any) -> bool:
        return isinstance(obj, self._options.terminal_types)


# Methods --------------------------------------------------------------------------------------------------------------

def print_to_string(obj: Any,
                    configure: Callable[[ObjectPrinter], ObjectPrinter] | None = None,
                    *,
                    max_depth: int | UnsetType = UNSET,
                    max_items: int | UnsetType = UNSET,
                    options: PrintOptions | None = None) -> str:
    """
    Print obj with a printer bound to its type, optionally configured first.

    Args:
        obj: Value to print.
        configure: Callable receiving a fresh printer and returning the configured one.
        max_depth: Maximum nesting level.
        max_items: Maximum mapping or sequence length.
        options: Rendering options.

    Returns:
        Printed text.

    Raises:
        TypeError: If configure is not callable or does not return an ObjectPrinter.

    Examples:
        >>> print_to_string(42)
        '42\\n'
        >>> text = print_to_string(person, lambda p: p.excluding(str))
    """
    if configure is not None and not callable(configure):
        raise TypeError(f"configure must be callable or None, got {fmt_type(configure)}")

    owner = None if obj is None else type(obj)
    printer = ObjectPrinter(owner, max_depth=max_depth, max_items=max_items, options=options)
    if configure is not None:
        printer = configure(printer)
        if not isinstance(printer, ObjectPrinter):
            raise TypeError(f"configure must return an ObjectPrinter, got {fmt_type(printer)}")
    return printer.print_to_string(obj)


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_mapping(obj: Any) -> bool:
    """Return True for Mappings and dict-like iterables with items() and keys() methods."""
    if isinstance(obj, abc.Mapping):
        return True
    return (isinstance(obj, abc.Iterable)
            and callable(getattr(obj, "items", None))
            and callable(getattr(obj, "keys", None)))
