"""Property descriptors: one named, typed, accessor-bound property of a schema."""

from __future__ import annotations

import enum
import types
import typing
import uuid
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from compatmap.schema.metadata import Added, MovedFrom, Removed

# Leaf types: never walked structurally, never default-constructed by the walk
SIMPLE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    Decimal,
    date,
    time,
    datetime,
    timedelta,
    uuid.UUID,
    enum.Enum,
    list,
    tuple,
    dict,
    set,
    frozenset,
    type(None),
)


def is_simple_type(declared_type: Any) -> bool:
    """True if properties of this declared type hold leaf values.

    Anything that is not a plain class (unions, Any, type variables,
    generic aliases of builtin containers) counts as a leaf.
    """
    if declared_type is Any:
        return True
    origin = typing.get_origin(declared_type)
    if origin is not None:
        declared_type = origin
    if not isinstance(declared_type, type):
        return True
    return issubclass(declared_type, SIMPLE_TYPES)


def is_simple_value(value: Any) -> bool:
    """True if this runtime value is a leaf."""
    return is_simple_type(type(value))


def unwrap_type(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split an annotation into its declared type and its Annotated extras.

    ``Annotated[str | None, MovedFrom("x")]`` becomes ``(str, (MovedFrom("x"),))``.
    """
    extras: tuple[Any, ...] = ()
    if typing.get_origin(annotation) is typing.Annotated:
        args = typing.get_args(annotation)
        annotation, extras = args[0], tuple(args[1:])

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            annotation = members[0]
    return annotation, extras


def accepts(declared_type: Any, value: Any) -> bool:
    """True if value may be assigned to a property of declared_type."""
    target = typing.get_origin(declared_type) or declared_type
    if target is Any or not isinstance(target, type):
        return True
    if isinstance(value, target):
        return True
    # numeric tower: an int is a valid float/complex
    if target in (float, complex) and isinstance(value, int) and not isinstance(value, bool):
        return True
    return False


class PropertyDescriptor:
    """A property's name, declared type, bound get/set and version metadata.

    Getter and setter default to plain attribute access by name.
    """

    def __init__(
        self,
        name: str,
        declared_type: Any = Any,
        *,
        moved_from: MovedFrom | None = None,
        added: Added | None = None,
        removed: Removed | None = None,
        getter: Callable[[Any], Any] | None = None,
        setter: Callable[[Any, Any], None] | None = None,
    ):
        self.name = name
        self.declared_type = declared_type
        self.moved_from = moved_from
        self.added = added
        self.removed = removed
        self._getter = getter
        self._setter = setter

    @property
    def is_linked(self) -> bool:
        """True if the property carries MovedFrom and/or Added metadata."""
        return self.moved_from is not None or self.added is not None

    @property
    def is_tagged(self) -> bool:
        """True if the property carries any version metadata."""
        return self.is_linked or self.removed is not None

    @property
    def is_simple(self) -> bool:
        return is_simple_type(self.declared_type)

    def get(self, instance: Any) -> Any:
        if self._getter is not None:
            return self._getter(instance)
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        """Write value to instance.

        Raises:
            TypeError: If value is not an instance of the declared type
        """
        if value is not None and not accepts(self.declared_type, value):
            raise TypeError(
                f"Cannot assign {type(value).__name__} to "
                f"{type(instance).__name__}.{self.name} "
                f"(declared {getattr(self.declared_type, '__name__', self.declared_type)})"
            )
        if self._setter is not None:
            self._setter(instance, value)
        else:
            setattr(instance, self.name, value)

    def __repr__(self) -> str:
        tags = [
            repr(m) for m in (self.moved_from, self.added, self.removed) if m is not None
        ]
        type_name = getattr(self.declared_type, "__name__", repr(self.declared_type))
        return f"PropertyDescriptor({self.name}: {type_name}{', ' if tags else ''}{', '.join(tags)})"
