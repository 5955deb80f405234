"""Schema: the ordered set of property descriptors for one type."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from compatmap.errors import SchemaDefinitionError
from compatmap.schema.descriptor import PropertyDescriptor


class Schema:
    """Immutable, ordered description of a type's properties.

    Declaration order drives the default traversal order of the mapper.
    """

    def __init__(self, type_: type, properties: Iterable[PropertyDescriptor]):
        self._type = type_
        self._properties = tuple(properties)
        by_name: dict[str, PropertyDescriptor] = {}
        for prop in self._properties:
            if prop.name in by_name:
                raise SchemaDefinitionError(
                    f"{type_.__name__} declares property '{prop.name}' twice"
                )
            by_name[prop.name] = prop
        self._by_name = MappingProxyType(by_name)

    @property
    def type(self) -> type:
        return self._type

    def get_property(self, name: str) -> PropertyDescriptor | None:
        """Look up a property by name, None if the type has no such property."""
        return self._by_name.get(name)

    def get_properties(self) -> tuple[PropertyDescriptor, ...]:
        """All properties in declaration order."""
        return self._properties

    def __iter__(self) -> Iterator[PropertyDescriptor]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"Schema({self._type.__name__}: {', '.join(self._by_name)})"
