"""Schema registry: builds and caches one Schema per concrete type.

Schemas are built lazily on first reference and kept for the lifetime of the
registry. Sources, in order of preference:

- explicit registration via ``register()`` (hand-authored descriptors)
- pydantic models (``model_fields`` + ``FieldInfo.metadata``)
- dataclasses (``fields()`` + ``Annotated`` type hints)
- any other class with annotations
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import typing
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from pydantic import BaseModel

from compatmap.errors import InstantiationError, SchemaDefinitionError
from compatmap.schema.descriptor import PropertyDescriptor, unwrap_type
from compatmap.schema.metadata import collect_markers
from compatmap.schema.schema import Schema

logger = logging.getLogger(__name__)


def _descriptor(
    owner: type, name: str, annotation: Any, extra_metadata: Iterable[Any] = ()
) -> PropertyDescriptor:
    declared_type, extras = unwrap_type(annotation)
    try:
        moved_from, added, removed = collect_markers((*extras, *extra_metadata))
    except ValueError as e:
        raise SchemaDefinitionError(f"{owner.__name__}.{name}: {e}") from e
    return PropertyDescriptor(
        name, declared_type, moved_from=moved_from, added=added, removed=removed
    )


def _type_hints(type_: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(type_, include_extras=True)
    except Exception as e:
        raise SchemaDefinitionError(
            f"Cannot resolve annotations of {type_.__name__}: {e}"
        ) from e


def _pydantic_properties(type_: type[BaseModel]) -> list[PropertyDescriptor]:
    return [
        _descriptor(type_, name, info.annotation, info.metadata)
        for name, info in type_.model_fields.items()
    ]


def _dataclass_properties(type_: type) -> list[PropertyDescriptor]:
    hints = _type_hints(type_)
    return [
        _descriptor(type_, f.name, hints.get(f.name, f.type))
        for f in dataclasses.fields(type_)
    ]


def _annotated_properties(type_: type) -> list[PropertyDescriptor]:
    properties = []
    for name, hint in _type_hints(type_).items():
        if name.startswith("_") or typing.get_origin(hint) is ClassVar:
            continue
        properties.append(_descriptor(type_, name, hint))
    return properties


def build_schema(type_: type) -> Schema:
    """Scan a type's properties and version metadata into a Schema.

    Deterministic and side-effect free. Paths inside the metadata are not
    checked here; they fail when first used.
    """
    if not isinstance(type_, type):
        raise SchemaDefinitionError(f"Cannot build a schema for non-type {type_!r}")

    if issubclass(type_, BaseModel):
        properties = _pydantic_properties(type_)
    elif dataclasses.is_dataclass(type_):
        properties = _dataclass_properties(type_)
    else:
        properties = _annotated_properties(type_)
    return Schema(type_, properties)


class SchemaRegistry:
    """Thread-safe cache of schemas keyed by type identity.

    Independent mapping passes may run concurrently against one registry;
    get-or-build is atomic per registry.
    """

    def __init__(self):
        self._schemas: dict[type, Schema] = {}
        self._lock = threading.Lock()

    def get(self, type_: type) -> Schema:
        """Return the cached Schema for type_, building it on first request."""
        schema = self._schemas.get(type_)
        if schema is not None:
            return schema

        with self._lock:
            schema = self._schemas.get(type_)
            if schema is None:
                schema = build_schema(type_)
                self._schemas[type_] = schema
                logger.debug(f"Built schema for {type_.__name__} ({len(schema)} properties)")
        return schema

    def register(self, type_: type, properties: Iterable[PropertyDescriptor]) -> Schema:
        """Register hand-authored descriptors for a type.

        Overrides whatever schema was cached or would have been built.
        """
        schema = Schema(type_, properties)
        with self._lock:
            if type_ in self._schemas:
                logger.warning(f"Schema for {type_.__name__} already registered, overriding")
            self._schemas[type_] = schema
        logger.debug(f"Registered schema: {type_.__name__}")
        return schema

    def declare(self, *properties: PropertyDescriptor) -> Callable[[type], type]:
        """Decorator form of register().

        Usage:
            @registry.declare(
                PropertyDescriptor("name", str),
                PropertyDescriptor("label", str, moved_from=MovedFrom("name")),
            )
            class Record: ...
        """

        def decorator(type_: type) -> type:
            self.register(type_, properties)
            return type_

        return decorator

    def new_instance(self, type_: Any) -> Any:
        """Default-construct a value of type_.

        Raises:
            InstantiationError: If type_ offers no zero-argument construction
        """
        if not isinstance(type_, type) or type_ is Any:
            raise InstantiationError(type_)
        try:
            return type_()
        except Exception as e:
            raise InstantiationError(type_) from e

    def clear(self) -> None:
        """Drop all cached and registered schemas. Useful for testing."""
        with self._lock:
            self._schemas.clear()
        logger.debug("Cleared schema registry")

    def __contains__(self, type_: object) -> bool:
        return type_ in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


# Process-wide default registry
schema_registry = SchemaRegistry()
