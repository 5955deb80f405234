"""Compatibility mapper: resolves a live object graph against its version metadata.

For every property of an object, in declaration order:

- untagged nested properties are walked structurally (default-built if null)
- linked properties (MovedFrom / Added) that are null are resolved lazily
  from their move source, their dependencies and their defaults
- linked properties that hold a value propagate it eagerly to their move
  targets and materialize Removed dependencies that are still null

Either side of a move can be visited first; the outcome is the same.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from compatmap.config import MapperSettings
from compatmap.errors import (
    ConfigurationError,
    CyclicConfigurationError,
    ProviderError,
    UnknownPropertyError,
)
from compatmap.mapping.context import PropertyValue, TraversalContext
from compatmap.schema.descriptor import is_simple_type, is_simple_value
from compatmap.schema.metadata import ProviderSpec
from compatmap.schema.registry import SchemaRegistry, schema_registry

logger = logging.getLogger(__name__)


class CompatibilityMapper:
    """Convert an instance of any version's shape into the shape of its own type.

    The mapper itself is stateless; all traversal state lives in a per-call
    pass, so one mapper may serve concurrent passes over different graphs.
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        settings: MapperSettings | None = None,
    ):
        self.registry = registry if registry is not None else schema_registry
        self.settings = settings if settings is not None else MapperSettings()

    def map(self, obj: Any, context: TraversalContext | None = None) -> Any:
        """Resolve every property of obj in place and return obj.

        Args:
            obj: Root of the object graph. Must not be mutated concurrently.
            context: Position of obj when mapping a subtree of a larger graph

        Raises:
            ConfigurationError: If the declared metadata is broken
        """
        if context is None:
            context = TraversalContext.root(obj)
        _MappingPass(self.registry, self.settings).map_object(obj, context)
        return obj

    def property_value(self, obj: Any, path: str) -> PropertyValue:
        """Resolve a path relative to obj as root, e.g. for inspection in tests."""
        return _MappingPass(self.registry, self.settings).property_value(
            path, TraversalContext.root(obj)
        )


class _MappingPass:
    """State of one top-level map() call."""

    def __init__(self, registry: SchemaRegistry, settings: MapperSettings):
        self.registry = registry
        self.settings = settings
        # (operation, descriptor id, instance id) currently on the stack
        self._active: set[tuple[str, int, int]] = set()

    def map_object(self, obj: Any, context: TraversalContext) -> None:
        schema = self.registry.get(type(obj))

        for descriptor in schema:
            if not descriptor.is_linked:
                value = descriptor.get(obj)
                # Removed-only properties are only filled when a dependent needs them
                if value is None and descriptor.removed is None and not descriptor.is_simple:
                    value = self.registry.new_instance(descriptor.declared_type)
                    descriptor.set(obj, value)
                if value is not None and not is_simple_value(value):
                    self.map_object(value, context.child(value))
                continue

            property_value = PropertyValue(descriptor, context)
            value = descriptor.get(obj)
            if value is None:
                self.resolve(property_value)
            else:
                self.propagate(property_value, value)
                if not is_simple_value(value):
                    self.map_object(value, context.child(value))

    def resolve(self, property_value: PropertyValue) -> None:
        """Fill a null property from its move source, dependencies and defaults."""
        if property_value.get() is not None:
            return

        with self._visiting("resolve", property_value):
            context = property_value.context
            moved_from = property_value.moved_from
            if moved_from is not None:
                source = self.property_value(moved_from.path, context)
                value = source.get()
                if value is None:
                    self.resolve(source)
                    value = source.get()
                if value is not None:
                    logger.debug(f"Resolved {property_value} from {source}")
                    property_value.set(value)
                    return

            default_value, provider = None, None
            added = property_value.added
            if added is not None:
                for dependency in added.depends_on:
                    dependency_value = self.property_value(dependency, context)
                    if dependency_value.get() is None:
                        self.resolve(dependency_value)
                default_value, provider = added.default_value, added.provider

            self.assign_default(property_value, provider, default_value)

    def propagate(self, property_value: PropertyValue, value: Any) -> None:
        """Push a present value to its move target and materialize removed dependencies."""
        with self._visiting("propagate", property_value):
            context = property_value.context
            moved_from = property_value.moved_from
            if moved_from is not None:
                target = self.property_value(moved_from.path, context)
                logger.debug(f"Propagating {property_value} to {target}")
                target.set(value)
                self.propagate(target, value)

            added = property_value.added
            if added is not None:
                for dependency in added.depends_on:
                    self.materialize_removed(self.property_value(dependency, context))

    def materialize_removed(self, property_value: PropertyValue) -> None:
        """Compute a null Removed property so a newer sibling's dependency exists."""
        removed = property_value.removed
        if removed is None or property_value.get() is not None:
            return

        self.assign_default(property_value, removed.provider, removed.default_value)
        value = property_value.get()
        if value is not None:
            logger.debug(f"Materialized removed property {property_value}")
            self.propagate(property_value, value)

    def assign_default(
        self, property_value: PropertyValue, provider: ProviderSpec | None, default_value: Any
    ) -> None:
        """Set a provider result, else the literal default, else a default-built nested value."""
        context = property_value.context
        if provider is not None:
            property_value.set(self.compute(provider, property_value))
        elif default_value is not None:
            property_value.set(default_value)
        elif not is_simple_type(property_value.declared_type):
            instance = self.registry.new_instance(property_value.declared_type)
            property_value.set(instance)
            self.map_object(instance, context.child(instance))

    def compute(self, provider: ProviderSpec, property_value: PropertyValue) -> Any:
        if isinstance(provider, type):
            provider = self.registry.new_instance(provider)
        compute = getattr(provider, "compute", provider)
        try:
            return compute(property_value.context)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ProviderError(provider, property_value.name) from e

    def property_value(self, path: str, context: TraversalContext) -> PropertyValue:
        """Navigate a '/'-separated path relative to the object of context.

        '..' ascends to the parent context. Null intermediate values are
        default-built in memory only; just the terminal property is bound.
        """
        segments = path.split(self.settings.path_separator)
        schema = self.registry.get(type(context.instance))
        last = len(segments) - 1

        for index, segment in enumerate(segments):
            if segment == self.settings.parent_segment:
                if index == last:
                    raise ConfigurationError(f"Path '{path}' must end in a property name")
                context = context.parent()
                schema = self.registry.get(type(context.instance))
                continue

            descriptor = schema.get_property(segment)
            if descriptor is None:
                raise UnknownPropertyError(segment, path, schema.type)
            if index == last:
                return PropertyValue(descriptor, context)

            value = descriptor.get(context.instance)
            if value is None:
                value = self.registry.new_instance(descriptor.declared_type)
            context = context.child(value)
            schema = self.registry.get(type(value))

        raise ConfigurationError(f"Path '{path}' is empty")

    @contextmanager
    def _visiting(self, operation: str, property_value: PropertyValue) -> Iterator[None]:
        if not self.settings.detect_cycles:
            yield
            return

        key = (operation, id(property_value.descriptor), id(property_value.context.instance))
        if key in self._active:
            raise CyclicConfigurationError(
                property_value.name, type(property_value.context.instance)
            )
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)
