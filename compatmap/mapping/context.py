"""Traversal state for one mapping pass: contexts and property values.

Contexts are created fresh for every mapping call and discarded with it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from compatmap.errors import NoParentContextError
from compatmap.schema.descriptor import PropertyDescriptor
from compatmap.schema.metadata import Added, MovedFrom, Removed


class TraversalContext:
    """Current position in the object graph: an instance and the context that reached it."""

    __slots__ = ("_instance", "_parent")

    def __init__(self, instance: Any, parent: TraversalContext | None = None):
        self._instance = instance
        self._parent = parent

    @classmethod
    def root(cls, instance: Any) -> TraversalContext:
        return cls(instance)

    def child(self, instance: Any) -> TraversalContext:
        """Context for a nested value reached from this one."""
        return TraversalContext(instance, self)

    def parent(self) -> TraversalContext:
        """The context that reached this one.

        Raises:
            NoParentContextError: If this is the root context
        """
        if self._parent is None:
            raise NoParentContextError(
                f"{type(self._instance).__name__} is the root object and has no parent"
            )
        return self._parent

    @property
    def instance(self) -> Any:
        return self._instance

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors())

    def ancestors(self) -> Iterator[TraversalContext]:
        """Walk upward from the parent to the root."""
        current = self._parent
        while current is not None:
            yield current
            current = current._parent

    def __repr__(self) -> str:
        return f"TraversalContext({type(self._instance).__name__}, depth={self.depth})"


class PropertyValue:
    """A property descriptor bound to the instance of a context."""

    __slots__ = ("descriptor", "context")

    def __init__(self, descriptor: PropertyDescriptor, context: TraversalContext):
        self.descriptor = descriptor
        self.context = context

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def declared_type(self) -> Any:
        return self.descriptor.declared_type

    @property
    def moved_from(self) -> MovedFrom | None:
        return self.descriptor.moved_from

    @property
    def added(self) -> Added | None:
        return self.descriptor.added

    @property
    def removed(self) -> Removed | None:
        return self.descriptor.removed

    def get(self) -> Any:
        return self.descriptor.get(self.context.instance)

    def set(self, value: Any) -> None:
        self.descriptor.set(self.context.instance, value)

    def __repr__(self) -> str:
        return f"PropertyValue({type(self.context.instance).__name__}.{self.name})"
