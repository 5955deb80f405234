"""Version metadata markers attached to model properties.

Markers are declared with ``typing.Annotated``::

    class CityV3(BaseModel):
        zip_code: Annotated[str | None, MovedFrom("../zip_code")] = None

A property may carry a MovedFrom together with an Added or Removed marker.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from compatmap.mapping.context import TraversalContext


@runtime_checkable
class Provider(Protocol):
    """Pluggable computation of a default value from the current graph position."""

    def compute(self, context: TraversalContext) -> Any:
        """Return the value for the property owned by context.instance."""
        ...


# A Provider class (built per use), a Provider instance, or a plain callable
ProviderSpec = Union[type, Provider, Callable[["TraversalContext"], Any]]


@dataclass(frozen=True)
class MovedFrom:
    """The property's value is sourced from / mirrored to the property at ``path``."""

    path: str


@dataclass(frozen=True)
class Added:
    """The property did not exist in an older version.

    When absent, its value comes from ``provider``, else ``default_value``,
    else (for nested types) a default-built instance. Paths listed in
    ``depends_on`` are resolved first.
    """

    default_value: Any = None
    provider: ProviderSpec | None = None
    depends_on: tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.depends_on, str):
            object.__setattr__(self, "depends_on", (self.depends_on,))
        elif not isinstance(self.depends_on, tuple):
            object.__setattr__(self, "depends_on", tuple(self.depends_on))


@dataclass(frozen=True)
class Removed:
    """The property no longer exists in a newer version.

    It is still computed on demand when a sibling's ``depends_on`` needs it.
    """

    default_value: Any = None
    provider: ProviderSpec | None = None


MARKER_TYPES = (MovedFrom, Added, Removed)


def collect_markers(
    extras: Iterable[Any],
) -> tuple[MovedFrom | None, Added | None, Removed | None]:
    """Pick the version markers out of Annotated metadata.

    Raises:
        ValueError: If the same kind of marker appears twice
    """
    found: dict[type, Any] = {}
    for extra in extras:
        if isinstance(extra, MARKER_TYPES):
            kind = type(extra)
            if kind in found:
                raise ValueError(f"duplicate {kind.__name__} marker")
            found[kind] = extra
    return found.get(MovedFrom), found.get(Added), found.get(Removed)
