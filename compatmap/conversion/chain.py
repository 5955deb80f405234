"""Version chain: the ordered model types of one evolving shape, oldest first."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from compatmap.errors import VersionError

logger = logging.getLogger(__name__)


class VersionChain:
    """Ordered registry of (version name, model type) pairs.

    Usage:
        addresses = VersionChain("address")

        @addresses.register("v1")
        class AddressV1(BaseModel): ...
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._names: list[str] = []
        self._types: dict[str, type] = {}
        self._versions: dict[type, str] = {}

    def register(self, version: str, model_type: type | None = None):
        """Append a version. Usable directly or as a class decorator.

        Raises:
            VersionError: If the version name or the type is already registered
        """

        def decorator(type_: type) -> type:
            if version in self._types:
                raise VersionError(f"Version '{version}' already registered in chain '{self.name}'")
            if type_ in self._versions:
                raise VersionError(
                    f"{type_.__name__} already registered as version "
                    f"'{self._versions[type_]}' in chain '{self.name}'"
                )
            self._names.append(version)
            self._types[version] = type_
            self._versions[type_] = version
            logger.debug(f"Registered {type_.__name__} as {self.name}/{version}")
            return type_

        if model_type is not None:
            return decorator(model_type)
        return decorator

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def index_of(self, version: str) -> int:
        if version not in self._types:
            raise VersionError(f"Unknown version '{version}' in chain '{self.name}'")
        return self._names.index(version)

    def type_for(self, version: str) -> type:
        if version not in self._types:
            raise VersionError(f"Unknown version '{version}' in chain '{self.name}'")
        return self._types[version]

    def version_of(self, type_: type) -> str:
        """Version name of a model type (or of its nearest registered base class)."""
        for klass in type_.__mro__:
            if klass in self._versions:
                return self._versions[klass]
        raise VersionError(f"{type_.__name__} is not part of chain '{self.name}'")

    def path(self, source: str, target: str) -> list[str]:
        """Versions visited going from source to target, excluding source.

        Walks towards newer versions or towards older ones as needed.
        """
        start, end = self.index_of(source), self.index_of(target)
        if end >= start:
            return self._names[start + 1 : end + 1]
        return self._names[end:start][::-1]

    def __contains__(self, version: object) -> bool:
        return version in self._types

    def __iter__(self) -> Iterator[tuple[str, type]]:
        return ((name, self._types[name]) for name in self._names)

    def __len__(self) -> int:
        return len(self._names)

