"""Inter-version conversion along a VersionChain.

Each hop materializes every linked and removed value on the current object,
copies the same-named properties the next version can hold into a fresh
instance of that version, and resolves the new instance.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from compatmap.conversion.chain import VersionChain
from compatmap.errors import VersionError
from compatmap.mapping.mapper import CompatibilityMapper
from compatmap.schema.descriptor import accepts, is_simple_type, is_simple_value
from compatmap.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class InterVersionConverter:
    """Convert instances between the versions of one chain."""

    def __init__(
        self,
        chain: VersionChain,
        mapper: CompatibilityMapper | None = None,
        registry: SchemaRegistry | None = None,
    ):
        self.chain = chain
        self.mapper = mapper if mapper is not None else CompatibilityMapper(registry)
        self.registry = registry if registry is not None else self.mapper.registry

    def convert(self, obj: Any, target_version: str, source_version: str | None = None) -> Any:
        """Convert obj to the shape of target_version, one version at a time.

        Args:
            obj: Instance of a version of the chain. Resolved in place.
            target_version: Name of the version to produce
            source_version: Version of obj, looked up from its type if omitted

        Returns:
            Instance of target_version's type (obj itself if already there)

        Raises:
            VersionError: If a version is unknown to the chain
            ConfigurationError: If the declared metadata is broken
        """
        if source_version is None:
            source_version = self.chain.version_of(type(obj))
        hops = self.chain.path(source_version, target_version)
        logger.info(
            f"Converting {type(obj).__name__} from {source_version} to {target_version} "
            f"({len(hops)} hops)"
        )

        current = self.mapper.map(obj)
        for version in hops:
            target_type = self.chain.type_for(version)
            logger.debug(f"Hop {type(current).__name__} -> {target_type.__name__}")
            following = self.registry.new_instance(target_type)
            self.copy_properties(current, following)
            current = self.mapper.map(following)
        return current

    def convert_to_higher_version(self, target_type: type, obj: Any, source_version: str) -> Any:
        """Convert obj, known to be source_version, up to the version of target_type."""
        target_version = self.chain.version_of(target_type)
        if self.chain.index_of(target_version) < self.chain.index_of(source_version):
            raise VersionError(f"{target_version} is older than {source_version}")
        return self.convert(obj, target_version, source_version)

    def convert_to_lower_version(self, target_version: str, obj: Any) -> Any:
        """Convert obj down to target_version; the source version comes from obj's type."""
        source_version = self.chain.version_of(type(obj))
        if self.chain.index_of(target_version) > self.chain.index_of(source_version):
            raise VersionError(f"{target_version} is newer than {source_version}")
        return self.convert(obj, target_version, source_version)

    def copy_properties(self, source: Any, target: Any) -> None:
        """Copy every same-named, non-null property target can hold from source."""
        source_schema = self.registry.get(type(source))
        for descriptor in self.registry.get(type(target)):
            source_descriptor = source_schema.get_property(descriptor.name)
            if source_descriptor is None:
                continue
            value = source_descriptor.get(source)
            if value is None:
                continue

            copied = self._copy_value(value, descriptor.declared_type)
            if copied is None:
                logger.debug(
                    f"Skipping {type(source).__name__}.{descriptor.name}: "
                    f"{type(value).__name__} does not fit {type(target).__name__}"
                )
                continue
            descriptor.set(target, copied)

    def _copy_value(self, value: Any, declared_type: Any) -> Any:
        if is_simple_value(value) or is_simple_type(declared_type):
            return copy.deepcopy(value) if accepts(declared_type, value) else None

        nested = self.registry.new_instance(declared_type)
        self.copy_properties(value, nested)
        return nested
