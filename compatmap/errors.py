"""Structured error hierarchy for compatmap."""

from __future__ import annotations

from typing import Any


class CompatmapError(Exception):
    """Base for all compatmap errors."""

    pass


class ConfigurationError(CompatmapError):
    """Declared version metadata is broken. Fatal to the current mapping pass."""

    pass


class SchemaDefinitionError(ConfigurationError):
    """A type's property declarations could not be turned into a schema."""

    pass


class UnknownPropertyError(ConfigurationError):
    """A path segment names a property the schema does not have."""

    def __init__(self, segment: str, path: str, owner_type: type):
        self.segment = segment
        self.path = path
        self.owner_type = owner_type
        super().__init__(
            f"Path '{path}' contains unknown property '{segment}' of {owner_type.__name__}"
        )


class NoParentContextError(ConfigurationError):
    """A '..' segment tried to ascend above the root object."""

    pass


class InstantiationError(ConfigurationError):
    """A type offers no zero-argument construction."""

    def __init__(self, type_: Any):
        self.type_ = type_
        name = getattr(type_, "__name__", repr(type_))
        super().__init__(f"Cannot default-construct {name}")


class ProviderError(ConfigurationError):
    """A provider raised while computing a default value."""

    def __init__(self, provider: Any, property_name: str):
        self.provider = provider
        self.property_name = property_name
        name = getattr(provider, "__name__", type(provider).__name__)
        super().__init__(f"Provider {name} failed for property '{property_name}'")


class CyclicConfigurationError(ConfigurationError):
    """MovedFrom/depends_on links loop back to a property still being processed."""

    def __init__(self, property_name: str, owner_type: type):
        self.property_name = property_name
        self.owner_type = owner_type
        super().__init__(
            f"Cyclic configuration detected at {owner_type.__name__}.{property_name}"
        )


class VersionError(CompatmapError):
    """A version name or model type is not known to a version chain."""

    pass
