"""compatmap: convert object graphs between versions of an evolving model.

Properties declare how they relate to other versions (MovedFrom, Added,
Removed); the CompatibilityMapper resolves any instance against those
declarations and the InterVersionConverter walks a VersionChain hop by hop.
"""

from __future__ import annotations

from compatmap.config import MapperSettings
from compatmap.conversion import InterVersionConverter, VersionChain
from compatmap.errors import (
    CompatmapError,
    ConfigurationError,
    CyclicConfigurationError,
    InstantiationError,
    NoParentContextError,
    ProviderError,
    SchemaDefinitionError,
    UnknownPropertyError,
    VersionError,
)
from compatmap.mapping import CompatibilityMapper, PropertyValue, TraversalContext
from compatmap.render import SchemaRenderer
from compatmap.schema import (
    Added,
    MovedFrom,
    PropertyDescriptor,
    Provider,
    Removed,
    Schema,
    SchemaRegistry,
    schema_registry,
)

__version__ = "0.1.0"

__all__ = [
    "Added",
    "CompatibilityMapper",
    "CompatmapError",
    "ConfigurationError",
    "CyclicConfigurationError",
    "InstantiationError",
    "InterVersionConverter",
    "MapperSettings",
    "MovedFrom",
    "NoParentContextError",
    "PropertyDescriptor",
    "PropertyValue",
    "Provider",
    "ProviderError",
    "Removed",
    "Schema",
    "SchemaDefinitionError",
    "SchemaRegistry",
    "SchemaRenderer",
    "TraversalContext",
    "UnknownPropertyError",
    "VersionChain",
    "VersionError",
    "schema_registry",
]
