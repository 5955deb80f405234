"""Per-type schemas of versioned properties."""

from __future__ import annotations

from compatmap.schema.descriptor import PropertyDescriptor, is_simple_type, is_simple_value
from compatmap.schema.metadata import Added, MovedFrom, Provider, Removed
from compatmap.schema.registry import SchemaRegistry, build_schema, schema_registry
from compatmap.schema.schema import Schema

__all__ = [
    "Added",
    "MovedFrom",
    "PropertyDescriptor",
    "Provider",
    "Removed",
    "Schema",
    "SchemaRegistry",
    "build_schema",
    "is_simple_type",
    "is_simple_value",
    "schema_registry",
]
