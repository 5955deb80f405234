"""Graph walk that resolves version metadata on live objects."""

from __future__ import annotations

from compatmap.mapping.context import PropertyValue, TraversalContext
from compatmap.mapping.mapper import CompatibilityMapper

__all__ = ["CompatibilityMapper", "PropertyValue", "TraversalContext"]
