"""Shared test fixtures for the compatmap test suite."""

from __future__ import annotations

import pytest

from compatmap import CompatibilityMapper, InterVersionConverter, MapperSettings, SchemaRegistry
from tests.helpers import address_versions


@pytest.fixture
def registry() -> SchemaRegistry:
    """Fresh registry so schema caching never leaks between tests."""
    return SchemaRegistry()


@pytest.fixture
def settings() -> MapperSettings:
    return MapperSettings()


@pytest.fixture
def mapper(registry: SchemaRegistry, settings: MapperSettings) -> CompatibilityMapper:
    return CompatibilityMapper(registry, settings)


@pytest.fixture
def converter(mapper: CompatibilityMapper) -> InterVersionConverter:
    """Converter over the v1 -> v2 -> v3 address chain."""
    return InterVersionConverter(address_versions, mapper)
