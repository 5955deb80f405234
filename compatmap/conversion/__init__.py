"""Conversion between the versions of an evolving model."""

from __future__ import annotations

from compatmap.conversion.chain import VersionChain
from compatmap.conversion.converter import InterVersionConverter

__all__ = ["InterVersionConverter", "VersionChain"]
