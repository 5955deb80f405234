"""Rich rendering of schemas for inspecting declared version metadata."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.table import Table

from compatmap.schema.metadata import Added, Removed
from compatmap.schema.schema import Schema


def _type_name(declared_type: Any) -> str:
    return getattr(declared_type, "__name__", None) or repr(declared_type)


def _provider_name(provider: Any) -> str:
    return getattr(provider, "__name__", None) or type(provider).__name__


def _describe(marker: Added | Removed | None) -> str:
    if marker is None:
        return ""
    parts = []
    if marker.provider is not None:
        parts.append(f"provider={_provider_name(marker.provider)}")
    if marker.default_value is not None:
        parts.append(f"default={marker.default_value!r}")
    if isinstance(marker, Added) and marker.depends_on:
        parts.append(f"depends_on={', '.join(marker.depends_on)}")
    return " ".join(parts) or "yes"


class SchemaRenderer:
    """Render a Schema as a property table."""

    def __init__(self, width: int = 120):
        self.width = width

    def build_table(self, schema: Schema) -> Table:
        table = Table(title=schema.type.__name__, show_lines=False)
        table.add_column("Property", style="bold")
        table.add_column("Type", style="cyan")
        table.add_column("Moved from", style="yellow")
        table.add_column("Added", style="green")
        table.add_column("Removed", style="red")

        for descriptor in schema:
            table.add_row(
                descriptor.name,
                _type_name(descriptor.declared_type),
                descriptor.moved_from.path if descriptor.moved_from else "",
                _describe(descriptor.added),
                _describe(descriptor.removed),
            )
        return table

    def render(self, schema: Schema) -> str:
        """Render the schema table to plain text."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, color_system=None, force_terminal=False)
        console.print(self.build_table(schema))
        return buffer.getvalue()
