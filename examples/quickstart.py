"""compatmap Quickstart: Serving Three Versions of One Address

This script shows how version metadata on pydantic models lets one object be
read and written through any of its historical shapes. The address starts out
as ``street{name, number}`` plus a combined ``city`` string (v1), is flattened
into ``address_line1/address_line2`` and ``zip_code/city_name`` (v2), and
finally gets a nested ``city{zip_code, city_name}`` (v3).

Run with:
    python examples/quickstart.py

Watch as the mapper:
- Derives newly added properties from the old ones through providers
- Rebuilds removed properties so older clients still get their values
- Follows moved properties across nesting levels with ``../`` paths
"""

from __future__ import annotations

import logging
from typing import Annotated

from pydantic import BaseModel

from compatmap import (
    Added,
    InterVersionConverter,
    MovedFrom,
    Removed,
    SchemaRenderer,
    VersionChain,
    schema_registry,
)

addresses = VersionChain("address")


class Street(BaseModel):
    name: str | None = None
    number: str | None = None


def line1_from_street(context):
    street = context.instance.street
    if street is None:
        return None
    return " ".join(part for part in (street.name, street.number) if part)


def street_from_line1(context):
    name, _, number = (context.instance.address_line1 or "").rpartition(" ")
    return Street(name=name, number=number) if name else None


def city_from_parts(context):
    address = context.instance
    return " ".join(p for p in (address.zip_code, address.city_name) if p) or None


@addresses.register("v1")
class AddressV1(BaseModel):
    street: Street | None = None
    city: str | None = None


@addresses.register("v2")
class AddressV2(BaseModel):
    address_line1: Annotated[
        str | None, Added(provider=line1_from_street, depends_on="street")
    ] = None
    address_line2: Annotated[str | None, Added(default_value=" ")] = None
    zip_code: Annotated[
        str | None,
        Added(provider=lambda ctx: (ctx.instance.city or "").partition(" ")[0] or None,
              depends_on="city"),
    ] = None
    city_name: Annotated[
        str | None,
        Added(provider=lambda ctx: (ctx.instance.city or "").partition(" ")[2] or None,
              depends_on="city"),
    ] = None
    street: Annotated[Street | None, Removed(provider=street_from_line1)] = None
    city: Annotated[str | None, Removed(provider=city_from_parts)] = None


class City(BaseModel):
    zip_code: Annotated[str | None, MovedFrom("../zip_code")] = None
    city_name: Annotated[str | None, MovedFrom("../city_name")] = None


@addresses.register("v3")
class AddressV3(BaseModel):
    address_line1: str | None = None
    address_line2: str | None = None
    zip_code: Annotated[str | None, Removed()] = None
    city_name: Annotated[str | None, Removed()] = None
    city: City | None = None


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    renderer = SchemaRenderer()
    print(renderer.render(schema_registry.get(AddressV2)))

    converter = InterVersionConverter(addresses)

    # An old client sends a v1 address
    old = AddressV1(street=Street(name="Samplestreet", number="1"), city="12345 Samplecity")
    print(f"v1 in:   {old.model_dump()}")

    newest = converter.convert(old, "v3")
    print(f"v3 out:  {newest.model_dump(exclude={'zip_code', 'city_name'})}")

    # ...and the same data served back to that client
    back = converter.convert(newest, "v1")
    print(f"v1 back: {back.model_dump()}")


if __name__ == "__main__":
    main()
