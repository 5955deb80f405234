"""Shared address models for the compatmap test suites.

Three versions of one address shape:

- v1: ``street{name, number}`` and ``city = "12345 Samplecity"``
- v2: ``address_line1/address_line2`` and flat ``zip_code/city_name``;
  the v1 fields are kept as Removed so older clients can still be served
- v3: nested ``city{zip_code, city_name}`` moved from v2's flat fields
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from compatmap import Added, MovedFrom, Removed, VersionChain

address_versions = VersionChain("address")


# ============================================================================
# Providers
# ============================================================================


class AddressLine1Provider:
    """street{name, number} -> address_line1 "name number"."""

    def compute(self, context):
        street = context.instance.street
        if street is None or street.name is None:
            return None
        return " ".join(part for part in (street.name, street.number) if part)


class StreetProvider:
    """address_line1 "name number" -> street{name, number}."""

    def compute(self, context):
        line = context.instance.address_line1
        if not line:
            return None
        name, _, number = line.rpartition(" ")
        if not name:
            return StreetV1(name=number)
        return StreetV1(name=name, number=number)


class ZipCodeProvider:
    def compute(self, context):
        city = context.instance.city
        return city.partition(" ")[0] if city else None


class CityNameProvider:
    def compute(self, context):
        city = context.instance.city
        return city.partition(" ")[2] if city else None


class CityProvider:
    """zip_code + city_name -> "zip_code city_name"."""

    def compute(self, context):
        address = context.instance
        parts = [p for p in (address.zip_code, address.city_name) if p]
        return " ".join(parts) if parts else None


# ============================================================================
# Address versions
# ============================================================================


class StreetV1(BaseModel):
    name: str | None = None
    number: str | None = None


@address_versions.register("v1")
class AddressV1(BaseModel):
    street: StreetV1 | None = None
    city: str | None = None


@address_versions.register("v2")
class AddressV2(BaseModel):
    address_line1: Annotated[
        str | None, Added(provider=AddressLine1Provider, depends_on=("street",))
    ] = None
    address_line2: Annotated[str | None, Added(default_value=" ")] = None
    zip_code: Annotated[str | None, Added(provider=ZipCodeProvider, depends_on=("city",))] = None
    city_name: Annotated[
        str | None, Added(provider=CityNameProvider, depends_on=("city",))
    ] = None
    street: Annotated[StreetV1 | None, Removed(provider=StreetProvider)] = None
    city: Annotated[str | None, Removed(provider=CityProvider)] = None


class CityV3(BaseModel):
    zip_code: Annotated[str | None, MovedFrom("../zip_code")] = None
    city_name: Annotated[str | None, MovedFrom("../city_name")] = None


@address_versions.register("v3")
class AddressV3(BaseModel):
    address_line1: str | None = None
    address_line2: str | None = None
    zip_code: Annotated[str | None, Removed()] = None
    city_name: Annotated[str | None, Removed()] = None
    city: CityV3 | None = None
