"""Tests for VersionChain and InterVersionConverter over the address versions."""

from __future__ import annotations

import logging

import pytest
from pydantic import BaseModel

from compatmap import CompatibilityMapper, InterVersionConverter, VersionChain, VersionError
from tests.helpers import (
    AddressV1,
    AddressV2,
    AddressV3,
    CityV3,
    StreetV1,
    address_versions,
)


def v1_address() -> AddressV1:
    return AddressV1(street=StreetV1(name="Samplestreet", number="1"), city="12345 Samplecity")


def v2_address() -> AddressV2:
    return AddressV2(
        address_line1="Samplestreet 1",
        address_line2=" ",
        zip_code="12345",
        city_name="Samplecity",
    )


def v3_address() -> AddressV3:
    return AddressV3(
        address_line1="Samplestreet 1",
        address_line2=" ",
        city=CityV3(zip_code="12345", city_name="Samplecity"),
    )


class TestVersionChain:
    def test_registration_order(self):
        assert address_versions.names == ("v1", "v2", "v3")
        assert len(address_versions) == 3
        assert "v2" in address_versions
        assert list(address_versions)[0] == ("v1", AddressV1)

    def test_lookups(self):
        assert address_versions.type_for("v2") is AddressV2
        assert address_versions.version_of(AddressV3) == "v3"
        assert address_versions.index_of("v3") == 2

    def test_subclass_resolves_to_registered_base(self):
        class PatchedAddressV2(AddressV2):
            pass

        assert address_versions.version_of(PatchedAddressV2) == "v2"

    def test_path_up_and_down(self):
        assert address_versions.path("v1", "v3") == ["v2", "v3"]
        assert address_versions.path("v3", "v1") == ["v2", "v1"]
        assert address_versions.path("v2", "v2") == []

    def test_unknown_version(self):
        with pytest.raises(VersionError, match="v9"):
            address_versions.type_for("v9")
        with pytest.raises(VersionError):
            address_versions.path("v1", "v9")

    def test_unregistered_type(self):
        with pytest.raises(VersionError, match="StreetV1"):
            address_versions.version_of(StreetV1)

    def test_duplicate_registration(self):
        chain = VersionChain("pets")

        class PetV1(BaseModel):
            name: str | None = None

        class PetV2(BaseModel):
            name: str | None = None

        chain.register("v1", PetV1)
        with pytest.raises(VersionError, match="already registered"):
            chain.register("v1", PetV2)
        with pytest.raises(VersionError, match="already registered"):
            chain.register("v2", PetV1)


class TestUpwardConversion:
    def test_v1_to_v2(self, converter: InterVersionConverter):
        address = converter.convert_to_higher_version(AddressV2, v1_address(), "v1")

        assert isinstance(address, AddressV2)
        assert address.address_line1 == "Samplestreet 1"
        assert address.address_line2 == " "
        assert address.zip_code == "12345"
        assert address.city_name == "Samplecity"

    def test_v2_to_v3(self, converter: InterVersionConverter):
        address = converter.convert_to_higher_version(AddressV3, v2_address(), "v2")

        assert isinstance(address, AddressV3)
        assert address.address_line1 == "Samplestreet 1"
        assert address.address_line2 == " "
        assert address.city.zip_code == "12345"
        assert address.city.city_name == "Samplecity"

    def test_v1_to_v3(self, converter: InterVersionConverter):
        address = converter.convert_to_higher_version(AddressV3, v1_address(), "v1")

        assert address.address_line1 == "Samplestreet 1"
        assert address.address_line2 == " "
        assert address.city.zip_code == "12345"
        assert address.city.city_name == "Samplecity"

    def test_lower_target_rejected(self, converter: InterVersionConverter):
        with pytest.raises(VersionError, match="older"):
            converter.convert_to_higher_version(AddressV1, v3_address(), "v3")


class TestDownwardConversion:
    def test_v2_to_v1(self, converter: InterVersionConverter):
        address = converter.convert_to_lower_version("v1", v2_address())

        assert isinstance(address, AddressV1)
        assert address.street.name == "Samplestreet"
        assert address.street.number == "1"
        assert address.city == "12345 Samplecity"

    def test_v3_to_v2(self, converter: InterVersionConverter):
        address = converter.convert_to_lower_version("v2", v3_address())

        assert isinstance(address, AddressV2)
        assert address.address_line1 == "Samplestreet 1"
        assert address.address_line2 == " "
        assert address.zip_code == "12345"
        assert address.city_name == "Samplecity"

    def test_v3_to_v1(self, converter: InterVersionConverter):
        address = converter.convert_to_lower_version("v1", v3_address())

        assert address.street.name == "Samplestreet"
        assert address.street.number == "1"
        assert address.city == "12345 Samplecity"

    def test_higher_target_rejected(self, converter: InterVersionConverter):
        with pytest.raises(VersionError, match="newer"):
            converter.convert_to_lower_version("v3", v1_address())


class TestRoundTrips:
    def test_v1_up_and_back(self, converter: InterVersionConverter):
        original = v1_address()

        newest = converter.convert(original, "v3")
        back = converter.convert(newest, "v1")

        assert back.model_dump() == v1_address().model_dump()

    def test_same_version_is_resolved_in_place(self, converter: InterVersionConverter):
        address = AddressV2(address_line1="Samplestreet 1")

        result = converter.convert(address, "v2")

        assert result is address
        assert address.street == StreetV1(name="Samplestreet", number="1")
        assert address.address_line2 == " "


class TestHopMechanics:
    def test_hop_does_not_alias_nested_values(self, converter: InterVersionConverter):
        source = v1_address()

        address = converter.convert(source, "v2")

        assert address.street == source.street
        assert address.street is not source.street

    def test_incompatible_same_named_property_is_skipped(
        self, converter: InterVersionConverter, caplog
    ):
        """v2's city string does not fit v3's nested city; v3 rebuilds it from moves."""
        with caplog.at_level(logging.DEBUG, logger="compatmap.conversion.converter"):
            address = converter.convert(v2_address(), "v3")

        assert isinstance(address.city, CityV3)
        assert "Skipping AddressV2.city" in caplog.text

    def test_converted_result_is_stable_under_remapping(
        self, converter: InterVersionConverter, mapper: CompatibilityMapper
    ):
        address = converter.convert(v1_address(), "v3")
        snapshot = address.model_dump()

        mapper.map(address)

        assert address.model_dump() == snapshot

    def test_conversion_logged(self, converter: InterVersionConverter, caplog):
        with caplog.at_level(logging.INFO, logger="compatmap.conversion.converter"):
            converter.convert(v1_address(), "v3")

        assert "from v1 to v3 (2 hops)" in caplog.text
