# SPDX-License-Identifier: MIT
"""Tests for string encoding and the pydantic field types."""

import re

import pytest
from pydantic import BaseModel, ValidationError

from versionkit import (
    InvalidVersionError,
    NamedBasicVersion,
    NamedSingleVersion,
    NamedVersion,
    SingleVersion,
    Version,
)
from versionkit.serialization import (
    NamedVersionField,
    SingleVersionField,
    VersionField,
    decode_named_version,
    decode_single_version,
    decode_version,
    encode,
)


class Dependency(BaseModel):
    """Example model using every field type."""

    library: NamedVersionField
    requires: VersionField
    minimum: SingleVersionField


class TestEncode:
    """Tests for encode()."""

    def test_encodes_every_kind(self):
        """Test that each version type encodes to its description."""
        assert encode(SingleVersion(1, 2, 3)) == "1.2.3"
        assert encode(Version("2.0 + 1.0")) == "2.0 + 1.0"
        assert encode(NamedSingleVersion("LibX", "1.0")) == "LibX 1.0"
        assert encode(NamedBasicVersion("App", SingleVersion(9))) == "App 9"
        assert encode(NamedVersion("A 1.0 + B 2")) == "A 1.0 + B 2"

    def test_rejects_other_types(self):
        """Test that non-version values cannot be encoded."""
        with pytest.raises(TypeError):
            encode("1.0")  # type: ignore


class TestDecode:
    """Tests for the decode functions."""

    def test_decode_single_version(self):
        """Test decoding a single version."""
        assert decode_single_version("1.2-rc1") == SingleVersion(1, 2, prerelease=("rc1",))
        assert decode_single_version("9", require_minor=False) == SingleVersion(9)

    def test_decode_single_version_invalid(self):
        """Test that decoding invalid text raises InvalidVersionError."""
        with pytest.raises(InvalidVersionError) as exc_info:
            decode_single_version("9")
        assert exc_info.value.version == "9"

    def test_decode_version(self):
        """Test decoding a compound version."""
        assert decode_version("1.0 + 2.0") == Version("1.0 + 2.0")
        with pytest.raises(InvalidVersionError):
            decode_version("1.0 +")

    def test_decode_named_version(self):
        """Test decoding a named version."""
        assert decode_named_version("LibX 1.2").name == "LibX"
        with pytest.raises(InvalidVersionError, match="named version"):
            decode_named_version("1.2")


class TestPydanticFields:
    """Tests for the annotated pydantic field types."""

    def test_validate_from_strings(self):
        """Test that strings are parsed into version values."""
        dep = Dependency(library="LibX 1.2 + Tool 9", requires="1.0 + 2.0", minimum="1.1")
        assert isinstance(dep.library, NamedVersion)
        assert dep.library.is_compound
        assert dep.requires == Version("2.0 + 1.0")
        assert dep.minimum == SingleVersion(1, 1)

    def test_accepts_instances(self):
        """Test that parsed values are accepted as they are."""
        library = NamedVersion("LibX 1.2")
        dep = Dependency(library=library, requires=Version("1.0"), minimum=SingleVersion(1, 0))
        assert dep.library is library

    def test_dump(self):
        """Test that values serialize to their canonical strings."""
        dep = Dependency(library="LibX v1.2", requires="v1.0 + 2.0", minimum="version 1.1")
        assert dep.model_dump(mode="json") == {
            "library": "LibX 1.2",
            "requires": "1.0 + 2.0",
            "minimum": "1.1",
        }
        assert Dependency.model_validate_json(dep.model_dump_json()) == dep

    def test_invalid_string(self):
        """Test that invalid strings fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            Dependency(library="LibX", requires="1.0", minimum="1.0")
        assert "library" in str(exc_info.value)

    def test_invalid_type(self):
        """Test that non-string values fail validation."""
        with pytest.raises(ValidationError):
            Dependency(library="LibX 1.0", requires=1.0, minimum="1.0")

    def test_json_schema(self):
        """Test that the fields are described as patterned strings."""
        schema = Dependency.model_json_schema()
        requires = schema["properties"]["requires"]
        assert requires["type"] == "string"
        assert requires["pattern"].startswith("^")
        assert "?P<" not in requires["pattern"]
        assert schema["properties"]["library"]["type"] == "string"

    @pytest.mark.parametrize(
        "field,text",
        [
            ("requires", "V1.0"),
            ("requires", "VERSION 1.0 + Version 2.0-RC1"),
            ("minimum", "Version 1.1"),
            ("library", "LibX V1.2 + Tool VERSION 9.0"),
        ],
    )
    def test_json_schema_prefix_any_case(self, field, text):
        """Test that the schema pattern accepts the prefix in any case, like the validator."""
        pattern = Dependency.model_json_schema()["properties"][field]["pattern"]
        assert re.fullmatch(pattern, text) is not None
        values = {"library": "LibX 1.0", "requires": "1.0", "minimum": "1.0", field: text}
        Dependency.model_validate(values)

    def test_json_schema_rejects_invalid(self):
        """Test that the schema pattern still rejects malformed text."""
        pattern = Dependency.model_json_schema()["properties"]["requires"]["pattern"]
        assert re.fullmatch(pattern, "Vers 1.0") is None
        assert re.fullmatch(pattern, "1.0 +") is None
