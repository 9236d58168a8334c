# SPDX-License-Identifier: MIT
"""String encoding and decoding of versions for structured formats.

Versions are stored and transmitted only as their canonical string form.
The decoders raise InvalidVersionError carrying the offending text, and the
annotated pydantic types below apply them to model fields:

    >>> from pydantic import BaseModel
    >>> class Dependency(BaseModel):
    ...     library: NamedVersionField
    ...     requires: VersionField
    >>> dep = Dependency(library="LibX 1.2", requires="1.0 + 2.0")
    >>> dep.model_dump(mode="json")
    {'library': 'LibX 1.2', 'requires': '1.0 + 2.0'}
"""

from __future__ import annotations

from typing import Annotated, Any, Callable, TypeVar, Union

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from .named import (
    COMPOUND_NAMED_VERSION_REGEX,
    NamedBasicVersion,
    NamedSingleVersion,
    NamedVersion,
)
from .single import (
    COMPOUND_VERSION_REGEX,
    SINGLE_VERSION_REGEX,
    VERSION_PREFIX_REGEX,
    InvalidVersionError,
    SingleVersion,
    without_group_names,
)
from .version import Version

T = TypeVar("T")

Encodable = Union[SingleVersion, Version, NamedSingleVersion, NamedBasicVersion, NamedVersion]


def encode(value: Encodable) -> str:
    """Return the canonical string form of a version value."""
    if not isinstance(
        value, (SingleVersion, Version, NamedSingleVersion, NamedBasicVersion, NamedVersion)
    ):
        raise TypeError(f"Cannot encode {type(value).__name__} as a version string")
    return value.description


def decode_single_version(text: str, *, require_minor: bool = True) -> SingleVersion:
    """Decode a single version string.

    Raises:
        InvalidVersionError: If the text is not a valid single version
    """
    version = SingleVersion.parse(text, require_minor=require_minor)
    if version is None:
        raise InvalidVersionError(str(text))
    return version


def decode_version(text: str) -> Version:
    """Decode a single or compound version string.

    Raises:
        InvalidVersionError: If the text is not a valid version
    """
    version = Version.parse(text)
    if version is None:
        raise InvalidVersionError(str(text))
    return version


def decode_named_version(text: str) -> NamedVersion:
    """Decode a single or compound named version string.

    Raises:
        InvalidVersionError: If the text is not a valid named version
    """
    version = NamedVersion.parse(text)
    if version is None:
        raise InvalidVersionError(str(text), f"Invalid named version string: {text!r}")
    return version


def _field_validator(cls: type[T], decoder: Callable[[str], T]) -> Callable[[Any], T]:
    def validate(value: Any) -> T:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidVersionError(
                str(value), f"Version must be a string, got {type(value).__name__}"
            )
        return decoder(value)

    return validate


# JSON schema patterns carry no flags, so the prefix spells out both cases
_SCHEMA_PREFIX_REGEX = r"(?:[vV]|[vV][eE][rR][sS][iI][oO][nN] )?"


def schema_pattern(regex: str) -> str:
    """Return a version pattern usable as a JSON schema "pattern"."""
    pattern = without_group_names(regex).replace(VERSION_PREFIX_REGEX, _SCHEMA_PREFIX_REGEX)
    return f"^{pattern}$"


def _string_schema(regex: str, description: str) -> WithJsonSchema:
    return WithJsonSchema(
        {
            "type": "string",
            "pattern": schema_pattern(regex),
            "description": description,
        }
    )


SingleVersionField = Annotated[
    SingleVersion,
    PlainValidator(_field_validator(SingleVersion, decode_single_version)),
    PlainSerializer(encode, return_type=str),
    _string_schema(SINGLE_VERSION_REGEX, "Single version, e.g. 1.2.3-beta+build7"),
]

VersionField = Annotated[
    Version,
    PlainValidator(_field_validator(Version, decode_version)),
    PlainSerializer(encode, return_type=str),
    _string_schema(COMPOUND_VERSION_REGEX, "Single or compound version, e.g. 1.0 + 2.0.0-rc1"),
]

NamedVersionField = Annotated[
    NamedVersion,
    PlainValidator(_field_validator(NamedVersion, decode_named_version)),
    PlainSerializer(encode, return_type=str),
    _string_schema(COMPOUND_NAMED_VERSION_REGEX, "Named version, e.g. LibraryX 1.2.3"),
]
