# SPDX-License-Identifier: MIT
"""Version comparison helpers.

Ordering follows the component rules of SingleVersion:
- major, minor, revision and build number are compared numerically
- an absent minor, revision or build number sorts before any present value
- pre-release and build tokens are compared as one concatenated string

Compound versions are compared element by element on their sorted
elements; when one is a prefix of the other, the shorter one sorts first.
"""

from __future__ import annotations

from typing import Iterable, Union

from .named import NamedVersion
from .single import InvalidVersionError, SingleVersion
from .version import Version

VersionLike = Union[str, SingleVersion, Version]


def _to_version(version: VersionLike) -> Version:
    if isinstance(version, Version):
        return version
    if isinstance(version, (SingleVersion, str)):
        return Version(version)
    raise InvalidVersionError(
        str(version), f"Version must be a string, got {type(version).__name__}"
    )


def _to_named_version(version: Union[str, NamedVersion]) -> NamedVersion:
    if isinstance(version, NamedVersion):
        return version
    if isinstance(version, str):
        return NamedVersion(version)
    raise InvalidVersionError(
        str(version), f"Named version must be a string, got {type(version).__name__}"
    )


def compare_versions(version1: VersionLike, version2: VersionLike) -> int:
    """Compare two versions.

    Args:
        version1: First version (string, SingleVersion or Version)
        version2: Second version (string, SingleVersion or Version)

    Returns:
        -1 if version1 < version2
        0 if version1 and version2 order the same
        1 if version1 > version2

    Raises:
        InvalidVersionError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0", "2.0")
        -1
        >>> compare_versions("1.0.9", "1.9.0")
        -1
        >>> compare_versions("1.0-beta", "1.0-alpha")
        1
        >>> compare_versions("2.0 + 1.0", "1.0 + 2.0")
        0
    """
    return _to_version(version1).compare(_to_version(version2))


def compare_named_versions(
    version1: Union[str, NamedVersion], version2: Union[str, NamedVersion]
) -> int:
    """Compare two named versions by name first, then by version.

    Raises:
        InvalidVersionError: If either named version string is invalid
    """
    return _to_named_version(version1).compare(_to_named_version(version2))


def version_key(version: VersionLike) -> tuple:
    """Return a sort key for a version, suitable for sorting.

    Examples:
        >>> sorted(["1.1", "1.0.1", "1.0"], key=version_key)
        ['1.0', '1.0.1', '1.1']
    """
    return _to_version(version).sort_key()


def sort_versions(
    versions: Iterable[Union[str, Version, NamedVersion]],
    *,
    named: bool = False,
    reverse: bool = False,
) -> list:
    """Parse and sort versions.

    Args:
        versions: Version strings or already parsed values
        named: Parse strings as named versions instead of plain versions
        reverse: Sort from highest to lowest

    Returns:
        A list of Version (or NamedVersion when named is True) values

    Raises:
        InvalidVersionError: If any string is not a valid version
    """
    convert = _to_named_version if named else _to_version
    parsed = [convert(v) for v in versions]
    return sorted(parsed, key=lambda v: v.sort_key(), reverse=reverse)
