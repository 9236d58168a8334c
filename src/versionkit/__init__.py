# SPDX-License-Identifier: MIT
"""Version identifier parsing, ordering and grouping.

This package models plain versions ("1.2.3-beta+build7"), versions
qualified by a name ("LibraryX 1.2.3") and compound groups of either
joined by " + " ("1.0 + 2.0.0-rc1").

Example:
    >>> from versionkit import Version, NamedVersion, SingleVersion
    >>>
    >>> version = Version("1.2-alpha+build1")
    >>> version.minor, version.revision, version.prerelease
    (2, None, ('alpha',))
    >>>
    >>> Version.parse("1.0 + 2.0.0-rc1").is_compound
    True
    >>>
    >>> Version("1.0.9") < Version("1.9.0")
    True
    >>>
    >>> libs = NamedVersion("LibA 1.0 + LibB 9")
    >>> libs.contains("libb", 9)
    True
"""

__version__ = "1.0.6"

from .single import (
    COMPOUND_VERSION_OPTIONAL_MINOR_REGEX,
    COMPOUND_VERSION_REGEX,
    SINGLE_VERSION_OPTIONAL_MINOR_REGEX,
    SINGLE_VERSION_REGEX,
    InvalidVersionError,
    SingleVersion,
)
from .version import (
    Version,
    VersionKind,
    is_valid_version,
    parse_version,
)
from .named import (
    COMPOUND_NAMED_VERSION_REGEX,
    SINGLE_NAMED_VERSION_REGEX,
    LibraryVersion,
    NamedBasicVersion,
    NamedSingleVersion,
    NamedVersion,
    NamedVersionKind,
    PackageVersion,
    ProgramVersion,
    parse_named_version,
)
from .compare import (
    compare_named_versions,
    compare_versions,
    sort_versions,
    version_key,
)

# Name and version of this package
PACKAGE_VERSION = NamedVersion(f"VersionKit {__version__}")

__all__ = [
    # Single versions
    "SingleVersion",
    "InvalidVersionError",
    "SINGLE_VERSION_REGEX",
    "SINGLE_VERSION_OPTIONAL_MINOR_REGEX",
    "COMPOUND_VERSION_REGEX",
    "COMPOUND_VERSION_OPTIONAL_MINOR_REGEX",
    # Version containers
    "Version",
    "VersionKind",
    "parse_version",
    "is_valid_version",
    # Named versions
    "NamedVersion",
    "NamedVersionKind",
    "NamedSingleVersion",
    "NamedBasicVersion",
    "ProgramVersion",
    "LibraryVersion",
    "PackageVersion",
    "parse_named_version",
    "SINGLE_NAMED_VERSION_REGEX",
    "COMPOUND_NAMED_VERSION_REGEX",
    # Comparison
    "compare_versions",
    "compare_named_versions",
    "version_key",
    "sort_versions",
    "PACKAGE_VERSION",
]
