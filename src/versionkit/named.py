# SPDX-License-Identifier: MIT
"""Versions qualified by a subject name.

A named version pairs a program, library or package name with a version,
e.g. "LibraryX 1.2.3". Several named versions may be grouped with " + ":
"LibraryX 1.2.3 + Tool 9".

When the version part of a lone named version has no minor value
("AppName 9") it is kept as a NamedBasicVersion holding a bare
SingleVersion; otherwise the version part is a full Version.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Union

from .single import (
    COMPOUND_SEPARATOR,
    COMPOUND_SEPARATOR_REGEX,
    COMPOUND_VERSION_OPTIONAL_MINOR_REGEX,
    PATTERN_FLAGS,
    SINGLE_VERSION_OPTIONAL_MINOR_REGEX,
    InvalidVersionError,
    SingleVersion,
    without_group_names,
)
from .version import Version

logger = logging.getLogger(__name__)

NAME_REGEX = r"\w+(?:\s\w+)*"

# Named version whose version part may itself be a compound version
SINGLE_NAMED_VERSION_REGEX = (
    rf"(?P<name>{NAME_REGEX})\s+"
    rf"(?P<version>{without_group_names(COMPOUND_VERSION_OPTIONAL_MINOR_REGEX)})"
)

# Named version holding exactly one version, minor optional
BASIC_NAMED_VERSION_REGEX = (
    rf"(?P<name>{NAME_REGEX})\s+"
    rf"(?P<version>{without_group_names(SINGLE_VERSION_OPTIONAL_MINOR_REGEX)})"
)

COMPOUND_NAMED_VERSION_REGEX = (
    f"(?:{without_group_names(SINGLE_NAMED_VERSION_REGEX)})"
    f"(?:{COMPOUND_SEPARATOR_REGEX}(?:{without_group_names(SINGLE_NAMED_VERSION_REGEX)}))*"
)

SINGLE_NAMED_VERSION_PATTERN = re.compile(SINGLE_NAMED_VERSION_REGEX, PATTERN_FLAGS)
# Picks one named version out of a validated group. The lookahead keeps a
# name such as "V8" from being read as the next version of the previous entry.
_NAMED_VERSION_SCAN_PATTERN = re.compile(
    rf"{SINGLE_NAMED_VERSION_REGEX}"
    rf"(?=\Z|{COMPOUND_SEPARATOR_REGEX}(?:{COMPOUND_NAMED_VERSION_REGEX})\Z)",
    PATTERN_FLAGS,
)
BASIC_NAMED_VERSION_PATTERN = re.compile(BASIC_NAMED_VERSION_REGEX, PATTERN_FLAGS)
COMPOUND_NAMED_VERSION_PATTERN = re.compile(COMPOUND_NAMED_VERSION_REGEX, PATTERN_FLAGS)


NameMatcher = Callable[[str, str], bool]


def _names_equal_ignore_case(wanted: str, actual: str) -> bool:
    return wanted.casefold() == actual.casefold()


def _names_equal(wanted: str, actual: str) -> bool:
    return wanted == actual


def _coerce_version(value: Union[str, SingleVersion, Version]) -> Version:
    if isinstance(value, Version):
        return value
    if isinstance(value, SingleVersion):
        return Version(value)
    if isinstance(value, str):
        version = Version.parse_lenient(value)
        if version is None:
            raise InvalidVersionError(value)
        return version
    raise TypeError(f"Cannot build a Version from {type(value).__name__}")


@dataclass(frozen=True, slots=True, eq=False)
class NamedSingleVersion:
    """A name paired with a single or compound Version.

    Attributes:
        name: Name of the object (e.g. program or library)
        version: Version of the object
    """

    name: str
    version: Version

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("name must be a non-empty string")
        object.__setattr__(self, "version", _coerce_version(self.version))

    @classmethod
    def parse(cls, text: str) -> Optional[NamedSingleVersion]:
        """Parse "Name 1.2.3" or "Name 1.0 + 2.0"; returns None if invalid."""
        if not isinstance(text, str):
            return None
        match = SINGLE_NAMED_VERSION_PATTERN.fullmatch(text)
        if match is None:
            logger.debug(
                "String %r does not match pattern %r", text, SINGLE_NAMED_VERSION_PATTERN.pattern
            )
            return None
        version = Version.parse_lenient(match.group("version"))
        if version is None:
            return None
        return cls(match.group("name"), version)

    @property
    def description(self) -> str:
        return f"{self.name} {self.version.description}"

    @property
    def sorted_description(self) -> str:
        return f"{self.name} {self.version.sorted_description}"

    def __str__(self) -> str:
        return self.description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.sorted_description.lower() == other.sorted_description.lower()

    def __hash__(self) -> int:
        return hash(self.sorted_description.lower())

    def sort_key(self) -> tuple:
        """Order by name (case-sensitive), then by version."""
        return (self.name, self.version.sort_key())

    def compare(self, other: Union[NamedSingleVersion, NamedBasicVersion]) -> int:
        lhs, rhs = self.sort_key(), _as_single(other).sort_key()
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) < 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) > 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) < 0 or self == _as_single(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) > 0 or self == _as_single(other)

    def __add__(self, other: object) -> NamedVersion:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion, NamedVersion)):
            return NotImplemented
        return NamedVersion(self) + other

    def loosely_equals(self, other: Union[NamedSingleVersion, NamedBasicVersion]) -> bool:
        """Equal names ignoring case and loosely equal versions (absent values count as 0)."""
        other = _as_single(other)
        return _names_equal_ignore_case(self.name, other.name) and self.version.loosely_equals(
            other.version
        )


@dataclass(frozen=True, slots=True, eq=False)
class NamedBasicVersion:
    """A name paired with a bare SingleVersion, e.g. "AppName 9"."""

    name: str
    version: SingleVersion

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.version, SingleVersion):
            raise TypeError(
                f"version must be a SingleVersion, got {type(self.version).__name__}"
            )

    @classmethod
    def parse(cls, text: str) -> Optional[NamedBasicVersion]:
        """Parse "Name 9" style text; the minor value must be absent."""
        if not isinstance(text, str):
            return None
        match = BASIC_NAMED_VERSION_PATTERN.fullmatch(text)
        if match is None:
            logger.debug(
                "String %r does not match pattern %r", text, BASIC_NAMED_VERSION_PATTERN.pattern
            )
            return None
        version = SingleVersion.parse(match.group("version"), require_minor=False)
        if version is None or version.minor is not None:
            return None
        return cls(match.group("name"), version)

    def to_single(self) -> NamedSingleVersion:
        """Return the equivalent NamedSingleVersion."""
        return NamedSingleVersion(self.name, Version(self.version))

    @property
    def description(self) -> str:
        return f"{self.name} {self.version.description}"

    sorted_description = description

    def __str__(self) -> str:
        return self.description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.sorted_description.lower() == other.sorted_description.lower()

    def __hash__(self) -> int:
        return hash(self.sorted_description.lower())

    def sort_key(self) -> tuple:
        return self.to_single().sort_key()

    def compare(self, other: Union[NamedSingleVersion, NamedBasicVersion]) -> int:
        return self.to_single().compare(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) < 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) > 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) < 0 or self == other

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion)):
            return NotImplemented
        return self.compare(other) > 0 or self == other

    def __add__(self, other: object) -> NamedVersion:
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion, NamedVersion)):
            return NotImplemented
        return NamedVersion(self) + other

    def matches(self, other: Union[NamedSingleVersion, NamedBasicVersion]) -> bool:
        """Check that other has the same name and a loosely equal version."""
        return self.to_single().loosely_equals(other)

    loosely_equals = matches


NamedElement = Union[NamedSingleVersion, NamedBasicVersion]


def _as_single(version: NamedElement) -> NamedSingleVersion:
    if isinstance(version, NamedBasicVersion):
        return version.to_single()
    return version


class NamedVersionKind(Enum):
    """Variant of a NamedVersion container."""

    BASIC = "basic"
    SINGLE = "single"
    COMPOUND = "compound"


class NamedVersion:
    """Storage for named version values.

    A NamedVersion is BASIC (one NamedBasicVersion), SINGLE (one
    NamedSingleVersion) or COMPOUND (an ordered list of NamedSingleVersion).
    Basic values are materialised as NamedSingleVersion wherever versions
    are compared or searched.

    Examples:
        >>> libs = NamedVersion("LibA 1.0 + LibB 2.1.3")
        >>> libs.contains("liba", 1)
        True
        >>> NamedVersion("AppName 9").kind
        <NamedVersionKind.BASIC: 'basic'>
    """

    __slots__ = ("_kind", "_versions")

    def __init__(self, *versions: Union[str, NamedElement, NamedVersion]) -> None:
        """Create a named version from text, named elements or other containers.

        Raises:
            InvalidVersionError: If a string argument is not a valid named version
            ValueError: If no versions are given
        """
        elements: list[NamedElement] = []
        for item in versions:
            if isinstance(item, (NamedSingleVersion, NamedBasicVersion)):
                elements.append(item)
            elif isinstance(item, NamedVersion):
                elements.extend(item._versions)
            elif isinstance(item, str):
                parsed = NamedVersion.parse(item)
                if parsed is None:
                    raise InvalidVersionError(item)
                elements.extend(parsed._versions)
            else:
                raise TypeError(f"Cannot build a NamedVersion from {type(item).__name__}")

        if not elements:
            raise ValueError("At least one version must be provided")

        if len(elements) == 1:
            self._kind = (
                NamedVersionKind.BASIC
                if isinstance(elements[0], NamedBasicVersion)
                else NamedVersionKind.SINGLE
            )
            self._versions = elements
        else:
            self._kind = NamedVersionKind.COMPOUND
            self._versions = [_as_single(v) for v in elements]

    @classmethod
    def _create(cls, kind: NamedVersionKind, versions: list[NamedElement]) -> NamedVersion:
        named = cls.__new__(cls)
        named._kind = kind
        named._versions = versions
        return named

    @classmethod
    def named(cls, name: str, *versions: Union[str, SingleVersion, Version]) -> NamedVersion:
        """Create a SINGLE named version from a name and one or more versions.

        Version strings are parsed with the minor value optional.
        """
        if not versions:
            raise ValueError("At least one version must be provided")
        return cls(NamedSingleVersion(name, Version(*[_coerce_version(v) for v in versions])))

    @classmethod
    def parse(cls, text: str) -> Optional[NamedVersion]:
        """Parse a single or compound named version string.

        Returns None instead of raising when the text is not valid.

        Examples:
            >>> NamedVersion.parse("LibName 1.2.3").name
            'LibName'
            >>> NamedVersion.parse("LibName 9").kind
            <NamedVersionKind.BASIC: 'basic'>
        """
        if not isinstance(text, str):
            return None
        if COMPOUND_NAMED_VERSION_PATTERN.fullmatch(text) is None:
            logger.debug(
                "String %r does not match pattern %r",
                text,
                COMPOUND_NAMED_VERSION_PATTERN.pattern,
            )
            return None

        elements: list[NamedElement] = []
        for match in _NAMED_VERSION_SCAN_PATTERN.finditer(text):
            name = match.group("name")
            version = Version.parse_lenient(match.group("version"))
            if version is None:
                return None
            if version.is_single and version.minor is None:
                elements.append(NamedBasicVersion(name, version.single_version))
            else:
                elements.append(NamedSingleVersion(name, version))

        if not elements:
            return None
        return cls(*elements)

    @property
    def kind(self) -> NamedVersionKind:
        return self._kind

    @property
    def is_basic(self) -> bool:
        return self._kind is NamedVersionKind.BASIC

    @property
    def is_single(self) -> bool:
        """True for SINGLE and BASIC named versions."""
        return self._kind is not NamedVersionKind.COMPOUND

    @property
    def is_compound(self) -> bool:
        return self._kind is NamedVersionKind.COMPOUND

    @property
    def versions(self) -> list[NamedSingleVersion]:
        """Return all stored versions, with basic versions materialised."""
        return [_as_single(v) for v in self._versions]

    @property
    def single_version(self) -> Optional[NamedSingleVersion]:
        return None if self.is_compound else _as_single(self._versions[0])

    @property
    def basic_version(self) -> Optional[NamedBasicVersion]:
        return self._versions[0] if self.is_basic else None

    @property
    def name(self) -> Optional[str]:
        return None if self.is_compound else self._versions[0].name

    @property
    def version(self) -> Optional[Version]:
        single = self.single_version
        return single.version if single else None

    def sort(self) -> None:
        """Sort the versions of a compound named version in place."""
        if self.is_compound:
            self._versions.sort(key=NamedSingleVersion.sort_key)

    def sorted(self) -> NamedVersion:
        """Return a copy with compound versions sorted."""
        if not self.is_compound:
            return self
        return NamedVersion._create(
            NamedVersionKind.COMPOUND, sorted(self._versions, key=NamedSingleVersion.sort_key)
        )

    @property
    def description(self) -> str:
        return COMPOUND_SEPARATOR.join(v.description for v in self._versions)

    @property
    def sorted_description(self) -> str:
        return COMPOUND_SEPARATOR.join(v.sorted_description for v in self.sorted()._versions)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"NamedVersion({self.description!r})"

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[NamedSingleVersion]:
        return iter(self.versions)

    def find_first(
        self, predicate: Callable[[NamedSingleVersion], bool]
    ) -> Optional[NamedSingleVersion]:
        """Return the first version matching predicate, in stored order."""
        for version in self.versions:
            if predicate(version):
                return version
        return None

    def get_version(
        self,
        name: str,
        *,
        case_sensitive: bool = False,
        name_matches: Optional[NameMatcher] = None,
    ) -> Optional[NamedSingleVersion]:
        """Find the first version with a matching name.

        Args:
            name: The name to look for
            case_sensitive: Compare names exactly instead of ignoring case
            name_matches: Custom comparison called as name_matches(name, candidate_name);
                overrides case_sensitive
        """
        if name_matches is None:
            name_matches = _names_equal if case_sensitive else _names_equal_ignore_case
        return self.find_first(lambda v: name_matches(name, v.name))

    def contains(
        self,
        item: Union[str, NamedElement, NamedVersion],
        major: Optional[int] = None,
        *,
        case_sensitive: bool = False,
        name_matches: Optional[NameMatcher] = None,
    ) -> bool:
        """Check whether a name, a named version or a group of them is present.

        A string is looked up by name, optionally also requiring the given
        major version. A NamedVersion is present only if every one of its
        versions is present.
        """
        if isinstance(item, str):
            found = self.get_version(item, case_sensitive=case_sensitive, name_matches=name_matches)
            if found is None:
                return False
            return major is None or found.version.major == major

        present = self.versions
        return all(v in present for v in _elements_of(item))

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (str, NamedSingleVersion, NamedBasicVersion, NamedVersion)):
            return False
        return self.contains(item)

    def loosely_contains(self, item: Union[NamedElement, NamedVersion]) -> bool:
        """Like contains(), but versions only need to be loosely equal."""
        present = self.versions
        return all(any(p.loosely_equals(v) for p in present) for v in _elements_of(item))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedVersion):
            return NotImplemented
        return self.sorted_description.lower() == other.sorted_description.lower()

    def __hash__(self) -> int:
        return hash(self.sorted_description.lower())

    def sort_key(self) -> tuple:
        return tuple(v.sort_key() for v in self.sorted().versions)

    def compare(self, other: NamedVersion) -> int:
        lhs, rhs = self.sort_key(), other.sort_key()
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NamedVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, NamedVersion):
            return NotImplemented
        return self.compare(other) < 0 or self == other

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, NamedVersion):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, NamedVersion):
            return NotImplemented
        return self.compare(other) > 0 or self == other

    def __add__(self, other: object) -> NamedVersion:
        """Union: append the versions of other that are not already present."""
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion, NamedVersion)):
            return NotImplemented
        versions = self.versions
        for version in _elements_of(other):
            if version not in versions:
                versions.append(version)
        return NamedVersion._create(NamedVersionKind.COMPOUND, versions)

    def __sub__(self, other: object) -> NamedVersion:
        """Difference: remove the first occurrence of each version of other.

        Subtracting from a non-compound named version returns it unchanged.
        """
        if not isinstance(other, (NamedSingleVersion, NamedBasicVersion, NamedVersion)):
            return NotImplemented
        if not self.is_compound:
            return self
        versions = self.versions
        for version in _elements_of(other):
            if version in versions:
                versions.remove(version)
        return NamedVersion._create(NamedVersionKind.COMPOUND, versions)


def _elements_of(item: Union[NamedElement, NamedVersion]) -> list[NamedSingleVersion]:
    if isinstance(item, NamedVersion):
        return item.versions
    if isinstance(item, (NamedSingleVersion, NamedBasicVersion)):
        return [_as_single(item)]
    raise TypeError(f"Expected a named version, got {type(item).__name__}")


def parse_named_version(text: str) -> Optional[NamedVersion]:
    """Parse a single or compound named version string, returning None if invalid."""
    return NamedVersion.parse(text)


# Aliases for the kinds of things that are usually versioned by name
ProgramVersion = NamedVersion
LibraryVersion = NamedVersion
PackageVersion = NamedVersion
