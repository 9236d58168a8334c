# SPDX-License-Identifier: MIT
"""Single or compound version containers.

A Version holds either one SingleVersion or an ordered group of them
joined by " + " in text form, e.g. "1.0 + 2.0.0-rc1".
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterator, Optional, Union

from .single import (
    COMPOUND_SEPARATOR,
    COMPOUND_VERSION_OPTIONAL_MINOR_PATTERN,
    COMPOUND_VERSION_PATTERN,
    SINGLE_VERSION_OPTIONAL_MINOR_PATTERN,
    SINGLE_VERSION_PATTERN,
    InvalidVersionError,
    SingleVersion,
)

logger = logging.getLogger(__name__)


class VersionKind(Enum):
    """Variant of a Version container."""

    SINGLE = "single"
    COMPOUND = "compound"


def _parse_group(
    text: str, compound_pattern: re.Pattern[str], single_pattern: re.Pattern[str]
) -> Optional[list[SingleVersion]]:
    if not isinstance(text, str):
        return None
    if compound_pattern.fullmatch(text) is None:
        logger.debug("String %r does not match pattern %r", text, compound_pattern.pattern)
        return None
    versions = [SingleVersion.from_match(m) for m in single_pattern.finditer(text)]
    return versions or None


class Version:
    """Storage for version values.

    A Version is either SINGLE, holding exactly one SingleVersion, or
    COMPOUND, holding an ordered list of them.

    Examples:
        >>> Version("1.0 + 2.0.0-rc1").description
        '1.0 + 2.0.0-rc1'
        >>> Version("1.2.3").is_single
        True
        >>> Version.parse("not a version") is None
        True
    """

    __slots__ = ("_kind", "_versions")

    def __init__(self, *versions: Union[str, SingleVersion, Version]) -> None:
        """Create a version from text, single versions or other versions.

        Strings are parsed with the strict grammar and raise
        InvalidVersionError when invalid. Version arguments are flattened.
        One resulting element gives a SINGLE version, more give a COMPOUND.

        Raises:
            InvalidVersionError: If a string argument is not a valid version
            ValueError: If no versions are given
        """
        elements: list[SingleVersion] = []
        for item in versions:
            if isinstance(item, SingleVersion):
                elements.append(item)
            elif isinstance(item, Version):
                elements.extend(item._versions)
            elif isinstance(item, str):
                parsed = _parse_group(item, COMPOUND_VERSION_PATTERN, SINGLE_VERSION_PATTERN)
                if parsed is None:
                    raise InvalidVersionError(item)
                elements.extend(parsed)
            else:
                raise TypeError(f"Cannot build a Version from {type(item).__name__}")

        if not elements:
            raise ValueError("Must have at least 1 version")

        self._kind = VersionKind.SINGLE if len(elements) == 1 else VersionKind.COMPOUND
        self._versions = elements

    @classmethod
    def _create(cls, kind: VersionKind, versions: list[SingleVersion]) -> Version:
        version = cls.__new__(cls)
        version._kind = kind
        version._versions = versions
        return version

    @classmethod
    def of(
        cls,
        major: int,
        minor: Optional[int],
        revision: Optional[int] = None,
        build_number: Optional[int] = None,
        prerelease: tuple[str, ...] = (),
        build: tuple[str, ...] = (),
    ) -> Version:
        """Create a single version from its components."""
        return cls(
            SingleVersion(
                major=major,
                minor=minor,
                revision=revision,
                build_number=build_number,
                prerelease=prerelease,
                build=build,
            )
        )

    @classmethod
    def parse(cls, text: str) -> Optional[Version]:
        """Parse a single or compound version string.

        Every component must carry a minor value. Returns None instead of
        raising when the text is not a valid version.

        Examples:
            >>> [str(v) for v in Version.parse("1.0 + v2.0")]
            ['1.0', '2.0']
        """
        versions = _parse_group(text, COMPOUND_VERSION_PATTERN, SINGLE_VERSION_PATTERN)
        return cls(*versions) if versions else None

    @classmethod
    def parse_lenient(cls, text: str) -> Optional[Version]:
        """Parse a version string where the minor value is optional."""
        versions = _parse_group(
            text, COMPOUND_VERSION_OPTIONAL_MINOR_PATTERN, SINGLE_VERSION_OPTIONAL_MINOR_PATTERN
        )
        return cls(*versions) if versions else None

    @property
    def kind(self) -> VersionKind:
        return self._kind

    @property
    def is_single(self) -> bool:
        return self._kind is VersionKind.SINGLE

    @property
    def is_compound(self) -> bool:
        return self._kind is VersionKind.COMPOUND

    @property
    def versions(self) -> list[SingleVersion]:
        """Return all stored versions in construction order."""
        return list(self._versions)

    @property
    def single_version(self) -> Optional[SingleVersion]:
        """Return the stored SingleVersion if this is a single version."""
        return self._versions[0] if self.is_single else None

    @property
    def major(self) -> Optional[int]:
        single = self.single_version
        return single.major if single else None

    @property
    def minor(self) -> Optional[int]:
        single = self.single_version
        return single.minor if single else None

    @property
    def revision(self) -> Optional[int]:
        single = self.single_version
        return single.revision if single else None

    @property
    def build_number(self) -> Optional[int]:
        single = self.single_version
        return single.build_number if single else None

    @property
    def prerelease(self) -> Optional[tuple[str, ...]]:
        single = self.single_version
        return single.prerelease if single else None

    @property
    def build(self) -> Optional[tuple[str, ...]]:
        single = self.single_version
        return single.build if single else None

    def sort(self) -> None:
        """Sort the versions of a compound version in place."""
        if self.is_compound:
            self._versions.sort(key=SingleVersion.sort_key)

    def sorted(self) -> Version:
        """Return a copy with compound versions sorted."""
        if self.is_single:
            return self
        return Version._create(
            VersionKind.COMPOUND, sorted(self._versions, key=SingleVersion.sort_key)
        )

    @property
    def description(self) -> str:
        return COMPOUND_SEPARATOR.join(v.description for v in self._versions)

    @property
    def sorted_description(self) -> str:
        return self.sorted().description

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"Version({self.description!r})"

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[SingleVersion]:
        return iter(list(self._versions))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sorted_description.lower() == other.sorted_description.lower()

    def __hash__(self) -> int:
        return hash(self.sorted_description.lower())

    def sort_key(self) -> tuple:
        """Return a tuple ordering versions by their sorted elements.

        Elements are compared pairwise and the first difference decides; if
        one list is a prefix of the other, the shorter one sorts first.
        """
        return tuple(v.sort_key() for v in self.sorted()._versions)

    def compare(self, other: Version) -> int:
        lhs, rhs = self.sort_key(), other.sort_key()
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0 or self == other

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0 or self == other

    def __add__(self, other: object) -> Version:
        """Union: append the versions of other that are not already present."""
        if isinstance(other, SingleVersion):
            additions = [other]
        elif isinstance(other, Version):
            additions = other._versions
        else:
            return NotImplemented

        versions = list(self._versions)
        for version in additions:
            if version not in versions:
                versions.append(version)
        return Version._create(VersionKind.COMPOUND, versions)

    def __sub__(self, other: object) -> Version:
        """Difference: remove the first occurrence of each version of other.

        Subtracting from a single version returns it unchanged.
        """
        if isinstance(other, SingleVersion):
            removals = [other]
        elif isinstance(other, Version):
            removals = other._versions
        else:
            return NotImplemented

        if self.is_single:
            return self

        versions = list(self._versions)
        for version in removals:
            if version in versions:
                versions.remove(version)
        return Version._create(VersionKind.COMPOUND, versions)

    def loosely_equals(self, other: Version) -> bool:
        """Pairwise loose equality of the sorted versions."""
        lhs = self.sorted()._versions
        rhs = other.sorted()._versions
        if len(lhs) != len(rhs):
            return False
        return all(a.loosely_equals(b) for a, b in zip(lhs, rhs))


def parse_version(text: str) -> Optional[Version]:
    """Parse a single or compound version string, returning None if invalid."""
    return Version.parse(text)


def is_valid_version(text: str, *, require_minor: bool = True) -> bool:
    """Check if a string is a valid single or compound version.

    Examples:
        >>> is_valid_version("1.0 + 2.0")
        True
        >>> is_valid_version("1")
        False
        >>> is_valid_version("1", require_minor=False)
        True
    """
    if not isinstance(text, str):
        return False
    pattern = COMPOUND_VERSION_PATTERN if require_minor else COMPOUND_VERSION_OPTIONAL_MINOR_PATTERN
    return pattern.fullmatch(text) is not None
