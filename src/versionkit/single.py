# SPDX-License-Identifier: MIT
"""Single version parsing, formatting and ordering.

Supports MAJOR.MINOR[.REVISION[.BUILD_NUMBER]] with optional tags:
- Optional prefix: v1.2, version 1.2 (case-insensitive)
- Pre-release tokens: -alpha, -beta-2, -R12A-ABCD
- Build tokens: +build7, +x+y

Two grammar modes exist. Strict mode requires the minor component and is
used for bare versions. Lenient mode makes the minor optional and is used
when the version follows a name ("AppName 9").
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Optional "v" or "version " prefix
VERSION_PREFIX_REGEX = r"(?:v|version )?"

# Single version, minor required
SINGLE_VERSION_REGEX = (
    VERSION_PREFIX_REGEX +
    r"(?P<major>\d+)"
    r"\.(?P<minor>\d+)"
    r"(?:\.(?P<revision>\d+)(?:\.(?P<build_number>\d+))?)?"
    r"(?P<prerelease>(?:-\w+)+)?"
    r"(?P<build>(?:\+\w+)+)?"
)

# Single version, minor optional
SINGLE_VERSION_OPTIONAL_MINOR_REGEX = (
    VERSION_PREFIX_REGEX +
    r"(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+)"
    r"(?:\.(?P<revision>\d+)(?:\.(?P<build_number>\d+))?)?)?"
    r"(?P<prerelease>(?:-\w+)+)?"
    r"(?P<build>(?:\+\w+)+)?"
)

COMPOUND_SEPARATOR = " + "
COMPOUND_SEPARATOR_REGEX = r"\s+\+\s+"

PATTERN_FLAGS = re.IGNORECASE | re.ASCII


def without_group_names(pattern: str) -> str:
    """Turn every named group of a pattern into a non-capturing group.

    Named groups may only appear once per pattern, so this is used when a
    single version pattern is embedded several times in a larger one.
    """
    return re.sub(r"\(\?P<\w+>", "(?:", pattern)


def compound_regex(single_regex: str) -> str:
    """Return a pattern matching one or more joined versions."""
    single = without_group_names(single_regex)
    return f"(?:{single})(?:{COMPOUND_SEPARATOR_REGEX}(?:{single}))*"


COMPOUND_VERSION_REGEX = compound_regex(SINGLE_VERSION_REGEX)
COMPOUND_VERSION_OPTIONAL_MINOR_REGEX = compound_regex(SINGLE_VERSION_OPTIONAL_MINOR_REGEX)

SINGLE_VERSION_PATTERN = re.compile(SINGLE_VERSION_REGEX, PATTERN_FLAGS)
SINGLE_VERSION_OPTIONAL_MINOR_PATTERN = re.compile(
    SINGLE_VERSION_OPTIONAL_MINOR_REGEX, PATTERN_FLAGS
)
COMPOUND_VERSION_PATTERN = re.compile(COMPOUND_VERSION_REGEX, PATTERN_FLAGS)
COMPOUND_VERSION_OPTIONAL_MINOR_PATTERN = re.compile(
    COMPOUND_VERSION_OPTIONAL_MINOR_REGEX, PATTERN_FLAGS
)

_TOKEN_PATTERN = re.compile(r"\w+", re.ASCII)


class InvalidVersionError(ValueError):
    """Raised when a version string cannot be parsed."""

    def __init__(self, version: str, message: str = ""):
        self.version = version
        self.message = message or f"Invalid version string: {version!r}"
        super().__init__(self.message)


def _optional_key(value: Optional[int]) -> tuple[int, int]:
    # Absent sorts before any present value, including 0
    return (0, 0) if value is None else (1, value)


@dataclass(frozen=True, slots=True)
class SingleVersion:
    """One concrete version value.

    Attributes:
        major: Major version number
        minor: Minor version number, None only for name-qualified versions
            such as "AppName 9"
        revision: Revision number; set to 0 when a build number is given
            without one
        build_number: Fourth numeric component
        prerelease: Pre-release tokens, rendered as "-token" each
        build: Build tokens, rendered as "+token" each
    """

    major: int
    minor: Optional[int] = None
    revision: Optional[int] = None
    build_number: Optional[int] = None
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for attr in ("major", "minor", "revision", "build_number"):
            value = getattr(self, attr)
            if value is None and attr != "major":
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{attr} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{attr} must be non-negative, got {value}")

        for attr in ("prerelease", "build"):
            tokens = getattr(self, attr)
            if isinstance(tokens, str):
                raise TypeError(f"{attr} must be a sequence of tokens, not a string")
            tokens = tuple(tokens)
            for token in tokens:
                if not isinstance(token, str) or not _TOKEN_PATTERN.fullmatch(token):
                    raise ValueError(f"Invalid {attr} token: {token!r}")
            object.__setattr__(self, attr, tokens)

        if self.build_number is not None and self.revision is None:
            object.__setattr__(self, "revision", 0)
        if self.revision is not None and self.minor is None:
            raise ValueError("revision and build_number require a minor version")

    @classmethod
    def parse(cls, text: str, *, require_minor: bool = True) -> Optional[SingleVersion]:
        """Parse a single version string.

        Args:
            text: The version text; the whole string must match
            require_minor: Use the strict grammar (True) or the lenient
                grammar where the minor component is optional (False)

        Returns:
            The parsed version, or None if the text does not match

        Examples:
            >>> SingleVersion.parse("1.2.3")
            SingleVersion(major=1, minor=2, revision=3, build_number=None, prerelease=(), build=())

            >>> SingleVersion.parse("9") is None
            True

            >>> SingleVersion.parse("9", require_minor=False).minor is None
            True
        """
        if not isinstance(text, str):
            return None
        pattern = (
            SINGLE_VERSION_PATTERN if require_minor else SINGLE_VERSION_OPTIONAL_MINOR_PATTERN
        )
        match = pattern.fullmatch(text)
        if match is None:
            logger.debug("String %r does not match pattern %r", text, pattern.pattern)
            return None
        return cls.from_match(match)

    @classmethod
    def from_match(cls, match: re.Match[str]) -> SingleVersion:
        """Build a version from a match of one of the single version patterns."""
        minor = match.group("minor")
        revision = match.group("revision")
        build_number = match.group("build_number")
        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(minor) if minor is not None else None,
            revision=int(revision) if revision is not None else None,
            build_number=int(build_number) if build_number is not None else None,
            prerelease=tuple(prerelease[1:].split("-")) if prerelease else (),
            build=tuple(build[1:].split("+")) if build else (),
        )

    @property
    def description(self) -> str:
        """Return the canonical string form.

        Every component that is present is rendered, so parsing the result
        gives back an equal version.
        """
        version = f"{self.major}"
        if self.minor is not None:
            version += f".{self.minor}"
        if self.revision is not None:
            version += f".{self.revision}"
        if self.build_number is not None:
            version += f".{self.build_number}"
        for token in self.prerelease:
            version += f"-{token}"
        for token in self.build:
            version += f"+{token}"
        return version

    def __str__(self) -> str:
        return self.description

    def sort_key(self) -> tuple:
        """Return a tuple ordering versions the same way as compare()."""
        return (
            self.major,
            _optional_key(self.minor),
            _optional_key(self.revision),
            _optional_key(self.build_number),
            "".join(self.prerelease),
            "".join(self.build),
            # Only reached when the joined tokens tie, e.g. ("ab",) vs ("a", "b")
            self.prerelease,
            self.build,
        )

    def compare(self, other: SingleVersion) -> int:
        """Compare with another version.

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other
        """
        lhs, rhs = self.sort_key(), other.sort_key()
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SingleVersion):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SingleVersion):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SingleVersion):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SingleVersion):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    def loosely_equals(self, other: SingleVersion) -> bool:
        """Check equality treating absent minor, revision and build number as 0."""
        return (
            self.major == other.major
            and (self.minor or 0) == (other.minor or 0)
            and (self.revision or 0) == (other.revision or 0)
            and (self.build_number or 0) == (other.build_number or 0)
            and self.prerelease == other.prerelease
            and self.build == other.build
        )

    @property
    def is_prerelease(self) -> bool:
        """Return True if this version carries pre-release tokens."""
        return bool(self.prerelease)

    @property
    def base_version(self) -> str:
        """Return the numeric part of the version without any tokens."""
        return SingleVersion(
            self.major, self.minor, self.revision, self.build_number
        ).description
