"""
Semantic version domain objects for gittagger.

Versions are immutable value objects:
- SemanticVersion: major.minor.patch triple, rendered as "vX.Y.Z"
- VersionTag: a SemanticVersion plus an optional opaque hash suffix
  ("vX.Y.Z-abc1234"), as written on tags created by gittagger

The suffix never takes part in ordering or equality.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..exceptions import InvalidVersionError, InvalidIncrementLevelError


SEMVER_PATTERN = re.compile(
    r'v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:-(?P<suffix>[A-Za-z0-9]+))?'
)


class IncrementLevel(Enum):
    """Which version component a commit advances."""
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def coerce(cls, level: Union['IncrementLevel', str]) -> 'IncrementLevel':
        """Accept an IncrementLevel or its string value."""
        if isinstance(level, cls):
            return level
        try:
            return cls(level)
        except ValueError:
            raise InvalidIncrementLevelError(level) from None


def _match(text: str):
    if not isinstance(text, str) or not text:
        raise InvalidVersionError(text)
    match = SEMVER_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidVersionError(text)
    return match


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """
    A major.minor.patch version.

    Examples:
        SemanticVersion.parse("v1.2.3")        -> SemanticVersion(1, 2, 3)
        SemanticVersion.parse("1.2.3-abc")     -> SemanticVersion(1, 2, 3)
        SemanticVersion(1, 2, 3).increment("minor") -> v1.3.0
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self):
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidVersionError(f"{name}={value!r}")

    @classmethod
    def parse(cls, text: str) -> 'SemanticVersion':
        """
        Parse version text.

        Accepts an optional leading 'v' and an optional '-<alphanumeric>'
        suffix, which is discarded.

        Raises:
            InvalidVersionError: text is empty or not three numeric components
        """
        match = _match(text)
        return cls(int(match['major']), int(match['minor']), int(match['patch']))

    def increment(self, level: Union[IncrementLevel, str]) -> 'SemanticVersion':
        """
        Return the next version at the given level.

        Raises:
            InvalidIncrementLevelError: level is not major, minor or patch
        """
        level = IncrementLevel.coerce(level)
        if level is IncrementLevel.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if level is IncrementLevel.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True, order=True)
class VersionTag:
    """
    A tag name that carries a semantic version.

    Attributes:
        version: The numeric version
        suffix: Opaque suffix after the first '-' (usually a short commit hash)
    """

    version: SemanticVersion
    suffix: Optional[str] = field(default=None, compare=False)

    @classmethod
    def parse(cls, text: str) -> 'VersionTag':
        """
        Parse a tag name such as "v1.2.3" or "v1.2.3-abc1234".

        Raises:
            InvalidVersionError: the tag is not a semantic version
        """
        match = _match(text)
        version = SemanticVersion(int(match['major']), int(match['minor']), int(match['patch']))
        return cls(version, match['suffix'])

    @property
    def core(self) -> SemanticVersion:
        """The version with the suffix stripped."""
        return self.version

    def with_suffix(self, suffix: Optional[str]) -> 'VersionTag':
        return VersionTag(self.version, suffix)

    def __str__(self) -> str:
        if self.suffix:
            return f"{self.version}-{self.suffix}"
        return str(self.version)


VersionLike = Union[SemanticVersion, VersionTag, str]


def is_semver(text: str) -> bool:
    """Check whether text is a valid (optionally suffixed) semantic version."""
    return isinstance(text, str) and SEMVER_PATTERN.fullmatch(text) is not None


def strip_suffix(tag: str) -> str:
    """
    Return the part of a tag before the first '-'.

    No validation is performed: "v1.2.3-abc" -> "v1.2.3", "main" -> "main".
    """
    return tag.split('-', 1)[0]


def _as_version(value: VersionLike) -> SemanticVersion:
    if isinstance(value, SemanticVersion):
        return value
    if isinstance(value, VersionTag):
        return value.version
    return SemanticVersion.parse(value)


def compare_versions(a: VersionLike, b: VersionLike) -> int:
    """
    Compare two versions, ignoring any hash suffix.

    Text arguments must be valid versions; invalid text raises
    InvalidVersionError rather than being ordered arbitrarily.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    left = _as_version(a)
    right = _as_version(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0
