"""
Commit and increment directive domain objects for gittagger.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .version import IncrementLevel, SemanticVersion


@dataclass(frozen=True)
class Commit:
    """
    A commit as seen by the tagger.

    Commits are read-only. The message may be empty until it has been
    loaded from the repository.
    """
    id: str
    short_id: str = ""
    message: str = ""

    @property
    def subject(self) -> str:
        """First line of the message."""
        return self.message.split('\n', 1)[0].strip() if self.message else ""

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'short_id': self.short_id,
            'subject': self.subject,
        }


class DirectiveReason(Enum):
    """Which classification rule produced a directive."""
    BREAKING_CHANGE = "breaking_change"
    FEATURE = "feature"
    FIX = "fix"
    EXPLICIT_VERSION = "explicit_version"
    DEFAULT = "default"


@dataclass(frozen=True)
class IncrementDirective:
    """
    How to derive a commit's version from the previous one.

    Exactly one of ``level`` or ``explicit_version`` is set.

    Examples:
        IncrementDirective.for_level(IncrementLevel.MINOR, DirectiveReason.FEATURE)
        IncrementDirective.explicit(SemanticVersion(5, 0, 0))
    """
    level: Optional[IncrementLevel] = None
    explicit_version: Optional[SemanticVersion] = None
    reason: DirectiveReason = DirectiveReason.DEFAULT

    def __post_init__(self):
        if (self.level is None) == (self.explicit_version is None):
            raise ValueError("IncrementDirective needs exactly one of level or explicit_version")

    @classmethod
    def for_level(cls, level: IncrementLevel, reason: DirectiveReason) -> 'IncrementDirective':
        return cls(level=level, reason=reason)

    @classmethod
    def explicit(cls, version: SemanticVersion) -> 'IncrementDirective':
        return cls(explicit_version=version, reason=DirectiveReason.EXPLICIT_VERSION)

    @property
    def is_explicit(self) -> bool:
        return self.explicit_version is not None

    def apply(self, current: SemanticVersion) -> SemanticVersion:
        """Resolve the next version from the current one."""
        if self.explicit_version is not None:
            return self.explicit_version
        return current.increment(self.level)

    def describe(self) -> str:
        if self.explicit_version is not None:
            return f"explicit {self.explicit_version}"
        return self.level.value
