"""
Domain layer for gittagger.

Contains pure domain objects with no I/O or side effects:
- SemanticVersion / VersionTag: version values and tag names
- Commit: a commit as seen by the tagger
- IncrementDirective: how a commit moves the version
- TaggingRun / TagResult / TaggingSummary: run state and reporting

These objects are immutable where possible and provide
serialization methods for JSONL output.
"""

from .version import (
    SemanticVersion,
    VersionTag,
    IncrementLevel,
    compare_versions,
    is_semver,
    strip_suffix,
)
from .commit import Commit, IncrementDirective, DirectiveReason
from .operation import TaggingRun, TagResult, TagStatus, TaggingSummary

__all__ = [
    'SemanticVersion',
    'VersionTag',
    'IncrementLevel',
    'compare_versions',
    'is_semver',
    'strip_suffix',
    'Commit',
    'IncrementDirective',
    'DirectiveReason',
    'TaggingRun',
    'TagResult',
    'TagStatus',
    'TaggingSummary',
]
