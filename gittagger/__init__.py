"""
gittagger - Semantic version tags for every commit.

gittagger walks the commits of a branch that no tag reaches yet, works out
how each one moves the version from its commit message, and creates an
annotated tag named vX.Y.Z-<short hash> on each, oldest first.

Quick Start:
    from gittagger import TaggingService, TaggingOptions

    service = TaggingService()
    for progress in service.tag_untagged("main", TaggingOptions(dry_run=True)):
        print(progress)

    summary = service.last_result
    print(summary.tagged)

Classification (first match wins):
    "BREAKING CHANGE" in message  -> major
    message starts with "feat"    -> minor
    message starts with "fix"     -> patch
    "vX.Y.Z" in message           -> exactly that version (resets the chain)
    anything else                 -> patch

Domain Objects:
    SemanticVersion - major.minor.patch value
    VersionTag - version plus optional hash suffix
    Commit - commit as seen by the tagger
    IncrementDirective - how a commit moves the version

Services:
    TaggingService - tags untagged commits on a branch
    HookManager - installs/removes the post-commit hook
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    SemanticVersion,
    VersionTag,
    IncrementLevel,
    Commit,
    IncrementDirective,
    TaggingSummary,
    compare_versions,
    strip_suffix,
)

# Services
from .services import (
    classify,
    TaggingService,
    TaggingOptions,
    HookManager,
    HookConfig,
)

# Infrastructure
from .infra import GitClient

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "SemanticVersion",
    "VersionTag",
    "IncrementLevel",
    "Commit",
    "IncrementDirective",
    "TaggingSummary",
    "compare_versions",
    "strip_suffix",
    # Services
    "classify",
    "TaggingService",
    "TaggingOptions",
    "HookManager",
    "HookConfig",
    # Infrastructure
    "GitClient",
    # Configuration
    "load_config",
    "save_config",
]
