"""
Service layer for gittagger.

Contains the logic that coordinates domain objects and infrastructure:
- classify: commit message -> increment directive
- TaggingService: tags untagged commits on a branch
- HookManager: installs/removes the post-commit hook block

Services are the primary API for commands to use.
"""

from .classifier import classify
from .tagging_service import TaggingService, TaggingOptions
from .hook_service import HookManager, HookConfig, HookResult

__all__ = [
    'classify',
    'TaggingService',
    'TaggingOptions',
    'HookManager',
    'HookConfig',
    'HookResult',
]
