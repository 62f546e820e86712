"""
Exception types for gittagger.

Domain and infrastructure code raise these; the CLI layer maps them to
exit codes (see exit_codes.py).
"""

from typing import Optional, Sequence


class GitTaggerError(Exception):
    """Base class for all gittagger errors."""


class InvalidVersionError(ValueError, GitTaggerError):
    """Raised when text is not a valid semantic version."""

    def __init__(self, text: str):
        super().__init__(f"invalid semantic version: {text!r}")
        self.text = text


class InvalidIncrementLevelError(ValueError, GitTaggerError):
    """Raised when an increment level is not major, minor or patch."""

    def __init__(self, level):
        super().__init__(f"unknown version increment level: {level!r}")
        self.level = level


class GitCommandError(GitTaggerError):
    """
    A git invocation failed.

    Attributes:
        git_args: Arguments passed to git (without the leading 'git')
        returncode: Process exit status (-1 if git could not be run)
        stderr: Captured standard error
    """

    def __init__(
        self,
        message: str,
        git_args: Sequence[str] = (),
        returncode: int = -1,
        stderr: str = ""
    ):
        super().__init__(message)
        self.git_args = list(git_args)
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        text = super().__str__()
        if self.stderr:
            text += f": {self.stderr.strip()}"
        return text


class TagNotFoundError(GitTaggerError):
    """No semantic-version tag exists in the repository."""


class TaggingError(GitTaggerError):
    """
    A tagging run was aborted.

    Tags created before the failure are left in place; ``summary`` holds
    what was done so far.
    """

    def __init__(self, message: str, commit: Optional[str] = None,
                 operation: Optional[str] = None, summary=None):
        super().__init__(message)
        self.commit = commit
        self.operation = operation
        self.summary = summary


class HookError(GitTaggerError):
    """Installing or removing the post-commit hook failed."""

    def __init__(self, message: str, hook_path=None):
        super().__init__(message)
        self.hook_path = hook_path
