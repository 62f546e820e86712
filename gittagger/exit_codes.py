"""
Standard exit codes for gittagger commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NO_BRANCHES = 64         # Repository has no branches to choose from
GIT_ERROR = 65           # A git command failed
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Malformed version text or increment level
PARTIAL_SUCCESS = 71     # Tagging stopped after some tags were created
HOOK_ERROR = 72          # Post-commit hook could not be installed/removed
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'GitCommandError': GIT_ERROR,
    'InvalidVersionError': DATA_ERROR,
    'InvalidIncrementLevelError': DATA_ERROR,
    'HookError': HOOK_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class NoBranchesError(CommandError):
    """Raised when the repository has no local branches."""
    def __init__(self, message: str = "No branches found in the repository"):
        super().__init__(message, NO_BRANCHES)


class GitError(CommandError):
    """Raised when a git command fails outside a tagging run."""
    def __init__(self, message: str):
        super().__init__(message, GIT_ERROR)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class HookInstallError(CommandError):
    """Raised when the post-commit hook cannot be installed or removed."""
    def __init__(self, message: str):
        super().__init__(message, HOOK_ERROR)


class PartialSuccessError(CommandError):
    """Raised when a tagging run stops after creating some tags."""
    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed


def tagging_exit_error(message: str, tagged: int) -> CommandError:
    """CommandError for an aborted run: partial success if tags were created."""
    if tagged > 0:
        return PartialSuccessError(message, succeeded=tagged, failed=1)
    return GitError(message)
