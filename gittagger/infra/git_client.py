"""
Git client infrastructure for gittagger.

Every git invocation the tagger makes goes through GitClient, so tests
can swap in a MagicMock(spec=GitClient). Any failure raises
GitCommandError; nothing returns a partial result.
"""

import subprocess
from pathlib import Path
from typing import List, Set, Union
import logging

from ..domain.commit import Commit
from ..domain.version import VersionTag, is_semver
from ..exceptions import GitCommandError, TagNotFoundError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands for one repository.

    Example:
        client = GitClient("/path/to/repo")
        for commit in client.find_untagged("main"):
            print(commit.id, client.message(commit.id))
    """

    def __init__(self, path: Union[str, Path] = ".", timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            path: Repository working directory (default: current directory)
            timeout: Command timeout in seconds (default: 30)
        """
        self.path = Path(path)
        self.timeout = timeout

    def _run(self, *args: str) -> str:
        """
        Run a git command and return its stripped stdout.

        Raises:
            GitCommandError: git is missing, timed out or exited non-zero
        """
        cmd = ['git', *args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(
                f"git {args[0]} timed out after {self.timeout}s", git_args=args
            ) from e
        except OSError as e:
            raise GitCommandError(f"failed to run git {args[0]}: {e}", git_args=args) from e

        if result.returncode != 0:
            raise GitCommandError(
                f"git {' '.join(args)} failed",
                git_args=args,
                returncode=result.returncode,
                stderr=result.stderr or ""
            )

        return result.stdout.strip()

    def _lines(self, *args: str) -> List[str]:
        output = self._run(*args)
        return [line.strip() for line in output.split('\n') if line.strip()]

    def is_git_repo(self) -> bool:
        """Check if the client's path is inside a git work tree."""
        try:
            return self._run('rev-parse', '--is-inside-work-tree') == 'true'
        except GitCommandError:
            return False

    def toplevel(self) -> Path:
        """Absolute path of the repository root."""
        return Path(self._run('rev-parse', '--show-toplevel'))

    # ---------- Branches ----------

    def list_branches(self) -> List[str]:
        """Local branch names, in git's order."""
        branches = self._lines('branch', '--list', '--format=%(refname:short)')
        # Detached HEAD shows up as "(HEAD detached at ...)"
        return [b for b in branches if not b.startswith('(')]

    def current_branch(self) -> str:
        """
        Name of the checked-out branch.

        Raises:
            GitCommandError: HEAD is detached
        """
        branch = self._run('rev-parse', '--abbrev-ref', 'HEAD')
        if branch == 'HEAD' or not branch:
            raise GitCommandError(
                "detached HEAD state: not currently on any branch",
                git_args=('rev-parse', '--abbrev-ref', 'HEAD')
            )
        return branch

    # ---------- Commits ----------

    def find_untagged(self, branch: str) -> List[Commit]:
        """
        Commits reachable from branch but not from any tag, oldest first.

        Raises:
            GitCommandError: branch does not exist or has no commits
        """
        ids = self._lines('rev-list', '--reverse', branch, '--not', '--tags', '--')
        return [Commit(id=commit_id) for commit_id in ids]

    def short_id(self, commit_id: str) -> str:
        """Abbreviated, unique form of a commit id."""
        return self._run('rev-parse', '--short', commit_id)

    def message(self, commit_id: str) -> str:
        """Full commit message (subject, blank line, body)."""
        return self._run('show', '-s', '--format=%B', commit_id)

    # ---------- Tags ----------

    def tags(self) -> List[str]:
        """All tag names in the repository."""
        return self._lines('tag', '--list')

    def latest_tag(self) -> VersionTag:
        """
        Highest semantic-version tag across the whole repository.

        Tags that are not semantic versions (e.g. "v1.2", "release") are
        ignored.

        Raises:
            TagNotFoundError: no tag is a semantic version
        """
        candidates = [VersionTag.parse(name) for name in self.tags() if is_semver(name)]
        if not candidates:
            raise TagNotFoundError("no semantic version tags found")
        return max(candidates)

    def tags_containing(self, commit_id: str) -> Set[str]:
        """Names of tags whose history includes the commit."""
        return set(self._lines('tag', '--contains', commit_id))

    def create_tag(self, name: str, message: str, commit_id: str) -> None:
        """Create an annotated tag on a commit."""
        self._run('tag', '-a', name, '-m', message, commit_id)
