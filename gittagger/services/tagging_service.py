"""
Tagging service for gittagger.

Walks the untagged commits of a branch from oldest to newest, carries the
current version from one commit to the next, and creates one annotated
tag per commit named "<version>-<short id>".

Version sequence: each tag is one increment above the previous one, at
the level implied by the commit message. A commit message that contains
an explicit "vX.Y.Z" (and no keyword) sets the version to exactly that
value, which may move the sequence backwards; later commits continue
from that version.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Generator, Optional, Tuple

from ..config import load_config
from ..domain.commit import Commit, IncrementDirective
from ..domain.operation import TaggingRun, TaggingSummary, TagResult, TagStatus
from ..domain.version import SemanticVersion, VersionTag, strip_suffix
from ..exceptions import GitCommandError, TaggingError, TagNotFoundError
from ..infra.git_client import GitClient
from .classifier import classify

logger = logging.getLogger(__name__)

DEFAULT_BASELINE = "v0.0.0"
DEFAULT_ANNOTATION = "Automated tagging for commit {commit}"


@dataclass
class TaggingOptions:
    """Options for a tagging run."""
    dry_run: bool = False


class TaggingService:
    """
    Service that tags untagged commits on a branch.

    Example:
        service = TaggingService()

        for progress in service.tag_untagged("main", TaggingOptions()):
            print(progress)  # "Tagged a1b2c3d with v0.1.0-a1b2c3d"

        result = service.last_result
        print(f"Tagged {result.tagged} commits")

    Any git failure while reading a commit or creating its tag stops the
    run at that commit with TaggingError. Tags created before it stay.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize TaggingService.

        Args:
            config: Configuration dict (loads default if None)
            git_client: GitClient instance (creates new if None)
        """
        self.config = config if config is not None else load_config()
        self.git = git_client or GitClient(
            timeout=self.config.get('git', {}).get('timeout', 30)
        )
        self.last_result: Optional[TaggingSummary] = None

    @property
    def _tagging_config(self) -> Dict[str, Any]:
        return self.config.get('tagging', {})

    def _call(self, summary: TaggingSummary, operation: str, commit_id: Optional[str], func, *args):
        """Run an adapter call, turning git failures into TaggingError with context."""
        try:
            return func(*args)
        except GitCommandError as e:
            if commit_id:
                message = f"{operation} failed for commit {commit_id}: {e}"
            else:
                message = f"{operation} failed on branch {summary.branch}: {e}"
            summary.error = message
            raise TaggingError(message, commit=commit_id, operation=operation, summary=summary) from e

    def find_baseline(self, summary: TaggingSummary) -> Tuple[str, bool]:
        """
        Latest semantic-version tag in the repository, or the configured default.

        Returns:
            (baseline tag text, whether the default was used)
        """
        try:
            latest = self._call(summary, "latest tag lookup", None, self.git.latest_tag)
        except TagNotFoundError:
            default = self._tagging_config.get('default_baseline', DEFAULT_BASELINE)
            logger.warning(f"No semantic version tags found. Defaulting to '{default}'")
            return default, True
        return str(latest), False

    def annotation_for(self, commit: Commit, tag: str, version: SemanticVersion, branch: str) -> str:
        template = self._tagging_config.get('annotation', DEFAULT_ANNOTATION)
        return template.format(commit=commit.id, tag=tag, version=version, branch=branch)

    def tag_untagged(
        self,
        branch: str,
        options: Optional[TaggingOptions] = None
    ) -> Generator[str, None, TaggingSummary]:
        """
        Tag every untagged commit on a branch.

        Args:
            branch: Branch whose history is scanned
            options: Tagging options

        Yields:
            Progress messages

        Returns:
            TaggingSummary with results

        Raises:
            TaggingError: a git call failed; the run stopped at that point
        """
        options = options or TaggingOptions()
        summary = TaggingSummary(branch=branch, dry_run=options.dry_run)
        self.last_result = summary

        commits = self._call(summary, "untagged commit lookup", None, self.git.find_untagged, branch)
        if not commits:
            yield "No untagged commits found."
            return summary

        baseline, defaulted = self.find_baseline(summary)
        summary.baseline = baseline
        summary.baseline_defaulted = defaulted

        run = TaggingRun(
            branch=branch,
            current_version=SemanticVersion.parse(strip_suffix(baseline))
        )
        yield f"Found {len(commits)} untagged commits on {branch} (baseline {baseline})"

        for commit in commits:
            yield self._tag_commit(commit, run, options, summary)

        if options.dry_run:
            yield f"Would tag {run.processed_count} commits on {branch}"
        else:
            yield f"Successfully tagged {summary.tagged} commits on {branch}"
        return summary

    def _tag_commit(
        self,
        commit: Commit,
        run: TaggingRun,
        options: TaggingOptions,
        summary: TaggingSummary
    ) -> str:
        """Classify, resolve the version for, and tag one commit."""
        message = self._call(summary, "reading message", commit.id, self.git.message, commit.id)
        directive = classify(message)
        run.current_version = directive.apply(run.current_version)

        short_id = self._call(summary, "reading short id", commit.id, self.git.short_id, commit.id)
        tag_name = str(VersionTag(run.current_version).with_suffix(short_id))
        commit = Commit(id=commit.id, short_id=short_id, message=message)

        if options.dry_run:
            status = TagStatus.DRY_RUN
            progress = f"  Would tag {short_id} with {tag_name} ({directive.describe()})"
        else:
            annotation = self.annotation_for(commit, tag_name, run.current_version, run.branch)
            self._call(summary, f"creating tag {tag_name}", commit.id,
                       self.git.create_tag, tag_name, annotation, commit.id)
            logger.info(f"Tagged commit {commit.id} with {tag_name}")
            status = TagStatus.TAGGED
            progress = f"  ✓ Tagged {short_id} with {tag_name} ({directive.describe()})"

        run.processed_count += 1
        summary.add_result(TagResult(
            commit=commit.id,
            short_id=short_id,
            tag=tag_name,
            version=run.current_version,
            status=status,
            reason=directive.reason.value,
            subject=commit.subject,
        ))
        return progress

    def run(self, branch: str, options: Optional[TaggingOptions] = None) -> TaggingSummary:
        """Tag a branch without streaming progress; returns the summary."""
        for _ in self.tag_untagged(branch, options):
            pass
        return self.last_result

    def plan(self, commit_id: str) -> Tuple[Commit, IncrementDirective]:
        """
        Classify a single commit without tagging anything.

        Raises:
            GitCommandError: the commit cannot be read
        """
        message = self.git.message(commit_id)
        short_id = self.git.short_id(commit_id)
        return Commit(id=commit_id, short_id=short_id, message=message), classify(message)
