"""
The `gittagger tag` command: tag untagged commits on a branch.

Run by hand, it asks which branch to tag unless --branch is given.
Run from the post-commit hook (marker variable set), it never prompts
and tags the checked-out branch.
"""

import os
from typing import List

import click
from rich.table import Table

from ..cli_utils import (
    add_common_options,
    console,
    err_console,
    handle_errors,
    load_config_or_fail,
    output_json,
)
from ..exceptions import GitCommandError, TaggingError
from ..exit_codes import GitError, NoBranchesError, tagging_exit_error
from ..infra.git_client import GitClient
from ..services.hook_service import HookConfig
from ..services.tagging_service import TaggingOptions, TaggingService


def select_branch(branches: List[str]) -> str:
    """Ask the operator to pick one of the branches by number."""
    if not branches:
        raise NoBranchesError()

    table = Table(title="Select a branch to update", show_header=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Branch", style="bold")
    for i, name in enumerate(branches, start=1):
        table.add_row(str(i), name)
    err_console.print(table)

    choice = click.prompt(
        "Enter the number of the branch",
        type=click.IntRange(1, len(branches)),
        err=True
    )
    return branches[choice - 1]


def resolve_branch(git: GitClient, branch, non_interactive: bool) -> str:
    """Branch to tag: explicit, current (hook mode), or chosen by the operator."""
    if branch:
        return branch

    try:
        if non_interactive:
            if not git.is_git_repo():
                raise GitError("No Git repository found in the current directory")
            return git.current_branch()
        return select_branch(git.list_branches())
    except GitCommandError as e:
        raise GitError(f"Failed to determine the branch to tag: {e}") from e


@click.command('tag')
@click.option('--branch', '-b', help='Branch to tag (default: ask, or the current branch from the hook)')
@add_common_options('dry_run', 'json', 'repo')
@handle_errors
def tag_cmd(branch, dry_run, json_output, repo_path):
    """Tag untagged commits with semantic versions.

    Each untagged commit, oldest first, gets an annotated tag named
    vX.Y.Z-<short hash>. The increment comes from the commit message:

    \b
        BREAKING CHANGE anywhere  -> major
        starts with "feat"        -> minor
        starts with "fix"         -> patch
        contains vX.Y.Z           -> exactly that version
        anything else             -> patch

    Examples:

    \b
        gittagger tag --branch main
        gittagger tag --dry-run
        gittagger tag --branch main --json
    """
    config = load_config_or_fail()
    hook_config = HookConfig.from_config(config)
    git = GitClient(repo_path, timeout=config.get('git', {}).get('timeout', 30))

    non_interactive = bool(os.environ.get(hook_config.marker_env))
    if non_interactive:
        err_console.print("Running in non-interactive mode...")

    branch = resolve_branch(git, branch, non_interactive)

    service = TaggingService(config=config, git_client=git)
    options = TaggingOptions(dry_run=dry_run)

    try:
        for message in service.tag_untagged(branch, options):
            if not json_output:
                console.print(message, highlight=False)
    except TaggingError as e:
        summary = e.summary
        if json_output and summary is not None:
            _print_json(summary)
        tagged = summary.tagged if summary is not None else 0
        raise tagging_exit_error(f"Failed to update untagged commits: {e}", tagged) from e

    if json_output:
        _print_json(service.last_result)


def _print_json(summary):
    for result in summary.results:
        output_json(result.to_dict())
    output_json(summary.to_dict())
