"""
The `gittagger branches` command.
"""

import click
from rich.table import Table

from ..cli_utils import add_common_options, console, handle_errors, load_config_or_fail, output_json
from ..exceptions import GitCommandError
from ..exit_codes import GitError, NoBranchesError
from ..infra.git_client import GitClient


@click.command('branches')
@add_common_options('json', 'repo')
@handle_errors
def branches_cmd(json_output, repo_path):
    """List local branches that can be tagged.

    The checked-out branch is marked with '*'.
    """
    config = load_config_or_fail()
    git = GitClient(repo_path, timeout=config.get('git', {}).get('timeout', 30))

    try:
        branches = git.list_branches()
    except GitCommandError as e:
        raise GitError(f"Failed to get branches: {e}") from e
    if not branches:
        raise NoBranchesError()

    try:
        current = git.current_branch()
    except GitCommandError:
        current = None  # detached HEAD

    if json_output:
        for name in branches:
            output_json({'branch': name, 'current': name == current})
        return

    table = Table(show_header=True)
    table.add_column("", width=1)
    table.add_column("Branch", style="bold")
    for name in branches:
        table.add_row("*" if name == current else "", name)
    console.print(table)
