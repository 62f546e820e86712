"""
Hook commands: install and remove the gittagger post-commit hook.
"""

import shutil
from pathlib import Path

import click

from ..cli_utils import add_common_options, console, handle_errors, load_config_or_fail
from ..exceptions import GitCommandError, HookError
from ..exit_codes import GitError, HookInstallError
from ..infra.git_client import GitClient
from ..services.hook_service import HookConfig, HookManager, HookResult


def default_executable() -> str:
    """
    The gittagger executable on PATH.

    Raises:
        HookInstallError: gittagger is not installed as a command
    """
    executable = shutil.which('gittagger')
    if executable is None:
        raise HookInstallError(
            "gittagger executable not found on PATH; pass --executable"
        )
    return executable


def hook_manager_for(repo_path: str) -> HookManager:
    """HookManager for the repository containing repo_path."""
    config = load_config_or_fail()
    git = GitClient(repo_path, timeout=config.get('git', {}).get('timeout', 30))
    try:
        root = git.toplevel()
    except GitCommandError as e:
        raise GitError(f"Not a git repository: {Path(repo_path).absolute()}: {e}") from e
    return HookManager(root, HookConfig.from_config(config))


@click.command('install')
@click.option('--executable', type=click.Path(dir_okay=False),
              help='Executable the hook runs (default: gittagger on PATH)')
@add_common_options('repo')
@handle_errors
def install_cmd(executable, repo_path):
    """Install the post-commit hook.

    After every commit the hook runs `gittagger tag` on the current
    branch without prompting. An existing post-commit hook is kept and
    the gittagger block is appended to it.
    """
    manager = hook_manager_for(repo_path)
    try:
        result = manager.install(executable or default_executable())
    except HookError as e:
        raise HookInstallError(f"Failed to install Git hook: {e}") from e

    if result == HookResult.UNCHANGED:
        console.print("[yellow]Git post-commit hook is already installed.[/yellow]")
    else:
        console.print(f"[green]Git post-commit hook {result.value} at {manager.hook_file}[/green]")


@click.command('clean')
@add_common_options('repo')
@handle_errors
def clean_cmd(repo_path):
    """Remove the gittagger block from the post-commit hook."""
    manager = hook_manager_for(repo_path)
    try:
        result = manager.clean()
    except HookError as e:
        raise HookInstallError(f"Failed to uninstall Git hook: {e}") from e

    if result == HookResult.UNCHANGED:
        console.print("[yellow]No gittagger block found in the post-commit hook.[/yellow]")
    else:
        console.print("[green]Git post-commit hook uninstalled successfully.[/green]")
