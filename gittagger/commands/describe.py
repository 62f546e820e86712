"""
The `gittagger describe` command: explain how a commit is classified.
"""

import click
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..cli_utils import add_common_options, console, handle_errors, load_config_or_fail, output_json
from ..exceptions import GitCommandError
from ..exit_codes import GitError
from ..infra.git_client import GitClient
from ..services.tagging_service import TaggingService


@click.command('describe')
@click.argument('commit', default='HEAD', required=False)
@add_common_options('json', 'repo')
@handle_errors
def describe_cmd(commit, json_output, repo_path):
    """Show how COMMIT would move the version, and which tags contain it.

    COMMIT: Any git revision (default: HEAD)

    Examples:

    \b
        gittagger describe
        gittagger describe a1b2c3d --json
    """
    config = load_config_or_fail()
    git = GitClient(repo_path, timeout=config.get('git', {}).get('timeout', 30))
    service = TaggingService(config=config, git_client=git)

    try:
        info, directive = service.plan(commit)
        tags = sorted(git.tags_containing(commit))
    except GitCommandError as e:
        raise GitError(f"Failed to describe commit {commit}: {e}") from e

    if json_output:
        data = info.to_dict()
        data['increment'] = directive.describe()
        data['reason'] = directive.reason.value
        data['tags'] = tags
        output_json(data)
        return

    text = Text()
    text.append("Commit: ", style="bold cyan")
    text.append(f"{info.short_id}\n", style="bold white")
    text.append("Subject: ", style="dim")
    text.append(f"{info.subject}\n")
    text.append("Increment: ", style="bold blue")
    text.append(f"{directive.describe()} ({directive.reason.value})")
    console.print(Panel(text, border_style="cyan"))

    if tags:
        console.print("[green]Contained in tags:[/green]")
        for name in tags:
            console.print(f"  • {escape(name)}")
    else:
        console.print("[yellow]Not contained in any tag (untagged)[/yellow]")
