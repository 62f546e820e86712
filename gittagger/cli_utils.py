"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
from functools import wraps
from typing import Any, Dict

import click
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .exit_codes import (
    INTERRUPTED,
    ConfigError,
    CommandError,
    get_exit_code_for_exception,
)
from .exceptions import GitTaggerError

console = Console()
err_console = Console(stderr=True)


def handle_errors(func):
    """
    Decorator that provides standard error handling for commands:
    - CommandError exits with its own exit code
    - gittagger errors exit with the code mapped to their type
    - Ctrl+C exits with 130
    - Click exceptions pass through (usage errors exit with 2)

    Errors are printed to stderr in a single human-readable line.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            err_console.print("[red]Interrupted by user[/red]")
            sys.exit(INTERRUPTED)
        except CommandError as e:
            err_console.print(f"[red]Error - {escape(str(e))}[/red]", highlight=False)
            if hasattr(e, 'succeeded'):
                err_console.print(
                    f"[yellow]{e.succeeded} tag(s) were created before the failure and were kept[/yellow]"
                )
            sys.exit(e.exit_code)
        except GitTaggerError as e:
            err_console.print(f"[red]Error - {escape(str(e))}[/red]", highlight=False)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def load_config_or_fail() -> Dict[str, Any]:
    """Load configuration, converting a bad config file into ConfigError."""
    try:
        return load_config()
    except ValueError as e:
        raise ConfigError(str(e)) from e


def output_json(item: Any):
    """Print one JSON object per line."""
    print(json.dumps(item, ensure_ascii=False), flush=True)


# Standard options that many commands share
common_options = {
    'json': click.option('--json', 'json_output', is_flag=True,
                         help='Output as JSONL'),
    'dry_run': click.option('--dry-run', is_flag=True,
                            help='Preview tags without creating them'),
    'repo': click.option('--repo', 'repo_path', default='.',
                         type=click.Path(exists=True, file_okay=False),
                         help='Repository path (default: current directory)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('json', 'dry_run')
        def my_command(json_output, dry_run):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
