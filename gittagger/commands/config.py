import click
import json
from pathlib import Path

from ..cli_utils import handle_errors, load_config_or_fail
from ..exit_codes import ConfigError
from ..config import get_config_path, get_default_config, save_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@handle_errors
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config_or_fail()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("init")
@click.option("--format", "file_format", type=click.Choice(["json", "toml", "yaml"]), default="json",
              help="Config file format (default: json)")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@handle_errors
def init_config(file_format, force):
    """Write the default configuration to ~/.gittagger/."""
    config_path = Path.home() / ".gittagger" / f"config.{file_format}"
    if config_path.exists() and not force:
        click.echo(f"Configuration already exists at {config_path} (use --force to overwrite)")
        return
    try:
        saved = save_config(get_default_config(), config_path)
    except OSError as e:
        raise ConfigError(f"Failed to write configuration to {config_path}: {e}") from e
    click.echo(f"Default configuration written to {saved}")
