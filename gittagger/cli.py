#!/usr/bin/env python3

import click

from gittagger import __version__
from gittagger.cli_utils import handle_errors, load_config_or_fail
from gittagger.config import configure_logging
from gittagger.commands.tag import tag_cmd
from gittagger.commands.hook import install_cmd, clean_cmd
from gittagger.commands.branches import branches_cmd
from gittagger.commands.describe import describe_cmd
from gittagger.commands.config import config_cmd


@click.group()
@click.version_option(version=__version__, prog_name="gittagger")
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging (git commands run)')
@handle_errors
def cli(verbose):
    """gittagger - Semantic version tags for every commit.

    Tags untagged commits with vX.Y.Z-<short hash>, inferring the
    increment from each commit message, and can install a post-commit
    hook so new commits are tagged automatically.
    """
    configure_logging(load_config_or_fail(), verbose)


cli.add_command(tag_cmd)
cli.add_command(install_cmd)
cli.add_command(clean_cmd)
cli.add_command(branches_cmd)
cli.add_command(describe_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
