"""
Click-based CLI for gitversion-build.

Usage:
    from gitversion_build.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from .. import __version__
from .context import BuildContext


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gitversion-build")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: nearest .gitversion-build.toml or pyproject.toml)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug diagnostics to stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """gitversion-build - GitVersion facts for your build

    Runs dotnet-gitversion, publishes every version fact as a GITVERSION_*
    value and writes a Python module embedding them as constants.

    \b
    Commands:
        gitversion-build generate   Publish values and write gitversion.py
        gitversion-build show       Print the decoded version facts
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = BuildContext.create(config_path=config_path, verbose=verbose)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "BuildContext",
    "cli",
    "register_commands",
]
