"""
Native Click implementation of the show command.

Usage: gitversion-build show [--json]
"""

from __future__ import annotations

from pathlib import Path

import click

from ...services.generator import GeneratorService
from ...services.publisher import published_values
from ..context import BuildContext
from ..decorators import report_errors


@click.command("show")
@click.option(
    "--payload-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read a GitVersion JSON document instead of running the tool",
)
@click.option("--tool", help="Version tool command")
@click.option("--timeout", type=float, help="Seconds to wait for the version tool")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the facts as JSON keyed by GitVersion names",
)
@click.pass_obj
@report_errors
def show(
    ctx: BuildContext,
    payload_file: Path | None,
    tool: str | None,
    timeout: float | None,
    as_json: bool,
) -> None:
    """Print the decoded version facts without writing anything.

    \b
    Examples:
        gitversion-build show
        gitversion-build show --json
    """
    settings = ctx.load_settings(
        {"source": {"tool": tool, "timeout": timeout, "payload_file": payload_file}}
    )
    ctx.bootstrap(settings)

    version = GeneratorService(settings).load_version()

    if as_json:
        click.echo(version.model_dump_json(by_alias=True, indent=2))
        return

    for key, value in published_values(version):
        click.echo(f"{key}={value}")
