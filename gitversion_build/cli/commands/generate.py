"""
Native Click implementation of the generate command.

Usage: gitversion-build generate [options]
"""

from __future__ import annotations

from pathlib import Path

import click

from ...services.generator import GeneratorService
from ...services.publisher import create_publishers
from ..context import BuildContext
from ..decorators import report_errors


@click.command("generate")
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the generated module (default: $OUT_DIR)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Exact path of the generated module; overrides --out-dir",
)
@click.option("--filename", help="Name of the generated module (default: gitversion.py)")
@click.option(
    "--style",
    type=click.Choice(["dotenv", "cargo", "none"]),
    help="How values are printed on stdout (default: dotenv)",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the values to this dotenv file",
)
@click.option(
    "--export/--no-export",
    default=None,
    help="Also set the values in this process's environment",
)
@click.option(
    "--payload-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read a GitVersion JSON document instead of running the tool",
)
@click.option("--tool", help='Version tool command (default: "dotnet-gitversion /nofetch")')
@click.option("--timeout", type=float, help="Seconds to wait for the version tool")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail when padded fields or short_sha disagree with their sources",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress the summary on stderr")
@click.pass_obj
@report_errors
def generate(
    ctx: BuildContext,
    out_dir: Path | None,
    output: Path | None,
    filename: str | None,
    style: str | None,
    env_file: Path | None,
    export: bool | None,
    payload_file: Path | None,
    tool: str | None,
    timeout: float | None,
    strict: bool | None,
    quiet: bool,
) -> None:
    """Publish GITVERSION_* values and write the generated module.

    Values are printed to stdout, one KEY=VALUE per line. The module is
    only rewritten when its content changes.

    \b
    Examples:
        OUT_DIR=build gitversion-build generate
        gitversion-build generate --out-dir src/myapp --style none
        gitversion-build generate --payload-file gitversion.json -o version.py
    """
    settings = ctx.load_settings(
        {
            "out_dir": out_dir,
            "filename": filename,
            "strict_consistency": strict,
            "source": {"tool": tool, "timeout": timeout, "payload_file": payload_file},
            "publish": {"style": style, "environ": export, "env_file": env_file},
        }
    )
    ctx.bootstrap(settings)

    service = GeneratorService(settings, publishers=create_publishers(settings.publish))
    result = service.generate(output)

    if not quiet:
        status = "wrote" if result.written else "unchanged"
        semver = result.version.semver or "(no version)"
        click.echo(f"gitversion-build: {semver} -> {result.path} ({status})", err=True)
