"""Root CLI group for pkgboundaries with global flags and command registration."""

from __future__ import annotations

import click

from pkgboundaries import __version__
from pkgboundaries.commands import register_commands
from pkgboundaries.commands._context import AppContext
from pkgboundaries.config.settings import BoundarySettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pkgboundaries")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "policy_file",
    default=None,
    help="Policy file path (default: pkgboundaries.json in the project root).",
)
@click.option("--skip-tests", is_flag=True, help="Skip validating test modules.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    policy_file: str | None,
    skip_tests: bool,
) -> None:
    """pkgboundaries — enforce dependency directions between layers."""
    ctx.ensure_object(dict)
    settings = BoundarySettings.from_cli(
        policy_file=policy_file,
        skip_tests=skip_tests,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
