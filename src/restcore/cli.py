"""Root CLI group for restcore with global flags and command registration."""

from __future__ import annotations

import click

from restcore import __version__
from restcore.commands import register_commands
from restcore.commands._context import AppContext
from restcore.config.settings import RestSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="restcore")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--mode",
    type=click.Choice(["production", "development"]),
    default=None,
    help="Override the runtime mode.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    verbose: bool,
    log_json: bool,
    mode: str | None,
) -> None:
    """restcore: REST request-dispatch server."""
    overrides: dict[str, object] = {"verbose": verbose, "log_json": log_json}
    if mode is not None:
        overrides["mode"] = mode
    settings = RestSettings.from_cli(config_path=config_path, **overrides)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
