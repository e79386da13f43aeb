"""hooks: list event and filter bindings in registration order."""

from __future__ import annotations

import click

from restcore.commands._context import AppContext


def _describe(callback: object) -> str:
    module = getattr(callback, "__module__", None)
    name = getattr(callback, "__qualname__", None) or repr(callback)
    return f"{module}:{name}" if module else name


@click.command()
@click.option(
    "--channel",
    type=click.Choice(["event", "filter"]),
    default=None,
    help="Only show one channel.",
)
@click.pass_obj
def hooks(app: AppContext, channel: str | None) -> None:
    """Show bound hooks."""
    bindings = app.server.hooks.bindings(channel)
    if not bindings:
        click.echo("No hooks bound.")
        return
    for binding in bindings:
        click.echo(f"{binding.channel:<7} {binding.name:<24} {_describe(binding.callback)}")
