"""Subcommand modules for restcore.

Provides register_commands() which uses deferred imports to keep
``restcore --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from restcore.commands.dispatch import dispatch
    from restcore.commands.hooks import hooks
    from restcore.commands.serve import serve

    cli.add_command(serve)
    cli.add_command(dispatch)
    cli.add_command(hooks)
