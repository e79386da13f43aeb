"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. The server is built lazily so ``--help`` and
``--version`` never touch plugins or configured hooks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restcore.config.settings import RestSettings
    from restcore.dispatch.server import Server


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RestSettings) -> None:
        self.settings = settings
        self._server: Server | None = None

        from restcore.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def server(self) -> Server:
        """The server instance (created and plugin-loaded on first access)."""
        if self._server is None:
            from restcore.dispatch.server import Server

            self._server = Server(self.settings, init_error_handler=False)
            self._server.load_plugins()
        return self._server
