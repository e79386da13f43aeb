"""dispatch: run one request path and print the raw HTTP response."""

from __future__ import annotations

import sys

import click

from restcore.commands._context import AppContext


@click.command()
@click.argument("path")
@click.option("--user", "principal", default=None, help="Authenticated principal to attach.")
@click.pass_obj
def dispatch(app: AppContext, path: str, principal: str | None) -> None:
    """Dispatch PATH (e.g. /system.json) and write the response to stdout.

    Exits with status 1 when the response is a 4xx or 5xx.
    """
    from restcore.http.emitter import StreamEmitter

    emitter = StreamEmitter(sys.stdout.buffer, http_version=app.settings.http.version)
    response = app.server.run(path, emitter, principal=principal)
    if response.status >= 400:
        raise SystemExit(1)
