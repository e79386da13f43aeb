"""serve: run the server behind the stdlib WSGI reference server."""

from __future__ import annotations

import click

from restcore.commands._context import AppContext


@click.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Listen port.")
@click.pass_obj
def serve(app: AppContext, host: str, port: int) -> None:
    """Serve HTTP requests until interrupted."""
    from wsgiref.simple_server import make_server

    from restcore.http.wsgi import make_wsgi_app

    httpd = make_server(host, port, make_wsgi_app(app.server))
    click.echo(f"Listening on http://{host}:{port}{app.settings.application.path}", err=True)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        click.echo("Shutting down...", err=True)
    finally:
        httpd.server_close()
