"""Web server command."""

import click

from .base import get_settings


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    Requests carrying an X-User-Id header are stored in the database;
    anonymous requests use the local fallback store.

    Examples:

        # Start on default port (8000)
        liftlog serve

        # Expose to network (all interfaces)
        liftlog serve --host 0.0.0.0 --port 3000

        # Development mode with auto-reload
        liftlog serve --reload
    """
    import uvicorn

    from ..web import create_app

    settings = get_settings(ctx)

    click.echo()
    click.echo(click.style("Starting liftlog API server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Data:    {settings.data_dir}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app(settings) if not reload else "liftlog.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=settings.log_level.lower(),
    )
