"""Initialize project command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, get_local_storage_dir, get_settings


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the liftlog data directory and database.

    This creates the data directory, the local fallback store directory and
    the SQLite database used for signed-in users.
    """
    settings = get_settings(ctx)
    data_dir = settings.data_dir

    echo_info(f"Initializing liftlog in {data_dir}")

    data_dir.mkdir(parents=True, exist_ok=True)
    get_local_storage_dir(settings).mkdir(parents=True, exist_ok=True)

    await init_db(settings.db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("liftlog is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Log a workout:")
    click.echo("     liftlog workouts log                  # Interactive entry")
    click.echo("     liftlog --user me workouts log        # Store it in your account")
    click.echo()
    click.echo("  2. Check your progress:")
    click.echo("     liftlog stats summary")
