"""CLI entry point for liftlog."""

import click

from . import __version__
from .commands import exercises, init, metrics, serve, sets, stats, widgets, workouts
from .config import configure_logging, load_settings


@click.group()
@click.version_option(version=__version__, prog_name="liftlog")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: ./liftlog.yaml)",
)
@click.option("--user", default=None, help="Signed-in user id; omit to use local storage")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, user: str | None, log_level: str | None):
    """liftlog: workout and body metric tracker.

    Log workouts, exercises and sets, track body weight, body fat and
    muscle mass against goals, and review your progress.

    Example usage:

        # Initialize the project
        liftlog init

        # Log a workout interactively
        liftlog workouts log

        # Record your weight and set a goal
        liftlog metrics add weight 82.5
        liftlog metrics goal weight 78 --deadline 2026-12-31

        # Work against your account instead of local storage
        liftlog --user alice workouts list
    """
    settings = load_settings(config_file)
    if log_level:
        settings.log_level = log_level
    configure_logging(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["user"] = user or settings.default_user


main.add_command(init)
main.add_command(workouts)
main.add_command(exercises)
main.add_command(sets)
main.add_command(metrics)
main.add_command(stats)
main.add_command(widgets)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
