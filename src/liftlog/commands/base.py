"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..config import Settings
from ..notifications import Notification, NotificationCenter
from ..services.tracker import Tracker
from ..session import StaticSessionProvider
from ..stores.local import LocalStorage
from ..sync.optimistic import Outcome


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_settings(ctx: click.Context) -> Settings:
    return ctx.find_root().obj["settings"]


def get_user(ctx: click.Context) -> str | None:
    return ctx.find_root().obj.get("user")


def get_local_storage_dir(settings: Settings) -> Path:
    """Directory holding the local fallback store."""
    return settings.data_dir / "local"


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database exists when working against a user account."""
    if get_user(ctx) is None:
        return
    db_path = get_settings(ctx).db_path
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'liftlog init' first."
        )
        ctx.exit(1)


def echo_notification(notification: Notification) -> None:
    """Print a notification with a coloured prefix."""
    if notification.is_error:
        echo_error(notification.description)
    else:
        echo_success(f"{notification.title}: {notification.description}")


async def open_tracker(ctx: click.Context) -> Tracker:
    """Create and load the tracker for the current CLI session."""
    ensure_initialized(ctx)
    settings = get_settings(ctx)
    tracker = Tracker(
        StaticSessionProvider.for_user(get_user(ctx)),
        LocalStorage(get_local_storage_dir(settings)),
        db_path=settings.db_path,
        notifications=NotificationCenter(settings.notification_history),
    )
    tracker.notifications.add_sink(echo_notification)
    await tracker.load()
    return tracker


def finish(ctx: click.Context, outcome: Outcome) -> None:
    """Exit with status 1 when a mutation failed."""
    if not outcome.success:
        ctx.exit(1)


def resolve_id(candidates: list[str], ref: str) -> str:
    """Expand a unique id prefix to the full id; unknown refs pass through."""
    if ref in candidates:
        return ref
    matches = [c for c in candidates if c.startswith(ref)]
    return matches[0] if len(matches) == 1 else ref


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip())
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
