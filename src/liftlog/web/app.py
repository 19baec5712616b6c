"""FastAPI application for the liftlog API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..config import Settings, configure_logging, load_settings
from ..db.engine import init_db
from .deps import TrackerRegistry
from .routers import metrics, stats, widgets, workouts


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Startup: Initialize database
    db_path = app.state.settings.db_path
    if not db_path.exists():
        await init_db(db_path)
    yield
    # Shutdown: drop cached sessions
    app.state.trackers.clear()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="liftlog",
        description="Workout and body metric tracker",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.trackers = TrackerRegistry(settings)

    # Include routers
    app.include_router(workouts.router)
    app.include_router(metrics.router)
    app.include_router(widgets.router)
    app.include_router(stats.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
