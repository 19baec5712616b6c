"""Configuration management."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

CONFIG_FILE = "liftlog.yaml"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """Application settings."""

    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    db_filename: str = "liftlog.db"
    log_level: str = "INFO"
    notification_history: int = 50
    default_user: str | None = None

    @property
    def db_path(self) -> Path:
        return get_db_path(self.data_dir, self.db_filename)


def get_db_path(data_dir: Path | None = None, filename: str = "liftlog.db") -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / filename


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Load settings from a YAML file, falling back to environment variables."""
    config_path = Path(config_file or CONFIG_FILE)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if "data_dir" in data:
            data["data_dir"] = Path(data["data_dir"]).expanduser()
        return Settings(**data)

    data_dir = os.getenv("LIFTLOG_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DATA_DIR,
        db_filename=os.getenv("LIFTLOG_DB", "liftlog.db"),
        log_level=os.getenv("LIFTLOG_LOG_LEVEL", "INFO"),
        notification_history=int(os.getenv("LIFTLOG_NOTIFICATION_HISTORY", "50")),
        default_user=os.getenv("LIFTLOG_USER") or None,
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the CLI and web server."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
