"""Logging setup shared by the API server, scripts and tests."""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from liftlog.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "liftlog.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

# Library loggers that are noisy at INFO. SQL statements are only shown in debug mode.
_QUIET_LOGGERS = {
    "urllib3": "WARNING",
    "uvicorn.access": "WARNING",
    "alembic.runtime.migration": "INFO",
}

_configured = False


def build_logging_config(log_dir: Path, level: str, debug: bool = False) -> dict[str, Any]:
    """
    Build the ``dictConfig`` mapping for the service.

    Records go to stderr and to a size-rotated ``liftlog.log`` in ``log_dir``.
    ``debug`` lowers the application logger to DEBUG and turns on SQL
    statement logging from the SQLAlchemy engine.
    """
    app_level = "DEBUG" if debug else level
    loggers: dict[str, dict[str, Any]] = {
        name: {"level": lib_level} for name, lib_level in _QUIET_LOGGERS.items()
    }
    loggers["liftlog"] = {"level": app_level}
    loggers["sqlalchemy.engine"] = {"level": "INFO" if debug else "WARNING"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "standard",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_dir / LOG_FILENAME),
                "maxBytes": MAX_LOG_BYTES,
                "backupCount": LOG_BACKUPS,
                "encoding": "utf-8",
                "formatter": "standard",
            },
        },
        "loggers": loggers,
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def configure_logging() -> None:
    """Apply the logging configuration once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir, level, debug = settings.log_dir, settings.log_level, settings.debug
    except ValidationError:
        # Identity settings may be injected after import (tests, CLI scripts).
        log_dir, level, debug = Path("logs"), "INFO", False
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(build_logging_config(log_dir, level, debug))
    _configured = True
