"""Run the LiftLog API with uvicorn using the configured host and port."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from liftlog.config import get_settings
from liftlog.database import run_migrations
from liftlog.logging_config import configure_logging


logger = logging.getLogger("scripts.run_server")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the LiftLog API server")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    parser.add_argument(
        "--skip-migrations",
        action="store_true",
        help="Start without applying pending Alembic migrations",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()
    settings = get_settings()

    if not args.skip_migrations:
        run_migrations()
        logger.info("Database schema is up to date")

    logger.info("Starting LiftLog API on %s:%d", settings.app_host, settings.app_port)
    uvicorn.run(
        "liftlog.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=args.reload,
        log_config=None,  # keep the dictConfig from configure_logging
    )


if __name__ == "__main__":
    main()
