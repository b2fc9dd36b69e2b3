"""Create the data directory and bring the database schema up to date."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from liftlog.config import get_settings
from liftlog.database import run_migrations
from liftlog.logging_config import configure_logging


def main() -> None:
    configure_logging()
    settings = get_settings()
    if settings.database_url.startswith("sqlite:///"):
        db_path = Path(settings.database_url.removeprefix("sqlite:///"))
        db_path.parent.mkdir(parents=True, exist_ok=True)
    run_migrations()
    print("Database initialised at", settings.database_url)


if __name__ == "__main__":
    main()
