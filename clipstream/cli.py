import argparse
import logging
import sys

import uvicorn

from .config import get_settings
from .database import create_database_engine, sync_schema
from .main import configure_logging, create_app
from .seed import seed_database

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipstream",
        description="Run the clips API, or reset the database with fixture clips.",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default="serve",
        help="'seed' to reset and populate the database, anything else to serve",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    engine = create_database_engine(settings.database_url, echo=settings.echo_sql)

    if args.mode == "seed":
        seed_database(engine)
        sys.exit(0)

    sync_schema(engine)
    app = create_app(settings=settings, engine=engine)
    logger.info("🚀 Server running on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
