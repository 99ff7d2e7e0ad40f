# start_app.py
"""Create database tables and launch the API server."""

from __future__ import annotations

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

import config


def main(argv: list[str] | None = None) -> None:
    """Load settings, optionally create tables, then start the API."""

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--skip-db-init",
        action="store_true",
        help="Start without creating database tables",
    )
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    args = parser.parse_args(argv)

    load_dotenv()  # load environment variables from a .env file
    config.get_settings.cache_clear()
    settings = config.get_settings()

    if not args.skip_db_init:
        from api.app.db import init_db

        try:
            init_db()
        except SQLAlchemyError as exc:
            print(f"database initialisation failed: {exc}", file=sys.stderr)
            raise SystemExit(1)

    uvicorn.run(
        "api.app.main:app",
        host="0.0.0.0",  # nosec B104: bind for local development
        port=args.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
