#!/usr/bin/env python3
"""
Standalone database initialization script.

Creates the app_user and meal tables (idempotent) against DATABASE_URL or the
URL given on the command line.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --database-url sqlite:///diettrack.db
"""

import argparse
import logging
import os
import sys

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from app.config import settings  # noqa: E402
from domain.models import build_engine, init_database  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("diettrack.init-db")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Create the DietTrack schema (idempotent).")
    p.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy URL (defaults to DATABASE_URL / .env)",
    )
    p.add_argument("--echo", action="store_true", help="Echo SQL statements")
    args = p.parse_args(argv)

    engine = build_engine(args.database_url, echo=args.echo)
    try:
        init_database(engine)
        logger.info("Schema ready at %s", engine.url.render_as_string(hide_password=True))
        return 0
    except Exception:
        logger.exception("Database initialization failed")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
