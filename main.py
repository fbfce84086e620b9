"""
main.py
-------
Entry point for the Animal Shelter Registry.

Usage:
    python main.py              # start the interactive menu
    python main.py --db-setup   # re-create the schema and seed it from CSV

Responsibilities:
    - Open the SQLite storage and make sure the schema exists.
    - Either seed the database or run the interactive session.
    - Close the storage on exit.
"""

import argparse
import sys
from typing import Optional, Sequence

from config import DB_SEED_FILE, DB_STORAGE, SEED_BATCH_SIZE
from db.connection import Database
from db.init_db import create_tables
from db.seed import seed
from system import System
from utils.display import Alert
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animal Shelter Registry")
    parser.add_argument(
        "--db-setup",
        action="store_true",
        help="drop and re-create every table, then seed it from DB_SEED_FILE",
    )
    return parser.parse_args(argv)


def setup_database(db: Database, source: str = DB_SEED_FILE, batch_size: int = SEED_BATCH_SIZE) -> bool:
    """Re-create the schema and seed it. Returns True when seeding fully succeeded."""
    logger.info("Preparing setup database...")
    create_tables(db, force=True)
    print("Database schema successfully updated.")

    report = seed(db, source=source, batch_size=batch_size)
    if report.success:
        Alert.success(
            f"Database successfully setup: {report.processed} animals, {report.species} species, "
            f"{report.breeds} breeds, {report.outcome_types + report.outcome_subtypes} outcomes."
        )
    else:
        Alert.warn(
            f"Database setup finished with some errors: processing stopped at record "
            f"{report.processed} of {report.total}. Please verify the seed file and try again."
        )
    return report.success


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the registry; returns the process exit code."""
    args = parse_args(argv)

    db = Database(DB_STORAGE)
    db.open()
    try:
        if args.db_setup:
            return 0 if setup_database(db) else 1

        create_tables(db)
        System(db).start()
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
