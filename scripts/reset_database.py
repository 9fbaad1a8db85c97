#!/usr/bin/env python3
"""
Database Reset Script

Drops and recreates the settings table.
WARNING: This will delete all existing settings!
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError

from appsettings.core.exceptions import ApplicationException
from appsettings.core.logger import get_logger
from appsettings.stores.database import (
    create_database_engine,
    create_session_factory,
    dispose_engine,
    ping_database,
)
from appsettings.stores.seed import create_schema, drop_schema, seed_settings

logger = get_logger(__name__)


def main():
    """Main function to reset the database."""
    parser = argparse.ArgumentParser(description="Reset the settings table")
    parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )
    parser.add_argument(
        "--seed", action="store_true", help="Insert the example settings afterwards"
    )
    args = parser.parse_args()

    engine = create_database_engine()
    try:
        logger.info("Starting database reset...")
        ping_database(engine)

        if not args.yes:
            response = input(
                "WARNING: This will delete all existing settings! Continue? (y/N): "
            )
            if response.lower() != "y":
                logger.info("Database reset cancelled by user")
                return

        drop_schema(engine)
        create_schema(engine)

        if args.seed:
            seed_settings(create_session_factory(engine))

        logger.info("Database reset completed successfully")

    except (ApplicationException, SQLAlchemyError) as e:
        logger.error("Database reset failed: %s", e)
        sys.exit(1)
    finally:
        dispose_engine(engine)


if __name__ == "__main__":
    main()
