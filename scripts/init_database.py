#!/usr/bin/env python3
"""
Database Initialization Script

Creates the settings table and indexes, a restricted application user, and
the example settings.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.exc import SQLAlchemyError

from appsettings.core.config import settings
from appsettings.core.exceptions import ApplicationException
from appsettings.core.logger import get_logger
from appsettings.stores.database import (
    create_database_engine,
    create_session_factory,
    dispose_engine,
    ping_database,
)
from appsettings.stores.seed import create_app_user, create_schema, seed_settings

logger = get_logger(__name__)


def main():
    """Main function to initialize the database."""
    parser = argparse.ArgumentParser(description="Initialize the settings database")
    parser.add_argument(
        "--skip-user",
        action="store_true",
        help="Do not create the restricted application user",
    )
    parser.add_argument(
        "--skip-seed", action="store_true", help="Do not insert the example settings"
    )
    args = parser.parse_args()

    engine = create_database_engine()
    try:
        logger.info("Starting database initialization...")

        connection_status = ping_database(engine)
        logger.info("Database connection test passed: %s", connection_status)

        create_schema(engine)

        if args.skip_user:
            logger.info("Application user creation skipped")
        elif settings.seed__app_user and settings.seed__app_password:
            create_app_user(
                engine,
                settings.seed__app_user,
                settings.seed__app_password.get_secret_value(),
            )
        else:
            logger.info(
                "No SEED__APP_USER/SEED__APP_PASSWORD configured, skipping user creation"
            )

        if not args.skip_seed:
            seed_settings(create_session_factory(engine))

        logger.info("Database initialization completed successfully")

    except (ApplicationException, SQLAlchemyError) as e:
        logger.error("Database initialization failed: %s", e)
        sys.exit(1)
    finally:
        dispose_engine(engine)


if __name__ == "__main__":
    main()
