"""
Schema and Seed Data

Schema creation, restricted application role and the example settings used
by the database scripts.
"""

from typing import Dict, List, Optional

from sqlalchemy import Engine, text
from sqlalchemy.orm import sessionmaker

from appsettings.core.exceptions import SettingConflictException
from appsettings.core.logger import get_logger
from appsettings.models import Base, Setting
from appsettings.services.setting_service import SettingService, SettingWriteData
from appsettings.stores.setting_store import SettingStore

logger = get_logger(__name__)

DEFAULT_SETTINGS: List[Dict[str, object]] = [
    {
        "key": "app.name",
        "value": "Fullstack Application",
        "description": "The name of the application",
        "category": "General",
    },
    {
        "key": "app.version",
        "value": "1.0.0",
        "description": "Current version of the application",
        "category": "General",
    },
    {
        "key": "app.theme.primary_color",
        "value": "#1976d2",
        "description": "Primary color for the application theme",
        "category": "Theme",
    },
    {
        "key": "app.maintenance.enabled",
        "value": "false",
        "description": "Whether maintenance mode is enabled",
        "category": "Maintenance",
    },
    {
        "key": "app.api.timeout",
        "value": "30000",
        "description": "API timeout in milliseconds",
        "category": "API",
    },
]


def create_schema(engine: Engine) -> None:
    """Create the settings table with its key (unique), category and created_at indexes."""
    Base.metadata.create_all(bind=engine, tables=[Setting.__table__])
    logger.info("Settings table '%s' is ready", Setting.__tablename__)


def drop_schema(engine: Engine) -> None:
    """Drop the settings table and its indexes."""
    Base.metadata.drop_all(bind=engine, tables=[Setting.__table__])
    logger.info("Settings table '%s' dropped", Setting.__tablename__)


def create_app_user(engine: Engine, user: str, password: str) -> bool:
    """
    Create or update a login role limited to reading and writing settings.

    Only PostgreSQL is supported; other backends are skipped.

    Returns:
        bool: True if the role was configured
    """
    if engine.dialect.name != "postgresql":
        logger.info(
            "Skipping application user creation on '%s' backend", engine.dialect.name
        )
        return False

    preparer = engine.dialect.identifier_preparer
    role = preparer.quote(user)
    table = preparer.format_table(Setting.__table__)
    # CREATE ROLE does not accept bound parameters
    password_literal = "'" + password.replace("'", "''") + "'"

    with engine.begin() as conn:
        exists = conn.execute(
            text("SELECT 1 FROM pg_roles WHERE rolname = :name"), {"name": user}
        ).scalar()
        verb = "ALTER" if exists else "CREATE"
        conn.execute(text(f"{verb} ROLE {role} WITH LOGIN PASSWORD {password_literal}"))
        conn.execute(text(f"GRANT SELECT, INSERT, UPDATE, DELETE ON {table} TO {role}"))

    logger.info("Application user '%s' configured with read/write on %s", user, table)
    return True


def seed_settings(
    session_factory: sessionmaker,
    defaults: Optional[List[Dict[str, object]]] = None,
) -> int:
    """
    Insert the example settings, leaving existing keys untouched.

    Returns:
        int: Number of settings inserted
    """
    service = SettingService(SettingStore(session_factory))
    inserted = 0
    for item in DEFAULT_SETTINGS if defaults is None else defaults:
        try:
            service.create(SettingWriteData(**item))
            inserted += 1
        except SettingConflictException:
            logger.info("Setting '%s' already present, skipping", item["key"])

    logger.info("Inserted %d initial settings", inserted)
    return inserted


__all__ = [
    "DEFAULT_SETTINGS",
    "create_schema",
    "drop_schema",
    "create_app_user",
    "seed_settings",
]
