"""
Setting Store

Data access layer for setting records.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from appsettings.core.exceptions import SettingConflictException
from appsettings.core.logger import get_logger
from appsettings.models import Setting
from appsettings.stores.database import database_session

logger = get_logger(__name__)


class SettingStore:
    """Store class for setting data operations."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def insert(self, setting: Setting) -> Setting:
        """
        Insert a new setting.

        Args:
            setting: Setting instance to insert

        Returns:
            Setting: Inserted setting with its store-assigned id

        Raises:
            SettingConflictException: If a row with the same key already exists
            DatabaseException: If insertion fails for any other reason,
                including other constraint violations
        """
        key = setting.key
        with database_session(self.session_factory) as db:
            db.add(setting)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if db.query(Setting.id).filter(Setting.key == key).first() is None:
                    raise
                logger.warning("Key '%s' is already stored: %s", key, e.orig)
                raise SettingConflictException(key, cause=e) from e
            db.refresh(setting)
            logger.info("Created setting: %s", setting.key)
            return setting

    def find_all(self) -> List[Setting]:
        """Return every setting in the store's natural order."""
        with database_session(self.session_factory) as db:
            rows = db.query(Setting).all()
            logger.debug("Retrieved %d settings", len(rows))
            return rows

    def find_by_key(self, key: str) -> Optional[Setting]:
        """
        Get a setting by key.

        Returns:
            Setting or None if not found

        Raises:
            DatabaseException: If query fails
        """
        with database_session(self.session_factory) as db:
            row = db.query(Setting).filter(Setting.key == key).first()
            if row is None:
                logger.debug("Setting not found: %s", key)
            return row

    def find_by_category(self, category: str) -> List[Setting]:
        """Return settings whose category equals ``category`` exactly."""
        with database_session(self.session_factory) as db:
            rows = db.query(Setting).filter(Setting.category == category).all()
            logger.debug("Found %d settings in category '%s'", len(rows), category)
            return rows

    def replace_by_key(
        self, key: str, fields: Dict[str, Any], updated_at: datetime
    ) -> Optional[Setting]:
        """
        Overwrite the client-owned fields of the setting matching ``key``.

        Args:
            key: Key of the setting to replace
            fields: New value, description, category and is_encrypted;
                id, key and created_at are left as stored
            updated_at: Timestamp to record as the last modification

        Returns:
            The replaced setting, or None if no setting matched

        Raises:
            DatabaseException: If the update fails
        """
        with database_session(self.session_factory) as db:
            row = db.query(Setting).filter(Setting.key == key).first()
            if row is None:
                logger.debug("Setting not found for replace: %s", key)
                return None

            row.value = fields["value"]
            row.description = fields.get("description")
            row.category = fields.get("category")
            row.is_encrypted = bool(fields.get("is_encrypted", False))
            row.updated_at = updated_at

            db.commit()
            db.refresh(row)
            logger.info("Replaced setting: %s", key)
            return row

    def delete_by_key(self, key: str) -> bool:
        """
        Delete the setting matching ``key``.

        Returns:
            bool: True if deleted, False if not found
        """
        with database_session(self.session_factory) as db:
            deleted = (
                db.query(Setting)
                .filter(Setting.key == key)
                .delete(synchronize_session=False)
            )
            db.commit()
            if deleted:
                logger.info("Deleted setting: %s", key)
            else:
                logger.debug("Setting not found for deletion: %s", key)
            return deleted > 0


__all__ = ["SettingStore"]
