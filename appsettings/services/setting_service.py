"""
Setting Service

Business logic for application settings: lookup, creation with key
uniqueness, full-replace updates and deletion.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from appsettings.core.exceptions import SettingConflictException, SettingNotFoundException
from appsettings.core.logger import get_logger
from appsettings.models import Setting
from appsettings.models.base import utc_now
from appsettings.stores.setting_store import SettingStore

logger = get_logger(__name__)


class SettingWriteData(BaseModel):
    """Service layer data for creating or replacing a setting."""

    key: str = Field(..., min_length=1, description="Unique setting key")
    value: str = Field(..., description="Setting value")
    description: Optional[str] = Field(None, description="Setting description")
    category: Optional[str] = Field(None, description="Setting category")
    is_encrypted: bool = Field(False, description="Whether the value is encrypted")


class SettingData(BaseModel):
    """Service layer representation of a stored setting."""

    id: str = Field(..., description="Store-assigned identifier")
    key: str = Field(..., description="Unique setting key")
    value: str = Field(..., description="Setting value")
    description: Optional[str] = Field(None, description="Setting description")
    category: Optional[str] = Field(None, description="Setting category")
    is_encrypted: bool = Field(False, description="Whether the value is encrypted")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class SettingService:
    """Service class for setting business logic."""

    def __init__(self, store: SettingStore) -> None:
        self.store = store

    def list_settings(self) -> List[SettingData]:
        """Return all settings in the store's natural order."""
        rows = self.store.find_all()
        return [SettingData.model_validate(row) for row in rows]

    def get_by_key(self, key: str) -> SettingData:
        """
        Get a setting by key.

        Raises:
            SettingNotFoundException: If no setting has this key
        """
        row = self.store.find_by_key(key)
        if row is None:
            raise SettingNotFoundException(key)
        return SettingData.model_validate(row)

    def get_by_category(self, category: str) -> List[SettingData]:
        """Return settings whose category matches exactly (case-sensitive)."""
        rows = self.store.find_by_category(category)
        return [SettingData.model_validate(row) for row in rows]

    def create(self, data: SettingWriteData) -> SettingData:
        """
        Create a new setting.

        The existence check gives the common case a friendly conflict; two
        concurrent creates can both pass it, in which case the store's unique
        index rejects the second insert and it surfaces as the same conflict.

        Raises:
            SettingConflictException: If a setting with the same key exists
        """
        if self.store.find_by_key(data.key) is not None:
            logger.info("Rejected duplicate setting key '%s'", data.key)
            raise SettingConflictException(data.key)

        now = utc_now()
        setting = Setting(
            key=data.key,
            value=data.value,
            description=data.description,
            category=data.category,
            is_encrypted=data.is_encrypted,
            created_at=now,
            updated_at=now,
        )
        row = self.store.insert(setting)
        return SettingData.model_validate(row)

    def update(self, key: str, data: SettingWriteData) -> SettingData:
        """
        Replace every client-owned field of the setting matching ``key``.

        The key in ``data`` is ignored in favour of ``key`` so an update can
        never move a setting to another key. ``id`` and ``created_at`` are
        kept; ``updated_at`` is refreshed.

        Raises:
            SettingNotFoundException: If no setting has this key
        """
        if data.key != key:
            logger.debug("Overriding body key '%s' with path key '%s'", data.key, key)
        data = data.model_copy(update={"key": key})

        row = self.store.replace_by_key(
            key, data.model_dump(exclude={"key"}), updated_at=utc_now()
        )
        if row is None:
            raise SettingNotFoundException(key)
        return SettingData.model_validate(row)

    def delete(self, key: str) -> None:
        """
        Delete the setting matching ``key``.

        Raises:
            SettingNotFoundException: If no setting has this key
        """
        if not self.store.delete_by_key(key):
            raise SettingNotFoundException(key)


__all__ = ["SettingWriteData", "SettingData", "SettingService"]
