"""Setting SQLAlchemy model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from appsettings.core.config import settings

from .base import BaseDBModel


class Setting(BaseDBModel):
    """Named configuration entry, unique by key."""

    __tablename__ = settings.database__table

    key: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, index=True
    )
    # Informational only; values are stored as given
    is_encrypted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Setting(key='{self.key}', category='{self.category}')>"


__all__ = ["Setting"]
