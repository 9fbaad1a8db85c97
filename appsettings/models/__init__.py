"""
Models Package

SQLAlchemy models for the settings service.
"""

from .base import Base, BaseDBModel, TimestampMixin
from .setting import Setting

__all__ = [
    # Base classes
    "Base",
    "BaseDBModel",
    "TimestampMixin",
    # Database models
    "Setting",
]
