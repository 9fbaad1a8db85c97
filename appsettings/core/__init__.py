"""
Core Package

Configuration, error codes, exceptions and logging for the settings service.
"""

from .config import Settings, settings
from .error_codes import (
    APIErrorCode,
    DatabaseErrorCode,
    ErrorCode,
    SettingErrorCode,
    get_http_status_code,
)
from .exceptions import (
    ApplicationException,
    DatabaseException,
    SettingConflictException,
    SettingNotFoundException,
)
from .logger import get_logger

__all__ = [
    "Settings",
    "settings",
    "ErrorCode",
    "APIErrorCode",
    "DatabaseErrorCode",
    "SettingErrorCode",
    "get_http_status_code",
    "ApplicationException",
    "DatabaseException",
    "SettingNotFoundException",
    "SettingConflictException",
    "get_logger",
]
