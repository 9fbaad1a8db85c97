"""
Exceptions

Every expected failure of the settings service is an ApplicationException
carrying an ErrorCode; the API layer renders it with the mapped HTTP status.
"""

import json
from typing import Any, Dict, Optional

from appsettings.core.error_codes import (
    APIErrorCode,
    DatabaseErrorCode,
    ErrorCode,
    SettingErrorCode,
    get_http_status_code,
)


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


class ApplicationException(Exception):
    """Base exception for application-specific errors."""

    default_code: ErrorCode = APIErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause

    @property
    def http_status(self) -> int:
        return get_http_status_code(self.error_code)

    def to_dict(self) -> Dict[str, Any]:
        """Message, code and JSON-safe details, plus the underlying cause if any."""
        data: Dict[str, Any] = {
            "message": self.message,
            "code": str(self.error_code),
            "details": {k: _json_safe(v) for k, v in self.details.items()},
        }
        cause = self.cause or self.__cause__
        if cause is not None:
            data["cause"] = {"type": type(cause).__name__, "message": str(cause)}
        return data

    def __str__(self) -> str:
        text = f"{self.message} [{self.error_code}]"
        if self.details:
            text += f" {self.details}"
        return text

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"error_code={self.error_code!r}, details={self.details!r})"
        )


class DatabaseException(ApplicationException):
    """The database could not be reached or rejected a statement."""

    default_code = DatabaseErrorCode.QUERY_FAILED


class SettingNotFoundException(ApplicationException):
    """No setting has the requested key."""

    def __init__(self, key: str, cause: Optional[Exception] = None) -> None:
        super().__init__(
            f"Setting not found: {key}",
            SettingErrorCode.NOT_FOUND,
            {"key": key},
            cause=cause,
        )
        self.key = key


class SettingConflictException(ApplicationException):
    """A setting with the same key already exists."""

    def __init__(self, key: str, cause: Optional[Exception] = None) -> None:
        super().__init__(
            "Setting with this key already exists",
            SettingErrorCode.KEY_CONFLICT,
            {"key": key},
            cause=cause,
        )
        self.key = key
