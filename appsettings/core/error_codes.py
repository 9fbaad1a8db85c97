"""
Error Codes

Machine-readable codes carried by application exceptions and returned in
the ``error.code`` field of error responses, with the HTTP status each maps to.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class ErrorCode(StrEnum):
    """Base for all codes. Values are prefixed with their domain."""


class DatabaseErrorCode(ErrorCode):
    CONNECTION_FAILED = "DATABASE_CONNECTION_FAILED"
    QUERY_FAILED = "DATABASE_QUERY_FAILED"


class SettingErrorCode(ErrorCode):
    NOT_FOUND = "SETTING_NOT_FOUND"
    KEY_CONFLICT = "SETTING_KEY_CONFLICT"


class APIErrorCode(ErrorCode):
    INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    INTERNAL_ERROR = "API_INTERNAL_ERROR"


# StrEnum members hash like their values, so plain strings look up too
ERROR_CODE_MAP: Mapping[str, int] = MappingProxyType(
    {
        DatabaseErrorCode.CONNECTION_FAILED: 503,
        DatabaseErrorCode.QUERY_FAILED: 500,
        SettingErrorCode.NOT_FOUND: 404,
        SettingErrorCode.KEY_CONFLICT: 409,
        APIErrorCode.INVALID_INPUT: 422,
        APIErrorCode.INTERNAL_ERROR: 500,
    }
)


def get_http_status_code(error_code: ErrorCode | str) -> int:
    """HTTP status for ``error_code``; unknown codes are server errors."""
    return ERROR_CODE_MAP.get(error_code, 500)
