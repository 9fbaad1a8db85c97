"""
API Schemas

Pydantic models for API requests and responses.
"""

from .error import ErrorDetail, ErrorResponse
from .requests import SettingRequest
from .responses import HealthResponse, SettingResponse

__all__ = [
    "ErrorResponse",
    "ErrorDetail",
    "SettingRequest",
    "SettingResponse",
    "HealthResponse",
]
