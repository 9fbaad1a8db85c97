"""
API Layer Converters

Converters between API layer schemas and service layer schemas.
"""

from appsettings.api.schemas.requests import SettingRequest
from appsettings.api.schemas.responses import SettingResponse
from appsettings.services.setting_service import SettingData, SettingWriteData


def convert_setting_request(request: SettingRequest) -> SettingWriteData:
    """Convert an API setting request to service layer write data."""
    return SettingWriteData(
        key=request.key,
        value=request.value,
        description=request.description,
        category=request.category,
        is_encrypted=request.is_encrypted,
    )


def convert_setting_data_to_response(data: SettingData) -> SettingResponse:
    """Convert service layer setting data to API response."""
    return SettingResponse(
        id=data.id,
        key=data.key,
        value=data.value,
        description=data.description,
        category=data.category,
        is_encrypted=data.is_encrypted,
        created_at=data.created_at,
        updated_at=data.updated_at,
    )


__all__ = ["convert_setting_request", "convert_setting_data_to_response"]
