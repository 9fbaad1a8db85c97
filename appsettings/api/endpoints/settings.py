"""
Settings API

REST endpoints for application settings. Paths are relative to the
service root; a gateway may add its own prefix.
"""

from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response, status

from appsettings.api.converters import (
    convert_setting_data_to_response,
    convert_setting_request,
)
from appsettings.api.deps import get_setting_service
from appsettings.api.schemas.error import ErrorResponse
from appsettings.api.schemas.requests import SettingRequest
from appsettings.api.schemas.responses import SettingResponse
from appsettings.core.logger import get_logger
from appsettings.services.setting_service import SettingService

logger = get_logger(__name__)

router = APIRouter(tags=["settings"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Setting not found"}}


@router.get("/", response_model=List[SettingResponse], name="list_settings")
def list_settings(
    service: SettingService = Depends(get_setting_service),
) -> List[SettingResponse]:
    """Return all settings."""
    result = service.list_settings()
    logger.debug("API: Retrieved %d settings", len(result))
    return [convert_setting_data_to_response(item) for item in result]


@router.get(
    "/category/{category}",
    response_model=List[SettingResponse],
    name="list_settings_by_category",
)
def list_settings_by_category(
    category: str,
    service: SettingService = Depends(get_setting_service),
) -> List[SettingResponse]:
    """Return all settings in a category (exact, case-sensitive match)."""
    result = service.get_by_category(category)
    return [convert_setting_data_to_response(item) for item in result]


@router.get(
    "/{key}",
    response_model=SettingResponse,
    name="get_setting",
    responses=NOT_FOUND_RESPONSE,
)
def get_setting(
    key: str,
    service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    """
    Get a setting by key.

    Raises:
        SettingNotFoundException: Rendered as 404
    """
    return convert_setting_data_to_response(service.get_by_key(key))


@router.post(
    "/",
    response_model=SettingResponse,
    status_code=status.HTTP_201_CREATED,
    name="create_setting",
    responses={
        409: {"model": ErrorResponse, "description": "Setting key already exists"}
    },
)
def create_setting(
    request: SettingRequest,
    http_request: Request,
    response: Response,
    service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    """
    Create a new setting.

    Args:
        request: Setting to create

    Returns:
        SettingResponse: Stored setting, with a Location header pointing at it

    Raises:
        SettingConflictException: Rendered as 409 when the key is taken
    """
    logger.info("API: Creating setting '%s'", request.key)
    result = service.create(convert_setting_request(request))
    # Header values must be ASCII; the key is encoded as one path segment
    response.headers["Location"] = str(
        http_request.app.url_path_for("get_setting", key=quote(result.key, safe=""))
    )
    return convert_setting_data_to_response(result)


@router.put(
    "/{key}",
    response_model=SettingResponse,
    name="update_setting",
    responses=NOT_FOUND_RESPONSE,
)
def update_setting(
    key: str,
    request: SettingRequest,
    service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    """
    Replace a setting. The key in the body is overridden by the path key.

    Raises:
        SettingNotFoundException: Rendered as 404
    """
    logger.info("API: Updating setting '%s'", key)
    result = service.update(key, convert_setting_request(request))
    return convert_setting_data_to_response(result)


@router.delete(
    "/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    name="delete_setting",
    responses=NOT_FOUND_RESPONSE,
)
def delete_setting(
    key: str,
    service: SettingService = Depends(get_setting_service),
) -> Response:
    """Delete a setting by key."""
    logger.info("API: Deleting setting '%s'", key)
    service.delete(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
