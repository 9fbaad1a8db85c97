"""
Exception Handlers

Render every failure as an ErrorResponse envelope. 4xx are logged as
warnings, 5xx as errors with traceback.
"""

import traceback
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from appsettings.api.schemas.error import ErrorDetail, ErrorResponse
from appsettings.core.config import settings
from appsettings.core.error_codes import APIErrorCode
from appsettings.core.exceptions import ApplicationException
from appsettings.core.logger import get_logger

logger = get_logger(__name__)


def _error_response(
    request: Request, status_code: int, error: ErrorDetail, exc: Exception
) -> JSONResponse:
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    else:
        logger.warning(
            "%s %s -> %d: %s", request.method, request.url.path, status_code, exc
        )

    request_id = getattr(request.state, "request_id", None)
    body = ErrorResponse(
        error=error, request_id=request_id, path=request.url.path, method=request.method
    )
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(body.model_dump(), status_code=status_code, headers=headers)


async def application_exception_handler(
    request: Request, exc: ApplicationException
) -> JSONResponse:
    data = exc.to_dict()
    error = ErrorDetail(
        type=type(exc).__name__,
        message=data["message"],
        code=data["code"],
        details=data["details"],
    )
    return _error_response(request, exc.http_status, error, exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown paths and disallowed methods raised by the router."""
    error = ErrorDetail(
        type="HTTPException", message=str(exc.detail), code=f"HTTP_{exc.status_code}"
    )
    return _error_response(request, exc.status_code, error, exc)


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    # ``ctx`` may hold exception instances, which JSON cannot encode
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ErrorDetail(
        type="ValidationError",
        message="Request validation failed",
        code=APIErrorCode.INVALID_INPUT.value,
        details={"validation_errors": _validation_errors(exc)},
    )
    return _error_response(request, 422, error, exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error = ErrorDetail(
        type="InternalServerError",
        message="An unexpected error occurred",
        code=APIErrorCode.INTERNAL_ERROR.value,
    )
    if settings.debug:
        error.debug = {
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "traceback": "".join(traceback.format_exception(exc)),
        }
    return _error_response(request, 500, error, exc)
