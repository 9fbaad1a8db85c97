"""
API Error Handling

Exception handlers producing the JSON error envelope.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from appsettings.core.exceptions import ApplicationException

from .exception_handlers import (
    application_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the handlers on ``app``.

    ApplicationException gets its own handler so not-found and conflict
    responses never pass through the server error middleware.
    """
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
