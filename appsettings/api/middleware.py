"""
FastAPI Middleware

Request ID propagation and one access-log line per request.
"""

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from appsettings.core.logger import clear_request_id, get_logger, set_request_id

logger = get_logger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an ID: the caller's ``X-Request-ID`` or a new UUID.

    The ID is available as ``request.state.request_id`` and to every log
    record emitted while the request is served, and is echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_id()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: 5xx at ERROR, 4xx at WARNING, the rest at INFO."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        request_id = getattr(request.state, "request_id", "-")
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s raised after %.3fs [%s]",
                request.method,
                request.url.path,
                time.perf_counter() - started,
                request_id,
            )
            raise

        status_code = response.status_code
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "%s %s -> %d in %.3fs [%s]",
            request.method,
            request.url.path,
            status_code,
            time.perf_counter() - started,
            request_id,
        )
        return response
