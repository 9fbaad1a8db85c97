"""
Logfire

Configures Logfire and instruments FastAPI and the settings engine. Every
step logs and reports failure instead of raising, so a monitoring outage
never keeps the API from starting.
"""

import logging
from typing import Any, Dict, Optional

import logfire
from fastapi import FastAPI, Request
from sqlalchemy import Engine

from appsettings.core.config import settings
from appsettings.core.logger import setup_logfire_handler

logger = logging.getLogger("appsettings.logfire")

_configured = False


def custom_request_attributes_mapper(
    request: Request, attributes: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    """
    Attributes Logfire records for a request.

    Validation errors are kept as is. A setting body flagged ``is_encrypted``
    is replaced by its key and a redacted value.
    """
    recorded: Dict[str, Any] = {
        "endpoint": request.url.path,
        "method": request.method,
        "request_id": request.headers.get("x-request-id"),
    }
    if attributes.get("errors"):
        recorded["errors"] = attributes["errors"]
        return recorded

    values = dict(attributes.get("values") or {})
    body = values.get("request")
    if getattr(body, "is_encrypted", False):
        values["request"] = {"key": body.key, "value": "[REDACTED]"}
    recorded["values"] = values
    return recorded


def setup_logfire() -> bool:
    """Configure Logfire once; True when it is configured."""
    global _configured

    if _configured or not settings.logfire__enabled:
        return _configured

    options: Dict[str, Any] = {
        "service_name": settings.logfire__service_name,
        "environment": settings.logfire__environment,
    }
    if settings.logfire__token:
        options["token"] = settings.logfire__token.get_secret_value()

    try:
        logfire.configure(**options)
    except Exception as e:
        logger.error("Logfire configuration failed: %s", e)
        return False

    setup_logfire_handler()
    _configured = True
    logger.info("Logfire configured for %s", settings.logfire__service_name)
    return True


def instrument_fastapi(app: FastAPI) -> bool:
    if not settings.logfire__instrument__fastapi:
        return False
    try:
        logfire.instrument_fastapi(
            app,
            request_attributes_mapper=custom_request_attributes_mapper,
            capture_headers=True,
        )
    except Exception as e:
        logger.error("FastAPI instrumentation failed: %s", e)
        return False
    return True


def instrument_sqlalchemy(engine: Engine) -> bool:
    if not settings.logfire__instrument__sqlalchemy:
        return False
    try:
        logfire.instrument_sqlalchemy(engine=engine)
    except Exception as e:
        logger.warning("SQLAlchemy instrumentation failed: %s", e)
        return False
    return True


def initialize_logfire(
    app: Optional[FastAPI] = None, engine: Optional[Engine] = None
) -> Dict[str, Any]:
    """
    Configure Logfire and instrument whatever is passed in.

    Returns:
        ``configured`` flag plus an ``instrumentation`` flag per target
    """
    results: Dict[str, Any] = {
        "configured": setup_logfire(),
        "instrumentation": {"fastapi": False, "sqlalchemy": False},
    }
    if results["configured"]:
        if app is not None:
            results["instrumentation"]["fastapi"] = instrument_fastapi(app)
        if engine is not None:
            results["instrumentation"]["sqlalchemy"] = instrument_sqlalchemy(engine)
    return results
