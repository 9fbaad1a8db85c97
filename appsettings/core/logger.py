"""
Logging

``logging.config.dictConfig`` setup for the ``appsettings`` logger tree:
console and rotating file output, plus an optional Logfire handler that tags
records with the request ID of the HTTP request being served.
"""

import logging
import logging.config
import sys
from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import logfire

from appsettings.core.config import settings

ROOT_LOGGER_NAME = "appsettings"

_SECRET_MARKERS = ("password", "secret", "token", "api_key", "apikey")

# Attributes every LogRecord has; anything else was passed through ``extra=``
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def clear_request_id() -> None:
    _request_id.set(None)


def _extra_attributes(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect ``extra=`` fields of a record, masking anything secret-looking."""
    attributes: Dict[str, Any] = {}
    for name, value in vars(record).items():
        if name in _STANDARD_RECORD_FIELDS:
            continue
        if any(marker in name.lower() for marker in _SECRET_MARKERS):
            attributes[name] = "<redacted>"
        elif value is None or isinstance(value, (str, int, float, bool)):
            attributes[name] = value
        else:
            attributes[name] = repr(value)
    return attributes


class RequestAwareLogfireHandler(logging.Handler):
    """Forwards records to Logfire tagged ``rid:<request id>``."""

    def __init__(
        self,
        level: int | str = logging.NOTSET,
        fallback: Optional[logging.Handler] = None,
    ) -> None:
        super().__init__(level=level)
        self.fallback = fallback or logging.StreamHandler(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        request_id = get_request_id()
        target = logfire.with_tags(f"rid:{request_id}") if request_id else logfire

        attributes = _extra_attributes(record)
        attributes.update(
            {
                "code.filepath": record.pathname,
                "code.lineno": record.lineno,
                "code.function": record.funcName,
            }
        )
        try:
            target.log(
                level=record.levelname.lower(),
                msg_template=record.getMessage(),
                attributes=attributes,
                exc_info=record.exc_info,
            )
        except (TypeError, ValueError):
            self.fallback.emit(record)


def get_logging_config() -> Dict[str, Any]:
    """Console + rotating file configuration for ``dictConfig``."""
    level = settings.log_level.upper()

    if settings.log__file_path:
        log_file = Path(settings.log__file_path)
    else:
        log_file = Path(settings.log__dir) / "appsettings.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "file": {
                "format": (
                    "%(asctime)s %(levelname)-7s %(name)s "
                    "[%(module)s:%(lineno)d] %(message)s"
                ),
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "console",
                "level": level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_file),
                "maxBytes": settings.log__file_max_bytes,
                "backupCount": settings.log__file_backup_count,
                "encoding": "utf-8",
                "formatter": "file",
                "level": settings.log__file_level,
            },
        },
        "loggers": {
            ROOT_LOGGER_NAME: {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def setup_logfire_handler() -> None:
    """
    Attach the Logfire handler to the ``appsettings`` logger.

    Must run after ``logfire.configure()`` and after ``dictConfig``, which
    would otherwise drop the handler. Calling it twice adds one handler.
    """
    if not settings.logfire__enabled:
        return

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if any(isinstance(h, RequestAwareLogfireHandler) for h in app_logger.handlers):
        return

    app_logger.addHandler(RequestAwareLogfireHandler(level=settings.log_level.upper()))
    app_logger.info("Logfire log forwarding enabled")


@lru_cache(maxsize=1)
def setup_logging() -> None:
    """Apply the logging configuration once per process."""
    logging.config.dictConfig(get_logging_config())
    logging.getLogger(f"{ROOT_LOGGER_NAME}.startup").info(
        "Logging ready (environment=%s, level=%s, logfire=%s)",
        settings.environment,
        settings.log_level,
        settings.logfire__enabled,
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``appsettings`` namespace."""
    setup_logging()
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
