"""
Application Settings Service

``python main.py`` serves the settings API with uvicorn.
"""

import argparse
import os

import uvicorn
from fastapi import FastAPI

from appsettings.core.config import settings


def create_app() -> FastAPI:
    """
    Application factory for ``uvicorn --factory``.

    The engine is created here, inside the serving process, rather than at
    import time.
    """
    from appsettings.api.factory import create_api
    from appsettings.core.logger import setup_logging

    setup_logging()
    return create_api(
        title=settings.api__title,
        description=settings.api__description,
        version=settings.api__version,
        docs_url=settings.api__docs_url,
        redoc_url=settings.api__redoc_url,
        mount_prefix=settings.api__mount_prefix,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the application settings API")
    parser.add_argument(
        "--host", default=os.getenv("HOST", "0.0.0.0"), help="Bind address"
    )
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("PORT", "8080")), help="Bind port"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Restart on code changes"
    )
    args = parser.parse_args()

    print(f"🚀 Settings API on http://{args.host}:{args.port} ({settings.environment})")
    if settings.api__docs_url:
        print(f"📚 Docs at {settings.api__docs_url}")

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload or settings.debug,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
