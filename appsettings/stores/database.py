"""
Database

Engine and session plumbing for the settings store. The application factory
(or a script) creates the engine and hands a session factory to the stores;
nothing here connects at import time.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import Engine, create_engine, make_url, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from appsettings.core.config import settings
from appsettings.core.error_codes import DatabaseErrorCode
from appsettings.core.exceptions import ApplicationException, DatabaseException
from appsettings.core.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def resolve_database_url(url: str, database_name: Optional[str] = None) -> URL:
    """Parse ``url``, replacing its database with ``database_name`` if given."""
    parsed = make_url(url)
    if database_name:
        parsed = parsed.set(database=database_name)
    return parsed


def create_database_engine(
    url: Optional[str] = None, database_name: Optional[str] = None
) -> Engine:
    """
    Build the engine for the settings database.

    Args:
        url: Connection string, defaults to ``settings.database__url``
        database_name: Overrides the URL's database, defaults to
            ``settings.database__name``

    Raises:
        DatabaseException: If the URL or driver is unusable
    """
    if database_name is None:
        database_name = settings.database__name
    try:
        database_url = resolve_database_url(
            url or settings.database__url, database_name
        )
        if database_url.get_backend_name() == "sqlite":
            # One shared connection, so in-memory databases survive across threads
            return create_engine(
                database_url,
                echo=settings.database__echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            database_url,
            echo=settings.database__echo,
            poolclass=QueuePool,
            pool_size=settings.database__pool_size,
            max_overflow=settings.database__max_overflow,
            pool_timeout=settings.database__pool_timeout,
            pool_recycle=settings.database__pool_recycle,
            pool_pre_ping=settings.database__pool_pre_ping,
        )
    except (SQLAlchemyError, ImportError, ValueError) as e:
        logger.error("Cannot create database engine: %s", e)
        raise DatabaseException(
            f"Database engine creation failed: {e}", DatabaseErrorCode.CONNECTION_FAILED
        ) from e


def create_session_factory(engine: Engine) -> sessionmaker:
    # Rows expire on commit; stores refresh what they return
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


@contextmanager
def database_session(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Open a session for one store operation.

    On error the session is rolled back. ApplicationException propagates as
    is; SQLAlchemy errors are re-raised as DatabaseException.
    """
    session = session_factory()
    try:
        yield session
    except ApplicationException:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error("Database operation failed: %s", e)
        session.rollback()
        raise DatabaseException(
            f"Database session error: {e}", DatabaseErrorCode.QUERY_FAILED
        ) from e
    finally:
        session.close()


def dispose_engine(engine: Engine) -> None:
    """Close every pooled connection; called on shutdown."""
    engine.dispose()
    logger.info("Database engine disposed")


def ping_database(engine: Engine) -> Dict[str, Any]:
    """
    Run ``SELECT 1`` and report the pool state.

    Raises:
        DatabaseException: ``DATABASE_CONNECTION_FAILED`` if the query fails
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database ping failed: %s", e)
        raise DatabaseException(
            f"Database connection test failed: {e}",
            DatabaseErrorCode.CONNECTION_FAILED,
            details={"error_type": type(e).__name__},
        ) from e

    return {
        "url": engine.url.render_as_string(hide_password=True),
        "pool": engine.pool.status(),
    }
