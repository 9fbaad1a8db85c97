"""
Stores Package

Data persistence for the settings service.

Only database plumbing is re-exported here; store classes import the models,
which themselves depend on ``stores.database``.
"""

from .database import (
    Base,
    create_database_engine,
    create_session_factory,
    database_session,
    dispose_engine,
    ping_database,
    resolve_database_url,
)

__all__ = [
    "Base",
    "create_database_engine",
    "create_session_factory",
    "database_session",
    "dispose_engine",
    "ping_database",
    "resolve_database_url",
]
