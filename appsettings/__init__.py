"""
Application Settings Package

Key-value settings store served over HTTP with FastAPI and SQLAlchemy.
"""

__version__ = "1.0.0"

__all__ = [
    "api",
    "core",
    "models",
    "services",
    "stores",
]
