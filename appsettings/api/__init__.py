"""
API Package

HTTP surface of the settings service.
"""

from .factory import create_api
from .router import router

__all__ = ["router", "create_api"]
