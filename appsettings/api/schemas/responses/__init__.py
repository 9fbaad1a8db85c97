"""
API Response Schemas

Response schemas for the settings and health endpoints.
"""

from .health_response import HealthResponse
from .setting_responses import SettingResponse

__all__ = ["HealthResponse", "SettingResponse"]
