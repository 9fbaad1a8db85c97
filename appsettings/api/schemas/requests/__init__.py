"""
API Request Schemas

Request schemas for the settings endpoints.
"""

from .setting_requests import SettingRequest

__all__ = ["SettingRequest"]
