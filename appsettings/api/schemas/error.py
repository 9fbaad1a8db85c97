"""Error envelope returned by every failed request."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    type: str
    message: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    # Traceback, only populated when DEBUG is on
    debug: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "error": {
                        "type": "SettingConflictException",
                        "message": "Setting with this key already exists",
                        "code": "SETTING_KEY_CONFLICT",
                        "details": {"key": "app.version"},
                    },
                    "request_id": "3f1c2a9e-8d0b-4a57-9a53-1f0e6b2d7c41",
                    "path": "/",
                    "method": "POST",
                }
            ]
        },
    )

    error: ErrorDetail
    request_id: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None
