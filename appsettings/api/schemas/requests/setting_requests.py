"""Setting request schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SettingRequest(BaseModel):
    """Request payload for creating or replacing a setting."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "key": "app.version",
                "value": "1.0.0",
                "description": "Current version of the application",
                "category": "General",
                "isEncrypted": False,
            }
        },
    )

    # A key is one path segment; "/" would make it unreachable
    key: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=r"^[^/]+$",
        description="Unique setting key",
    )
    value: str = Field(..., description="Setting value")
    description: Optional[str] = Field(None, description="Setting description")
    category: Optional[str] = Field(
        None, max_length=100, description="Setting category"
    )
    is_encrypted: bool = Field(
        False, description="Marks the value as encrypted (informational only)"
    )
