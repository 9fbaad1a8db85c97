"""Setting response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SettingResponse(BaseModel):
    """Response payload for a stored setting."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Store-assigned identifier")
    key: str = Field(..., description="Unique setting key")
    value: str = Field(..., description="Setting value")
    description: Optional[str] = Field(None, description="Setting description")
    category: Optional[str] = Field(None, description="Setting category")
    is_encrypted: bool = Field(False, description="Whether the value is encrypted")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
