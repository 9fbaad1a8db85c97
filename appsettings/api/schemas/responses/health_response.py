"""Health check response schema."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["healthy", "unhealthy"])
    timestamp: str = Field(..., description="UTC time of the check, ISO-8601")
    version: str
    environment: str
    components: Dict[str, Any] = Field(
        ..., description="Per-component status: api, and database when checked"
    )
