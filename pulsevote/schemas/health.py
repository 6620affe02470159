"""Health check response schema."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service health and database connectivity."""

    status: str = Field(..., description="Service status")
    environment: str = Field(..., description="APP_ENV value")
    database: str = Field(..., description="connected or disconnected")
