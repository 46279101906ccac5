"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    cache_version: str | None = Field(
        default=None, description="Version tag this process reads and writes"
    )
    store_available: bool = Field(
        default=False, description="True when the backing store is connected"
    )
