"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class RecordItem(BaseModel):
    """Single record as returned by GET /data."""

    id: int = Field(..., description="Identifier assigned by the store")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique email address")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether PostgreSQL is reachable")
    cache_enabled: bool = Field(..., description="Whether the snapshot cache is configured and not disabled")
    cache_healthy: bool = Field(..., description="Whether the cache backend answers pings")
