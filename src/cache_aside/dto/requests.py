"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class RecordPayload(BaseModel):
    """Request DTO for creating or updating a record.

    Both fields are optional at the schema level so that a missing field
    is reported by the service as a 400, not by pydantic as a 422.
    """

    name: str | None = Field(None, description="Display name (required, non-empty)")
    email: str | None = Field(None, description="Unique email address (required, non-empty)")
