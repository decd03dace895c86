"""Health check response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Backend version")
    storage: str = Field(..., description="Active storage provider (local, aws)")
    cached_members: int = Field(0, ge=0, description="Entries in the member lookup cache")
