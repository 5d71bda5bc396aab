"""Pydantic schemas for media endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MediaResponse(BaseModel):
    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int = Field(..., description="File size in bytes")
    path: str = Field(..., description="Public URL path, usable as a media field value")
    description: str
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)
