"""Pydantic schemas for item endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ItemResponse(BaseModel):
    """An item with its field values nested under ``data``."""

    id: str
    collection_id: str
    data: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
