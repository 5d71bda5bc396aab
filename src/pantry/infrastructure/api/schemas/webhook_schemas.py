"""Pydantic schemas for webhook subscription endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

EventName = Literal["create", "update", "delete"]


class CreateWebhookRequest(BaseModel):
    url: HttpUrl = Field(..., description="Absolute http(s) URL that receives POSTs")
    events: list[EventName] = Field(..., min_length=1, description="Subscribed item events")


class WebhookSubscriptionResponse(BaseModel):
    id: str
    collection_id: str
    url: str
    events: list[EventName]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
