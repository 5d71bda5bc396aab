"""Domain entities for Pantry.

Entities are plain dataclasses with no dependency on the persistence or
web layers.
"""

from pantry.domain.entities.collection import Collection, FieldType
from pantry.domain.entities.item import Item
from pantry.domain.entities.media import Media
from pantry.domain.entities.webhook import (
    ALL_WEBHOOK_EVENTS,
    DispatchPayload,
    Webhook,
    WebhookEvent,
    iso_timestamp,
    normalize_events,
)

__all__ = [
    "ALL_WEBHOOK_EVENTS",
    "Collection",
    "DispatchPayload",
    "FieldType",
    "Item",
    "Media",
    "Webhook",
    "WebhookEvent",
    "iso_timestamp",
    "normalize_events",
]
