"""Persistence repositories for database operations."""

from pantry.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
    collection_to_entity,
)
from pantry.infrastructure.persistence.repositories.item_repository import (
    ItemRepository,
    item_to_entity,
)
from pantry.infrastructure.persistence.repositories.media_repository import (
    MediaRepository,
    media_to_entity,
)
from pantry.infrastructure.persistence.repositories.operator_repository import (
    OperatorRepository,
)
from pantry.infrastructure.persistence.repositories.webhook_repository import (
    WebhookRepository,
    webhook_to_entity,
)

__all__ = [
    "CollectionRepository",
    "ItemRepository",
    "MediaRepository",
    "OperatorRepository",
    "WebhookRepository",
    "collection_to_entity",
    "item_to_entity",
    "media_to_entity",
    "webhook_to_entity",
]
