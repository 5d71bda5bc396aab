"""SQLAlchemy models for Pantry tables.

All models inherit from the Base class defined in database.py and are
created on application startup.
"""

from pantry.infrastructure.persistence.models.collection import CollectionModel
from pantry.infrastructure.persistence.models.item import ItemModel
from pantry.infrastructure.persistence.models.media import MediaModel
from pantry.infrastructure.persistence.models.operator import OperatorModel
from pantry.infrastructure.persistence.models.webhook import WebhookModel

__all__ = [
    "CollectionModel",
    "ItemModel",
    "MediaModel",
    "OperatorModel",
    "WebhookModel",
]
