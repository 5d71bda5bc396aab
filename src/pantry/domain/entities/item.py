"""Item entity - one schema-less record belonging to a collection."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Item:
    """Item entity.

    Attributes:
        id: Identifier, unique within the item store.
        collection_id: ID of the owning collection.
        data: Field values keyed by field name.
        created_at: Timestamp when the item was created.
        updated_at: Timestamp when the item was last updated.
    """

    id: str
    collection_id: str
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Item ID is required")
        if not self.collection_id:
            raise ValueError("Item collection_id is required")

    def to_event_data(self) -> dict[str, Any]:
        """Flatten the item for webhook payloads: its fields plus ``id``."""
        return {"id": self.id, **{k: v for k, v in self.data.items() if k != "id"}}
