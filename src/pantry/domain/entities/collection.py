"""Collection entity.

A collection is a named group of items sharing a declared field schema.
The schema maps field names to field type tags; it documents which fields
items may populate but items are free to carry extra keys.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class FieldType(str, Enum):
    """Supported field type tags for collection schemas."""

    TEXT = "text"
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    MEDIA = "media"


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Opaque, time-derived identifier. Immutable once created.
        name: Human readable collection name.
        schema: Mapping of field name to field type tag.
        created_at: Timestamp when the collection was created.
        updated_at: Timestamp when the collection was last updated.
    """

    id: str
    name: str
    schema: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.name:
            raise ValueError("Collection name is required")
        if not isinstance(self.schema, dict):
            raise ValueError("Schema must be a dictionary")
