"""Repository for collection operations.

Provides CRUD operations for the collections table. Deleting a collection
also deletes its items and webhooks.
"""

import json

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.entities import Collection
from pantry.infrastructure.persistence.models import (
    CollectionModel,
    ItemModel,
    WebhookModel,
)

logger = get_logger(__name__)


def decode_schema(raw: str | None) -> dict[str, str]:
    """Decode a stored schema, treating damaged values as empty."""
    if not raw:
        return {}
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored collection schema is not valid JSON")
        return {}
    return schema if isinstance(schema, dict) else {}


def collection_to_entity(model: CollectionModel) -> Collection:
    return Collection(
        id=model.id,
        name=model.name,
        schema=decode_schema(model.schema),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection_id: str, name: str, schema: dict[str, str]) -> CollectionModel:
        """Create a new collection.

        Args:
            collection_id: ID of the new collection.
            name: Collection name.
            schema: Field name to field type mapping.

        Returns:
            The created collection model.
        """
        collection = CollectionModel(id=collection_id, name=name, schema=json.dumps(schema))
        self.session.add(collection)
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[CollectionModel]:
        result = await self.session.execute(
            select(CollectionModel).order_by(CollectionModel.created_at, CollectionModel.id)
        )
        return list(result.scalars().all())

    async def update(
        self,
        collection: CollectionModel,
        name: str | None = None,
        schema: dict[str, str] | None = None,
    ) -> CollectionModel:
        """Update name and/or schema of a collection. The ID never changes."""
        if name is not None:
            collection.name = name
        if schema is not None:
            collection.schema = json.dumps(schema)
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def delete(self, collection_id: str) -> bool:
        """Delete a collection together with its items and webhooks.

        Returns:
            True if the collection existed.
        """
        await self.session.execute(
            delete(WebhookModel).where(WebhookModel.collection_id == collection_id)
        )
        await self.session.execute(
            delete(ItemModel).where(ItemModel.collection_id == collection_id)
        )
        result = await self.session.execute(
            delete(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.rowcount > 0
