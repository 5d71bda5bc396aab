"""Repository for item operations."""

import json
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.entities import Item
from pantry.infrastructure.persistence.models import ItemModel

logger = get_logger(__name__)


def decode_data(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored item data is not valid JSON")
        return {}
    return data if isinstance(data, dict) else {}


def item_to_entity(model: ItemModel) -> Item:
    return Item(
        id=model.id,
        collection_id=model.collection_id,
        data=decode_data(model.data),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class ItemRepository:
    """Repository for item database operations.

    Every lookup is scoped by collection ID so an item can never be read or
    modified through a collection it doesn't belong to.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, item_id: str, collection_id: str, data: dict[str, Any]) -> ItemModel:
        item = ItemModel(id=item_id, collection_id=collection_id, data=json.dumps(data))
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def get(self, collection_id: str, item_id: str) -> ItemModel | None:
        result = await self.session.execute(
            select(ItemModel).where(
                ItemModel.id == item_id,
                ItemModel.collection_id == collection_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_collection(
        self,
        collection_id: str,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ItemModel]:
        query = (
            select(ItemModel)
            .where(ItemModel.collection_id == collection_id)
            .order_by(ItemModel.created_at, ItemModel.id)
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, item: ItemModel, data: dict[str, Any], merge: bool = False) -> ItemModel:
        """Replace (or, with ``merge``, patch) the data of an item.

        Args:
            item: The item model to update.
            data: New field values.
            merge: Keep fields not present in ``data`` when True.

        Returns:
            The updated item model.
        """
        new_data = {**decode_data(item.data), **data} if merge else dict(data)
        item.data = json.dumps(new_data)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def delete(self, collection_id: str, item_id: str) -> bool:
        result = await self.session.execute(
            delete(ItemModel).where(
                ItemModel.id == item_id,
                ItemModel.collection_id == collection_id,
            )
        )
        return result.rowcount > 0
