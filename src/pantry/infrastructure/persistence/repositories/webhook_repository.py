"""Repository for webhook subscriptions.

Events are persisted as a JSON array and decoded into a typed set here, at
the storage edge. A stored value that cannot be decoded yields an empty
event set, so the webhook simply receives nothing.
"""

import json
from typing import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.entities import Webhook, normalize_events
from pantry.infrastructure.persistence.models import WebhookModel

logger = get_logger(__name__)


def encode_events(events: Iterable[str]) -> str:
    return json.dumps(sorted(normalize_events(events)))


def decode_events(raw: str | None, webhook_id: str | None = None) -> frozenset[str]:
    if not raw:
        return frozenset()
    try:
        events = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored webhook events are not valid JSON", webhook_id=webhook_id)
        return frozenset()
    if not isinstance(events, list):
        logger.warning("Stored webhook events are not a list", webhook_id=webhook_id)
        return frozenset()
    return normalize_events(events)


def webhook_to_entity(model: WebhookModel) -> Webhook:
    return Webhook(
        id=model.id,
        collection_id=model.collection_id,
        url=model.url,
        events=decode_events(model.events, model.id),
        created_at=model.created_at,
    )


class WebhookRepository:
    """Repository for webhook database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        webhook_id: str,
        collection_id: str,
        url: str,
        events: Iterable[str],
    ) -> WebhookModel:
        webhook = WebhookModel(
            id=webhook_id,
            collection_id=collection_id,
            url=url,
            events=encode_events(events),
        )
        self.session.add(webhook)
        await self.session.flush()
        await self.session.refresh(webhook)
        return webhook

    async def get_by_id(self, webhook_id: str) -> WebhookModel | None:
        result = await self.session.execute(
            select(WebhookModel).where(WebhookModel.id == webhook_id)
        )
        return result.scalar_one_or_none()

    async def list_for_collection(self, collection_id: str) -> list[WebhookModel]:
        result = await self.session.execute(
            select(WebhookModel)
            .where(WebhookModel.collection_id == collection_id)
            .order_by(WebhookModel.created_at, WebhookModel.id)
        )
        return list(result.scalars().all())

    async def delete(self, webhook_id: str) -> bool:
        result = await self.session.execute(
            delete(WebhookModel).where(WebhookModel.id == webhook_id)
        )
        return result.rowcount > 0
