"""Repository-backed collaborators for the webhook dispatcher."""

from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.entities import Collection, Webhook
from pantry.infrastructure.persistence.repositories import (
    CollectionRepository,
    WebhookRepository,
    collection_to_entity,
    webhook_to_entity,
)


class RepositoryDispatchSource:
    """Serves webhooks and collections to the dispatcher from the database.

    Implements both the ``WebhookRegistry`` and ``CollectionStore`` ports
    over one session, converting rows to domain entities.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._collections = CollectionRepository(session)
        self._webhooks = WebhookRepository(session)

    async def get_webhooks(self, collection_id: str) -> list[Webhook]:
        models = await self._webhooks.list_for_collection(collection_id)
        return [webhook_to_entity(model) for model in models]

    async def get_collection_by_id(self, collection_id: str) -> Collection | None:
        model = await self._collections.get_by_id(collection_id)
        return collection_to_entity(model) if model is not None else None
