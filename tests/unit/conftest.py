"""Pytest configuration for unit tests."""

import pytest

from pantry.domain.entities import Collection, Webhook


class InMemoryDispatchSource:
    """Webhook registry and collection store backed by plain lists."""

    def __init__(
        self,
        collections: list[Collection] | None = None,
        webhooks: list[Webhook] | None = None,
    ) -> None:
        self.collections = {c.id: c for c in collections or []}
        self.webhooks = list(webhooks or [])
        self.collection_reads = 0

    async def get_webhooks(self, collection_id: str) -> list[Webhook]:
        return [w for w in self.webhooks if w.collection_id == collection_id]

    async def get_collection_by_id(self, collection_id: str) -> Collection | None:
        self.collection_reads += 1
        return self.collections.get(collection_id)


@pytest.fixture
def articles() -> Collection:
    return Collection(id="1700000000000", name="Articles", schema={"title": "string"})


@pytest.fixture
def dispatch_source(articles: Collection) -> InMemoryDispatchSource:
    return InMemoryDispatchSource(collections=[articles])
