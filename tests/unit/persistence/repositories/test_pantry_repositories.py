"""Unit tests for the Pantry repositories against an in-memory database."""

import pytest
from sqlalchemy import update

from pantry.infrastructure.persistence.models import MediaModel, OperatorModel, WebhookModel
from pantry.infrastructure.persistence.repositories import (
    CollectionRepository,
    ItemRepository,
    MediaRepository,
    OperatorRepository,
    WebhookRepository,
    collection_to_entity,
    item_to_entity,
    webhook_to_entity,
)
from pantry.infrastructure.webhooks import RepositoryDispatchSource


@pytest.fixture
def collections(db_session) -> CollectionRepository:
    return CollectionRepository(db_session)


@pytest.fixture
def items(db_session) -> ItemRepository:
    return ItemRepository(db_session)


@pytest.fixture
def webhooks(db_session) -> WebhookRepository:
    return WebhookRepository(db_session)


class TestCollectionRepository:
    @pytest.mark.asyncio
    async def test_create_and_get(self, collections) -> None:
        await collections.create("c1", "Articles", {"title": "string"})

        model = await collections.get_by_id("c1")

        entity = collection_to_entity(model)
        assert entity.name == "Articles"
        assert entity.schema == {"title": "string"}
        assert entity.created_at is not None

    @pytest.mark.asyncio
    async def test_names_need_not_be_unique(self, collections) -> None:
        await collections.create("c1", "Articles", {})
        await collections.create("c2", "Articles", {})

        assert [c.id for c in await collections.list_all()] == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, collections) -> None:
        model = await collections.create("c1", "Articles", {})

        model = await collections.update(model, name="Posts", schema={"body": "text"})

        assert model.id == "c1"
        assert collection_to_entity(model).schema == {"body": "text"}
        assert model.name == "Posts"

    @pytest.mark.asyncio
    async def test_delete_cascades_to_items_and_webhooks(self, collections, items, webhooks) -> None:
        await collections.create("c1", "Articles", {})
        await collections.create("c2", "Pages", {})
        await items.create("i1", "c1", {"title": "a"})
        await items.create("i2", "c2", {"title": "b"})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["create"])
        await webhooks.create("w2", "c2", "https://b.example.com/hook", ["create"])

        assert await collections.delete("c1") is True

        assert await collections.get_by_id("c1") is None
        assert len(await items.list_for_collection("c1")) == 0
        assert await webhooks.list_for_collection("c1") == []
        assert len(await items.list_for_collection("c2")) == 1
        assert len(await webhooks.list_for_collection("c2")) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, collections) -> None:
        assert await collections.delete("missing") is False


class TestItemRepository:
    @pytest.mark.asyncio
    async def test_lookup_is_scoped_to_collection(self, collections, items) -> None:
        await collections.create("c1", "Articles", {})
        await collections.create("c2", "Pages", {})
        await items.create("i1", "c1", {"title": "a"})

        assert await items.get("c1", "i1") is not None
        assert await items.get("c2", "i1") is None
        assert await items.delete("c2", "i1") is False

    @pytest.mark.asyncio
    async def test_replace_and_merge(self, collections, items) -> None:
        await collections.create("c1", "Articles", {})
        model = await items.create("i1", "c1", {"title": "a", "body": "b"})

        model = await items.update(model, {"title": "A"}, merge=True)
        assert item_to_entity(model).data == {"title": "A", "body": "b"}

        model = await items.update(model, {"title": "Only"})
        assert item_to_entity(model).data == {"title": "Only"}

    @pytest.mark.asyncio
    async def test_list_with_pagination(self, collections, items) -> None:
        await collections.create("c1", "Articles", {})
        for i in range(5):
            await items.create(f"i{i}", "c1", {"n": i})

        page = await items.list_for_collection("c1", skip=1, limit=2)

        assert [m.id for m in page] == ["i1", "i2"]
        assert len(await items.list_for_collection("c1")) == 5


class TestWebhookRepository:
    @pytest.mark.asyncio
    async def test_events_round_trip_as_a_set(self, collections, webhooks) -> None:
        await collections.create("c1", "Articles", {})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["update", "create", "create"])

        model = await webhooks.get_by_id("w1")

        assert model.events == '["create", "update"]'
        assert webhook_to_entity(model).events == frozenset({"create", "update"})

    @pytest.mark.asyncio
    async def test_damaged_events_decode_to_empty_set(self, db_session, collections, webhooks) -> None:
        """Test that an undecodable stored value subscribes the webhook to nothing."""
        await collections.create("c1", "Articles", {})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["create"])
        await webhooks.create("w2", "c1", "https://b.example.com/hook", ["create"])
        await db_session.execute(
            update(WebhookModel).where(WebhookModel.id == "w1").values(events="not json")
        )
        await db_session.execute(
            update(WebhookModel).where(WebhookModel.id == "w2").values(events='{"create": true}')
        )
        db_session.expire_all()

        entities = [webhook_to_entity(m) for m in await webhooks.list_for_collection("c1")]

        assert [w.events for w in entities] == [frozenset(), frozenset()]

    @pytest.mark.asyncio
    async def test_unknown_stored_tags_are_dropped(self, db_session, collections, webhooks) -> None:
        await collections.create("c1", "Articles", {})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["create"])
        await db_session.execute(
            update(WebhookModel).where(WebhookModel.id == "w1").values(events='["create", "publish"]')
        )
        db_session.expire_all()

        model = await webhooks.get_by_id("w1")

        assert webhook_to_entity(model).events == frozenset({"create"})

    @pytest.mark.asyncio
    async def test_delete(self, collections, webhooks) -> None:
        await collections.create("c1", "Articles", {})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["delete"])

        assert await webhooks.delete("w1") is True
        assert await webhooks.delete("w1") is False


class TestRepositoryDispatchSource:
    @pytest.mark.asyncio
    async def test_serves_entities(self, db_session, collections, webhooks) -> None:
        await collections.create("c1", "Articles", {"title": "string"})
        await webhooks.create("w1", "c1", "https://a.example.com/hook", ["create"])
        source = RepositoryDispatchSource(db_session)

        collection = await source.get_collection_by_id("c1")
        subscriptions = await source.get_webhooks("c1")

        assert collection.name == "Articles"
        assert [w.url for w in subscriptions] == ["https://a.example.com/hook"]
        assert subscriptions[0].subscribes_to("create")
        assert await source.get_collection_by_id("missing") is None


class TestMediaRepository:
    @pytest.mark.asyncio
    async def test_create_list_delete(self, db_session) -> None:
        repo = MediaRepository(db_session)
        for media_id in ("m1", "m2"):
            await repo.create(
                MediaModel(
                    id=media_id,
                    filename=f"{media_id}.png",
                    original_name="photo.png",
                    mime_type="image/png",
                    size=3,
                    path=f"/uploads/{media_id}.png",
                )
            )

        assert [m.id for m in await repo.list_all()] == ["m2", "m1"]
        assert await repo.delete("m1") is True
        assert await repo.get_by_id("m1") is None


class TestOperatorRepository:
    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, db_session) -> None:
        repo = OperatorRepository(db_session)
        await repo.create(OperatorModel(id="o1", email="admin@pantry.test", password_hash="x"))

        operator = await repo.get_by_email("Admin@Pantry.TEST")

        assert operator is not None
        assert operator.id == "o1"

    @pytest.mark.asyncio
    async def test_update_last_login(self, db_session) -> None:
        repo = OperatorRepository(db_session)
        operator = await repo.create(OperatorModel(id="o1", email="admin@pantry.test", password_hash="x"))

        await repo.update_last_login(operator)

        assert operator.last_login is not None
