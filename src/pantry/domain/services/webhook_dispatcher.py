"""Webhook dispatcher - fan-out of item mutation events to subscribers.

Given a collection ID, an event kind and event data, the dispatcher looks
up the collection's webhooks subscribed to that event and POSTs one JSON
payload to each of them concurrently. Delivery is best-effort and
at-most-once: failures are logged and counted, never retried and never
raised to the caller.

The dispatcher owns no state. Its collaborators are injected:

- a ``WebhookRegistry`` that lists a collection's webhooks,
- a ``CollectionStore`` that resolves a collection by ID,
- a ``WebhookTransport`` that performs a single HTTP POST.

Only failures to read the registry or the store propagate out of
``notify``; mutation handlers catch and log those as well.

Example:
    dispatcher = WebhookDispatcher(
        registry=source,
        collections=source,
        transport=HttpxWebhookTransport(),
    )
    summary = await dispatcher.on_item_created("1700000000000", item)
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from pantry import __version__
from pantry.core.logging import get_logger
from pantry.domain.entities.collection import Collection
from pantry.domain.entities.item import Item
from pantry.domain.entities.webhook import (
    ALL_WEBHOOK_EVENTS,
    DispatchPayload,
    Webhook,
    WebhookEvent,
    iso_timestamp,
)

logger = get_logger(__name__)

DEFAULT_USER_AGENT = f"Pantry-Webhook-Service/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 5.0


class WebhookRegistry(Protocol):
    """Read access to webhook subscriptions."""

    async def get_webhooks(self, collection_id: str) -> list[Webhook]: ...


class CollectionStore(Protocol):
    """Read access to collections."""

    async def get_collection_by_id(self, collection_id: str) -> Collection | None: ...


class WebhookTransportError(Exception):
    """Raised by a transport when no HTTP response could be obtained."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


@dataclass(frozen=True)
class WebhookResponse:
    """HTTP response received from a webhook target."""

    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class WebhookTransport(ABC):
    """Abstract outbound HTTP transport for webhook calls."""

    @abstractmethod
    async def post(
        self,
        url: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> WebhookResponse:
        """POST ``body`` as JSON to ``url`` exactly once.

        Resolves with any HTTP response, including non-2xx ones.

        Raises:
            WebhookTransportError: On DNS, connection or timeout errors.
        """
        ...


@dataclass(frozen=True)
class DeliveryFailure:
    """A single failed delivery within a fan-out."""

    url: str
    reason: str


@dataclass
class DispatchSummary:
    """Outcome counts of one ``notify`` call."""

    event: str
    collection_id: str
    attempted: int = 0
    fulfilled: int = 0
    rejected: int = 0
    failures: list[DeliveryFailure] = field(default_factory=list)


class WebhookDispatcher:
    """Translates item mutation events into outbound webhook calls."""

    def __init__(
        self,
        registry: WebhookRegistry,
        collections: CollectionStore,
        transport: WebhookTransport,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Source of webhook subscriptions.
            collections: Source of collections, used for the payload.
            transport: Performs the outbound POSTs.
            user_agent: Value of the ``User-Agent`` header.
            timeout_seconds: Upper bound for each individual call. ``None``
                leaves timing entirely to the transport.
        """
        self._registry = registry
        self._collections = collections
        self._transport = transport
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds

    async def notify(
        self,
        collection_id: str,
        event: str,
        data: Mapping[str, Any],
    ) -> DispatchSummary:
        """Deliver one event to every matching webhook of a collection.

        Args:
            collection_id: ID of the collection the event belongs to.
            event: One of ``create``, ``update``, ``delete``.
            data: Event data; the full item for create/update, ``{"id": ...}``
                for delete.

        Returns:
            DispatchSummary with attempted/fulfilled/rejected counts.

        Raises:
            ValueError: If ``event`` is not a known event kind.
            Exception: Whatever the registry or store raise on read failure.
        """
        if event not in ALL_WEBHOOK_EVENTS:
            raise ValueError(f"Unknown webhook event '{event}'")

        summary = DispatchSummary(event=event, collection_id=collection_id)

        webhooks = [
            webhook
            for webhook in await self._registry.get_webhooks(collection_id)
            if webhook.subscribes_to(event)
        ]
        if not webhooks:
            return summary

        collection = await self._collections.get_collection_by_id(collection_id)
        if collection is None:
            logger.error(
                "Collection not found for webhook notification",
                collection_id=collection_id,
                webhook_event=event,
                webhook_count=len(webhooks),
            )
            return summary

        payload = DispatchPayload(
            event=event,
            collection_id=collection.id,
            collection_name=collection.name,
            data=dict(data),
            timestamp=iso_timestamp(),
        ).to_dict()
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
            "X-Webhook-Event": event,
        }

        logger.info(
            "Notifying webhooks",
            collection_id=collection.id,
            collection=collection.name,
            webhook_event=event,
            webhook_count=len(webhooks),
        )

        outcomes = await asyncio.gather(
            *(self._deliver(webhook, payload, headers) for webhook in webhooks),
            return_exceptions=True,
        )

        summary.attempted = len(webhooks)
        for webhook, outcome in zip(webhooks, outcomes):
            if isinstance(outcome, BaseException):
                # _deliver converts expected errors; anything here is unexpected
                outcome = DeliveryFailure(url=webhook.url, reason=repr(outcome))
                logger.error(
                    "Webhook delivery crashed",
                    webhook_id=webhook.id,
                    url=webhook.url,
                    reason=outcome.reason,
                )
            if outcome is None:
                summary.fulfilled += 1
            else:
                summary.rejected += 1
                summary.failures.append(outcome)

        logger.info(
            "Webhook dispatch settled",
            collection_id=collection.id,
            webhook_event=event,
            fulfilled=summary.fulfilled,
            rejected=summary.rejected,
        )
        return summary

    async def _deliver(
        self,
        webhook: Webhook,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> DeliveryFailure | None:
        """POST the payload to one webhook. Returns the failure, if any."""
        try:
            call = self._transport.post(webhook.url, payload, headers)
            if self._timeout_seconds is None:
                response = await call
            else:
                response = await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError:
            reason = f"timed out after {self._timeout_seconds}s"
        except WebhookTransportError as e:
            reason = e.reason
        else:
            if response.ok:
                logger.debug(
                    "Webhook delivered",
                    webhook_id=webhook.id,
                    url=webhook.url,
                    status_code=response.status_code,
                )
                return None
            reason = f"HTTP {response.status_code}"
            if response.body:
                reason = f"{reason}: {response.body[:200]}"

        logger.warning(
            "Webhook delivery failed",
            webhook_id=webhook.id,
            url=webhook.url,
            reason=reason,
        )
        return DeliveryFailure(url=webhook.url, reason=reason)

    async def on_item_created(
        self, collection_id: str, item: Item | Mapping[str, Any]
    ) -> DispatchSummary:
        return await self.notify(collection_id, WebhookEvent.CREATE, _event_data(item))

    async def on_item_updated(
        self, collection_id: str, item: Item | Mapping[str, Any]
    ) -> DispatchSummary:
        return await self.notify(collection_id, WebhookEvent.UPDATE, _event_data(item))

    async def on_item_deleted(self, collection_id: str, item_id: str) -> DispatchSummary:
        """Notify delete subscribers. Only the ID of the former item is sent."""
        return await self.notify(collection_id, WebhookEvent.DELETE, {"id": item_id})

    async def on_collection_created(self, collection: Collection) -> None:
        # A new collection has no webhooks yet
        logger.info("Collection created", collection_id=collection.id, collection=collection.name)

    async def on_collection_deleted(self, collection_id: str) -> None:
        # Its webhooks were removed together with it
        logger.info("Collection deleted", collection_id=collection_id)


def _event_data(item: Item | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(item, Item):
        return item.to_event_data()
    return dict(item)
