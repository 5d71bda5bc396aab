"""Webhook subscription entity and dispatch payload.

A webhook subscribes a target URL to a collection's item mutation events.
The payload sent to subscribers is built fresh for each notification and
is never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable


class WebhookEvent:
    """Item mutation event kinds a webhook can subscribe to."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ALL_WEBHOOK_EVENTS: frozenset[str] = frozenset(
    {WebhookEvent.CREATE, WebhookEvent.UPDATE, WebhookEvent.DELETE}
)


def normalize_events(events: Iterable[str]) -> frozenset[str]:
    """Reduce an iterable of event tags to the known event kinds.

    Unknown tags are dropped rather than rejected; callers that must reject
    them (the API layer) validate before reaching this point.
    """
    return frozenset(str(e).strip().lower() for e in events) & ALL_WEBHOOK_EVENTS


@dataclass
class Webhook:
    """Webhook subscription entity.

    Attributes:
        id: Unique identifier.
        collection_id: ID of the collection whose events are delivered.
        url: Absolute HTTP/HTTPS target URL.
        events: Subscribed event kinds. May be empty when decoded from a
            damaged stored value, in which case nothing is delivered.
        created_at: Timestamp when the webhook was registered.
    """

    id: str
    collection_id: str
    url: str
    events: frozenset[str] = frozenset()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Webhook ID is required")
        if not self.url:
            raise ValueError("Webhook URL is required")
        self.events = normalize_events(self.events)

    def subscribes_to(self, event: str) -> bool:
        return event in self.events


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and 'Z' suffix."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class DispatchPayload:
    """Body of an outbound webhook call.

    One payload is shared by every subscriber of a single notification, so
    all of them observe the same ``timestamp`` and ``collection``.
    """

    event: str
    collection_id: str
    collection_name: str
    data: dict[str, Any]
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "collection": {"id": self.collection_id, "name": self.collection_name},
            "data": self.data,
            "timestamp": self.timestamp,
        }
