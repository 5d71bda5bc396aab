"""Domain services for Pantry.

Services contain business logic that doesn't naturally fit within a single
entity. They depend on injected ports rather than on infrastructure.
"""

from pantry.domain.services.collection_validator import (
    RESERVED_FIELD_NAMES,
    CollectionValidationError,
    CollectionValidator,
)
from pantry.domain.services.id_generator import TimeIdGenerator, generate_id
from pantry.domain.services.webhook_dispatcher import (
    CollectionStore,
    DeliveryFailure,
    DispatchSummary,
    WebhookDispatcher,
    WebhookRegistry,
    WebhookResponse,
    WebhookTransport,
    WebhookTransportError,
)

__all__ = [
    "CollectionStore",
    "CollectionValidationError",
    "CollectionValidator",
    "DeliveryFailure",
    "DispatchSummary",
    "RESERVED_FIELD_NAMES",
    "TimeIdGenerator",
    "WebhookDispatcher",
    "WebhookRegistry",
    "WebhookResponse",
    "WebhookTransport",
    "WebhookTransportError",
    "generate_id",
]
