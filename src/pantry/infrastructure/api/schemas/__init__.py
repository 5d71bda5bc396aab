"""Request and response schemas for the Pantry API."""

from pantry.infrastructure.api.schemas.auth_schemas import (
    LoginRequest,
    OperatorResponse,
    TokenResponse,
)
from pantry.infrastructure.api.schemas.collection_schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    UpdateCollectionRequest,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from pantry.infrastructure.api.schemas.item_schemas import ItemResponse
from pantry.infrastructure.api.schemas.media_schemas import MediaResponse
from pantry.infrastructure.api.schemas.webhook_schemas import (
    CreateWebhookRequest,
    WebhookSubscriptionResponse,
)

__all__ = [
    "CollectionResponse",
    "CreateCollectionRequest",
    "CreateWebhookRequest",
    "ItemResponse",
    "LoginRequest",
    "MediaResponse",
    "OperatorResponse",
    "TokenResponse",
    "UpdateCollectionRequest",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
    "WebhookSubscriptionResponse",
]
