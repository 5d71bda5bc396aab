"""Webhook subscription API routes.

Subscriptions are created and listed per collection and removed by their
own ID. All endpoints require an authenticated operator.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.services import generate_id
from pantry.infrastructure.api.dependencies import AuthenticatedOperator
from pantry.infrastructure.api.routes.collections_router import collection_not_found
from pantry.infrastructure.api.schemas import CreateWebhookRequest, WebhookSubscriptionResponse
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.persistence.models import WebhookModel
from pantry.infrastructure.persistence.repositories import (
    CollectionRepository,
    WebhookRepository,
    webhook_to_entity,
)

logger = get_logger(__name__)

router = APIRouter()


def to_response(model: WebhookModel) -> WebhookSubscriptionResponse:
    webhook = webhook_to_entity(model)
    return WebhookSubscriptionResponse(
        id=webhook.id,
        collection_id=webhook.collection_id,
        url=webhook.url,
        events=sorted(webhook.events),
        created_at=webhook.created_at,
    )


@router.get(
    "/collections/{collection_id}/webhooks",
    response_model=list[WebhookSubscriptionResponse],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Collection not found"},
    },
)
async def list_webhooks(
    collection_id: str,
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> list[WebhookSubscriptionResponse] | JSONResponse:
    if await CollectionRepository(session).get_by_id(collection_id) is None:
        return collection_not_found(collection_id)

    webhooks = await WebhookRepository(session).list_for_collection(collection_id)
    return [to_response(model) for model in webhooks]


@router.post(
    "/collections/{collection_id}/webhooks",
    status_code=status.HTTP_201_CREATED,
    response_model=WebhookSubscriptionResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Collection not found"},
    },
)
async def create_webhook(
    collection_id: str,
    request: CreateWebhookRequest,
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> WebhookSubscriptionResponse | JSONResponse:
    """Subscribe a URL to some or all item events of a collection."""
    if await CollectionRepository(session).get_by_id(collection_id) is None:
        return collection_not_found(collection_id)

    model = await WebhookRepository(session).create(
        webhook_id=generate_id(),
        collection_id=collection_id,
        url=str(request.url),
        events=request.events,
    )
    await session.commit()

    logger.info(
        "Webhook created",
        webhook_id=model.id,
        collection_id=collection_id,
        url=model.url,
        events=sorted(set(request.events)),
        operator_id=current_operator.operator_id,
    )
    return to_response(model)


@router.delete(
    "/webhooks/{webhook_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Webhook not found"},
    },
)
async def delete_webhook(
    webhook_id: str,
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> None | JSONResponse:
    deleted = await WebhookRepository(session).delete(webhook_id)
    if not deleted:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not found",
                "message": f"Webhook '{webhook_id}' not found",
            },
        )
    await session.commit()

    logger.info("Webhook deleted", webhook_id=webhook_id, operator_id=current_operator.operator_id)
    return None
