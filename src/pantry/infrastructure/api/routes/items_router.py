"""Item API routes.

Items live under ``/collections/{collection_id}/items``. Reads are public;
mutations require an authenticated operator and, once committed, notify
the collection's webhooks. Webhook outcomes never change the response.
"""

from typing import Any, Awaitable

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.entities import WebhookEvent
from pantry.domain.services import (
    RESERVED_FIELD_NAMES,
    DispatchSummary,
    WebhookDispatcher,
    generate_id,
)
from pantry.infrastructure.api.dependencies import (
    AuthenticatedOperator,
    CurrentOperator,
    Dispatcher,
)
from pantry.infrastructure.api.routes.collections_router import collection_not_found
from pantry.infrastructure.api.schemas import ItemResponse
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.persistence.models import ItemModel
from pantry.infrastructure.persistence.repositories import (
    CollectionRepository,
    ItemRepository,
    item_to_entity,
)

logger = get_logger(__name__)

router = APIRouter()


def item_not_found(collection_id: str, item_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not found",
            "message": f"Item '{item_id}' not found in collection '{collection_id}'",
        },
    )


def to_response(model: ItemModel) -> ItemResponse:
    item = item_to_entity(model)
    return ItemResponse(
        id=item.id,
        collection_id=item.collection_id,
        data=item.data,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def strip_reserved_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys the item store manages itself from client-supplied data."""
    return {key: value for key, value in data.items() if key not in RESERVED_FIELD_NAMES}


async def dispatch_safely(
    dispatch: Awaitable[DispatchSummary],
    collection_id: str,
    event: str,
) -> None:
    """Await a webhook dispatch, logging instead of raising on failure.

    The mutation is already committed at this point, so a failure to read
    webhook subscriptions must not turn a successful write into an error.
    """
    try:
        await dispatch
    except Exception as e:
        logger.error(
            "Webhook dispatch failed",
            collection_id=collection_id,
            webhook_event=event,
            error=str(e),
            exc_type=type(e).__name__,
        )


@router.get(
    "/{collection_id}/items",
    response_model=list[ItemResponse],
    responses={404: {"description": "Collection not found"}},
)
async def list_items(
    collection_id: str,
    session: AsyncSession = Depends(get_db_session),
    skip: int = Query(default=0, ge=0, description="Number of items to skip"),
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum items to return"),
) -> list[ItemResponse] | JSONResponse:
    """List the items of a collection in creation order."""
    if await CollectionRepository(session).get_by_id(collection_id) is None:
        return collection_not_found(collection_id)

    items = await ItemRepository(session).list_for_collection(collection_id, skip=skip, limit=limit)
    return [to_response(model) for model in items]


@router.post(
    "/{collection_id}/items",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Collection not found"},
    },
)
async def create_item(
    collection_id: str,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    data: dict[str, Any] = Body(..., description="Field values of the new item"),
    session: AsyncSession = Depends(get_db_session),
) -> ItemResponse | JSONResponse:
    """Create an item and notify ``create`` subscribers."""
    if await CollectionRepository(session).get_by_id(collection_id) is None:
        return collection_not_found(collection_id)

    model = await ItemRepository(session).create(
        item_id=generate_id(),
        collection_id=collection_id,
        data=strip_reserved_fields(data),
    )
    await session.commit()

    logger.info(
        "Item created",
        collection_id=collection_id,
        item_id=model.id,
        operator_id=current_operator.operator_id,
    )

    await dispatch_safely(
        dispatcher.on_item_created(collection_id, item_to_entity(model)),
        collection_id,
        WebhookEvent.CREATE,
    )
    return to_response(model)


@router.get(
    "/{collection_id}/items/{item_id}",
    response_model=ItemResponse,
    responses={404: {"description": "Item not found"}},
)
async def get_item(
    collection_id: str,
    item_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> ItemResponse | JSONResponse:
    model = await ItemRepository(session).get(collection_id, item_id)
    if model is None:
        return item_not_found(collection_id, item_id)
    return to_response(model)


async def _update_item(
    collection_id: str,
    item_id: str,
    data: dict[str, Any],
    merge: bool,
    current_operator: CurrentOperator,
    dispatcher: WebhookDispatcher,
    session: AsyncSession,
) -> ItemResponse | JSONResponse:
    repo = ItemRepository(session)
    model = await repo.get(collection_id, item_id)
    if model is None:
        return item_not_found(collection_id, item_id)

    model = await repo.update(model, strip_reserved_fields(data), merge=merge)
    await session.commit()

    logger.info(
        "Item updated",
        collection_id=collection_id,
        item_id=item_id,
        merge=merge,
        operator_id=current_operator.operator_id,
    )

    await dispatch_safely(
        dispatcher.on_item_updated(collection_id, item_to_entity(model)),
        collection_id,
        WebhookEvent.UPDATE,
    )
    return to_response(model)


@router.put(
    "/{collection_id}/items/{item_id}",
    response_model=ItemResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Item not found"},
    },
)
async def replace_item(
    collection_id: str,
    item_id: str,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    data: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_db_session),
) -> ItemResponse | JSONResponse:
    """Replace all field values of an item and notify ``update`` subscribers."""
    return await _update_item(
        collection_id, item_id, data, False, current_operator, dispatcher, session
    )


@router.patch(
    "/{collection_id}/items/{item_id}",
    response_model=ItemResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Item not found"},
    },
)
async def patch_item(
    collection_id: str,
    item_id: str,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    data: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_db_session),
) -> ItemResponse | JSONResponse:
    """Merge the given field values into an item and notify ``update`` subscribers."""
    return await _update_item(
        collection_id, item_id, data, True, current_operator, dispatcher, session
    )


@router.delete(
    "/{collection_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Item not found"},
    },
)
async def delete_item(
    collection_id: str,
    item_id: str,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    session: AsyncSession = Depends(get_db_session),
) -> None | JSONResponse:
    """Delete an item and notify ``delete`` subscribers with its ID."""
    deleted = await ItemRepository(session).delete(collection_id, item_id)
    if not deleted:
        return item_not_found(collection_id, item_id)
    await session.commit()

    logger.info(
        "Item deleted",
        collection_id=collection_id,
        item_id=item_id,
        operator_id=current_operator.operator_id,
    )

    await dispatch_safely(
        dispatcher.on_item_deleted(collection_id, item_id),
        collection_id,
        WebhookEvent.DELETE,
    )
    return None
