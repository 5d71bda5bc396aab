"""Collections API routes.

Listing and reading collections is public. Creating, updating and
deleting them requires an authenticated operator.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.logging import get_logger
from pantry.domain.services import CollectionValidationError, CollectionValidator, generate_id
from pantry.infrastructure.api.dependencies import AuthenticatedOperator, Dispatcher
from pantry.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.persistence.models import CollectionModel
from pantry.infrastructure.persistence.repositories import (
    CollectionRepository,
    collection_to_entity,
)

logger = get_logger(__name__)

router = APIRouter()


def collection_not_found(collection_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not found",
            "message": f"Collection '{collection_id}' not found",
        },
    )


def validation_error(errors: list[CollectionValidationError]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "details": [
                {"field": e.field, "message": e.message, "code": e.code} for e in errors
            ],
        },
    )


def to_response(model: CollectionModel) -> CollectionResponse:
    collection = collection_to_entity(model)
    return CollectionResponse(
        id=collection.id,
        name=collection.name,
        schema=collection.schema,
        created_at=collection.created_at,
        updated_at=collection.updated_at,
    )


@router.get("", response_model=list[CollectionResponse])
async def list_collections(
    session: AsyncSession = Depends(get_db_session),
) -> list[CollectionResponse]:
    """List all collections, oldest first."""
    collections = await CollectionRepository(session).list_all()
    return [to_response(model) for model in collections]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Not authenticated"},
    },
)
async def create_collection(
    request: CreateCollectionRequest,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    """Create a new collection with the given field schema."""
    errors = CollectionValidator.validate(request.name, request.schema_)
    if errors:
        logger.info(
            "Collection creation failed: validation errors",
            collection_name=request.name,
            error_count=len(errors),
        )
        return validation_error(errors)

    model = await CollectionRepository(session).create(
        collection_id=generate_id(),
        name=request.name.strip(),
        schema=CollectionValidator.normalize_schema(request.schema_),
    )
    await session.commit()

    await dispatcher.on_collection_created(collection_to_entity(model))
    return to_response(model)


@router.get(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"description": "Collection not found"}},
)
async def get_collection(
    collection_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    model = await CollectionRepository(session).get_by_id(collection_id)
    if model is None:
        return collection_not_found(collection_id)
    return to_response(model)


@router.patch(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Not authenticated"},
        404: {"description": "Collection not found"},
    },
)
async def update_collection(
    collection_id: str,
    request: UpdateCollectionRequest,
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    """Rename a collection and/or replace its schema.

    Existing item data is left untouched when the schema changes.
    """
    repo = CollectionRepository(session)
    model = await repo.get_by_id(collection_id)
    if model is None:
        return collection_not_found(collection_id)

    errors: list[CollectionValidationError] = []
    if request.name is not None:
        errors.extend(CollectionValidator.validate_name(request.name))
    if request.schema_ is not None:
        errors.extend(CollectionValidator.validate_schema(request.schema_))
    if errors:
        return validation_error(errors)

    model = await repo.update(
        model,
        name=request.name.strip() if request.name is not None else None,
        schema=(
            CollectionValidator.normalize_schema(request.schema_)
            if request.schema_ is not None
            else None
        ),
    )
    await session.commit()

    logger.info(
        "Collection updated",
        collection_id=collection_id,
        operator_id=current_operator.operator_id,
    )
    return to_response(model)


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Collection not found"},
    },
)
async def delete_collection(
    collection_id: str,
    current_operator: AuthenticatedOperator,
    dispatcher: Dispatcher,
    session: AsyncSession = Depends(get_db_session),
) -> None | JSONResponse:
    """Delete a collection together with its items and webhooks."""
    deleted = await CollectionRepository(session).delete(collection_id)
    if not deleted:
        await session.rollback()
        return collection_not_found(collection_id)
    await session.commit()

    await dispatcher.on_collection_deleted(collection_id)
    return None
