"""Media API routes for uploading and managing files.

Uploaded files are written by the storage provider and served statically
under the configured media URL prefix; these endpoints manage their
metadata. All endpoints require an authenticated operator.
"""

from io import BytesIO

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.config import get_settings
from pantry.core.logging import get_logger
from pantry.domain.services import generate_id
from pantry.infrastructure.api.dependencies import AuthenticatedOperator, Storage
from pantry.infrastructure.api.schemas import MediaResponse
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.persistence.models import MediaModel
from pantry.infrastructure.persistence.repositories import MediaRepository, media_to_entity
from pantry.infrastructure.storage import FileTooLargeError, UnsupportedMediaTypeError

logger = get_logger(__name__)

router = APIRouter()


def media_not_found(media_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not found",
            "message": f"Media '{media_id}' not found",
        },
    )


def to_response(model: MediaModel) -> MediaResponse:
    return MediaResponse.model_validate(media_to_entity(model))


def upload_too_large(original_name: str, size: int, max_file_size: int) -> HTTPException:
    logger.info("Media upload rejected: too large", original_name=original_name, size=size)
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"File exceeds the maximum allowed size of {max_file_size} bytes",
    )


@router.get("", response_model=list[MediaResponse])
async def list_media(
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> list[MediaResponse]:
    """List uploaded media, newest first."""
    return [to_response(model) for model in await MediaRepository(session).list_all()]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MediaResponse,
    responses={
        401: {"description": "Not authenticated"},
        413: {"description": "File too large"},
        415: {"description": "File type not allowed"},
    },
)
async def upload_media(
    current_operator: AuthenticatedOperator,
    storage: Storage,
    file: UploadFile = File(..., description="File to upload"),
    description: str = Form(default=""),
    session: AsyncSession = Depends(get_db_session),
) -> MediaResponse:
    """Upload a file and record its metadata.

    The stored file is removed again if its metadata cannot be saved.
    """
    original_name = file.filename or "unnamed"
    mime_type = file.content_type or "application/octet-stream"

    if file.size is not None and file.size > storage.max_file_size:
        raise upload_too_large(original_name, file.size, storage.max_file_size)

    # One byte past the limit is enough for the provider to reject it
    content = await file.read(storage.max_file_size + 1)

    try:
        stored = await storage.save_file(BytesIO(content), original_name, mime_type)
    except FileTooLargeError:
        raise upload_too_large(original_name, len(content), storage.max_file_size)
    except UnsupportedMediaTypeError as e:
        logger.info("Media upload rejected: type not allowed", original_name=original_name, mime_type=mime_type)
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))

    try:
        model = await MediaRepository(session).create(
            MediaModel(
                id=generate_id(),
                filename=stored.filename,
                original_name=original_name,
                mime_type=mime_type,
                size=stored.size,
                path=f"{get_settings().media_url_prefix}/{stored.filename}",
                description=description,
            )
        )
        await session.commit()
    except Exception:
        await session.rollback()
        await storage.delete_file(stored.filename)
        logger.error("Media metadata not saved, file removed", filename=stored.filename)
        raise

    logger.info(
        "Media uploaded",
        media_id=model.id,
        filename=stored.filename,
        size=stored.size,
        operator_id=current_operator.operator_id,
    )
    return to_response(model)


@router.get(
    "/{media_id}",
    response_model=MediaResponse,
    responses={404: {"description": "Media not found"}},
)
async def get_media(
    media_id: str,
    current_operator: AuthenticatedOperator,
    session: AsyncSession = Depends(get_db_session),
) -> MediaResponse | JSONResponse:
    model = await MediaRepository(session).get_by_id(media_id)
    if model is None:
        return media_not_found(media_id)
    return to_response(model)


@router.delete(
    "/{media_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={404: {"description": "Media not found"}},
)
async def delete_media(
    media_id: str,
    current_operator: AuthenticatedOperator,
    storage: Storage,
    session: AsyncSession = Depends(get_db_session),
) -> None | JSONResponse:
    """Delete a media record and its file.

    Items that reference the file keep their stored path.
    """
    repo = MediaRepository(session)
    model = await repo.get_by_id(media_id)
    if model is None:
        return media_not_found(media_id)

    filename = model.filename
    await repo.delete(media_id)
    await session.commit()

    try:
        await storage.delete_file(filename)
    except (OSError, ValueError) as e:
        logger.warning("Failed to remove media file", media_id=media_id, filename=filename, error=str(e))

    logger.info("Media deleted", media_id=media_id, operator_id=current_operator.operator_id)
    return None
