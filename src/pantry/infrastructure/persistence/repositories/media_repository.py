"""Repository for media metadata."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.domain.entities import Media
from pantry.infrastructure.persistence.models import MediaModel


def media_to_entity(model: MediaModel) -> Media:
    return Media(
        id=model.id,
        filename=model.filename,
        original_name=model.original_name,
        mime_type=model.mime_type,
        size=model.size,
        path=model.path,
        description=model.description,
        uploaded_at=model.uploaded_at,
    )


class MediaRepository:
    """Repository for media database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, media: MediaModel) -> MediaModel:
        self.session.add(media)
        await self.session.flush()
        await self.session.refresh(media)
        return media

    async def get_by_id(self, media_id: str) -> MediaModel | None:
        result = await self.session.execute(select(MediaModel).where(MediaModel.id == media_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[MediaModel]:
        result = await self.session.execute(
            select(MediaModel).order_by(MediaModel.uploaded_at.desc(), MediaModel.id.desc())
        )
        return list(result.scalars().all())

    async def delete(self, media_id: str) -> bool:
        result = await self.session.execute(delete(MediaModel).where(MediaModel.id == media_id))
        return result.rowcount > 0
