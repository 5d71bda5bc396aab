"""Unit tests for the media upload route handler."""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import Headers

from pantry.core.config import Settings
from pantry.infrastructure.api.dependencies import CurrentOperator
from pantry.infrastructure.api.routes.media_router import upload_media
from pantry.infrastructure.storage import LocalStorageProvider

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
OPERATOR = CurrentOperator(operator_id="1700000000000", email="operator@pantry.test")


def png_upload(content: bytes = PNG_BYTES, size: int | None = None) -> UploadFile:
    return UploadFile(
        file=BytesIO(content),
        filename="photo.png",
        size=size,
        headers=Headers({"content-type": "image/png"}),
    )


@pytest.fixture
def small_storage(tmp_path) -> LocalStorageProvider:
    return LocalStorageProvider(settings=Settings(max_file_size=16), storage_path=str(tmp_path / "small"))


class TestUploadSizeLimit:
    @pytest.mark.asyncio
    async def test_declared_size_over_limit_is_rejected_before_reading(self, small_storage) -> None:
        upload = png_upload(size=len(PNG_BYTES))

        with pytest.raises(HTTPException) as exc_info:
            await upload_media(
                current_operator=OPERATOR,
                storage=small_storage,
                file=upload,
                description="",
                session=MagicMock(spec=AsyncSession),
            )

        assert exc_info.value.status_code == 413
        assert upload.file.tell() == 0
        assert not small_storage.storage_path.exists()

    @pytest.mark.asyncio
    async def test_unknown_size_over_limit_is_rejected(self, small_storage) -> None:
        upload = png_upload(size=None)

        with pytest.raises(HTTPException) as exc_info:
            await upload_media(
                current_operator=OPERATOR,
                storage=small_storage,
                file=upload,
                description="",
                session=MagicMock(spec=AsyncSession),
            )

        assert exc_info.value.status_code == 413
        assert upload.file.tell() == small_storage.max_file_size + 1
        assert not small_storage.storage_path.exists()


class TestUploadMetadataFailure:
    @pytest.mark.asyncio
    async def test_file_is_removed_when_commit_fails(self, storage_provider) -> None:
        session = MagicMock(spec=AsyncSession)
        session.commit.side_effect = RuntimeError("database is locked")

        with pytest.raises(RuntimeError):
            await upload_media(
                current_operator=OPERATOR,
                storage=storage_provider,
                file=png_upload(),
                description="",
                session=session,
            )

        session.rollback.assert_awaited_once()
        assert list(storage_provider.storage_path.iterdir()) == []
