"""Local filesystem storage for uploaded media."""

import asyncio
import mimetypes
import uuid
from pathlib import Path
from typing import BinaryIO

from pantry.core.config import Settings, get_settings
from pantry.core.logging import get_logger
from pantry.infrastructure.storage.base import (
    FileTooLargeError,
    StoredFile,
    StorageProvider,
    UnsupportedMediaTypeError,
)

logger = get_logger(__name__)


def suffix_for(mime_type: str) -> str:
    """File suffix for a MIME type, or an empty string when none is known."""
    return mimetypes.guess_extension(mime_type, strict=False) or ""


class LocalStorageProvider(StorageProvider):
    """Stores media files in a single directory on the local filesystem.

    Files are saved under a generated ``<uuid><suffix>`` name so uploads
    with the same original name never overwrite each other. The suffix is
    derived from the validated MIME type, not from the client filename.
    """

    def __init__(self, settings: Settings | None = None, storage_path: str | None = None) -> None:
        self.settings = settings or get_settings()
        self.storage_path = Path(storage_path or self.settings.media_path)
        self.max_file_size = self.settings.max_file_size

    def validate_file_size(self, size: int) -> None:
        if size > self.max_file_size:
            max_size_mb = self.max_file_size / (1024 * 1024)
            actual_size_mb = size / (1024 * 1024)
            raise FileTooLargeError(
                f"File size ({actual_size_mb:.2f}MB) exceeds maximum allowed "
                f"size ({max_size_mb:.2f}MB)"
            )

    def validate_mime_type(self, mime_type: str) -> None:
        if mime_type not in self.settings.allowed_mime_types:
            raise UnsupportedMediaTypeError(
                f"File type '{mime_type}' is not allowed. "
                f"Allowed types: {', '.join(self.settings.allowed_mime_types)}"
            )

    def resolve(self, filename: str) -> Path:
        """Absolute path of a stored file, refusing paths outside the storage dir."""
        root = self.storage_path.resolve()
        path = (root / filename).resolve()
        if path.parent != root:
            raise ValueError("Invalid file path")
        return path

    async def save_file(self, file_content: BinaryIO, original_name: str, mime_type: str) -> StoredFile:
        content = file_content.read()
        self.validate_file_size(len(content))
        self.validate_mime_type(mime_type)

        filename = f"{uuid.uuid4().hex}{suffix_for(mime_type)}"
        path = self.resolve(filename)
        await asyncio.to_thread(self._write, path, content)

        logger.info("Media file saved", filename=filename, original_name=original_name, size=len(content))
        return StoredFile(filename=filename, size=len(content), local_path=path)

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def delete_file(self, filename: str) -> None:
        path = self.resolve(filename)
        await asyncio.to_thread(path.unlink, missing_ok=True)

