"""Base abstractions for media storage providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO


class MediaValidationError(ValueError):
    """Raised when an upload is rejected before it is stored."""


class FileTooLargeError(MediaValidationError):
    pass


class UnsupportedMediaTypeError(MediaValidationError):
    pass


@dataclass(slots=True)
class StoredFile:
    """Result of saving an uploaded file."""

    filename: str
    size: int
    local_path: Path | None = None


class StorageProvider(ABC):
    """Abstract base class for media storage providers.

    Attributes:
        max_file_size: Largest accepted upload, in bytes.
    """

    max_file_size: int

    @abstractmethod
    async def save_file(self, file_content: BinaryIO, original_name: str, mime_type: str) -> StoredFile:
        """Validate and persist an uploaded file under a new unique name."""
        ...

    @abstractmethod
    async def delete_file(self, filename: str) -> None:
        """Remove a stored file. Missing files are not an error."""
        ...
