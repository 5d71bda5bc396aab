"""Media storage providers."""

from pantry.infrastructure.storage.base import (
    FileTooLargeError,
    MediaValidationError,
    StoredFile,
    StorageProvider,
    UnsupportedMediaTypeError,
)
from pantry.infrastructure.storage.local_storage_provider import LocalStorageProvider

__all__ = [
    "FileTooLargeError",
    "LocalStorageProvider",
    "MediaValidationError",
    "StoredFile",
    "StorageProvider",
    "UnsupportedMediaTypeError",
]
