"""API Routes for Pantry."""

from .auth_router import router as auth_router
from .collections_router import router as collections_router
from .items_router import router as items_router
from .media_router import router as media_router
from .webhooks_router import router as webhooks_router

__all__ = [
    "auth_router",
    "collections_router",
    "items_router",
    "media_router",
    "webhooks_router",
]
