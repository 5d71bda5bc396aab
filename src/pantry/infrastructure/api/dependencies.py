"""FastAPI dependencies for authentication, storage and webhook dispatch.

The operator token is accepted from the session cookie set at login or
from an ``Authorization: Bearer`` header.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.config import get_settings
from pantry.core.logging import get_logger
from pantry.domain.services import WebhookDispatcher, WebhookTransport
from pantry.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.storage import LocalStorageProvider, StorageProvider
from pantry.infrastructure.webhooks import HttpxWebhookTransport, RepositoryDispatchSource

logger = get_logger(__name__)


@dataclass
class CurrentOperator:
    """The authenticated operator, extracted from a valid access token."""

    operator_id: str
    email: str


def _extract_token(request: Request, authorization: str | None) -> str | None:
    if authorization is not None:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None
        return parts[1]
    return request.cookies.get(get_settings().auth_cookie_name)


async def get_current_operator(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentOperator:
    """Extract and validate the current operator.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or expired.
    """
    token = _extract_token(request, authorization)
    if token is None:
        logger.info("Authentication failed: no credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt_service.validate_access_token(token)
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentOperator(operator_id=payload["sub"], email=payload.get("email", ""))


AuthenticatedOperator = Annotated[CurrentOperator, Depends(get_current_operator)]


def get_webhook_transport(request: Request) -> WebhookTransport:
    """Get the shared outbound webhook transport from app state."""
    transport = getattr(request.app.state, "webhook_transport", None)
    if transport is None:
        transport = HttpxWebhookTransport(timeout_seconds=get_settings().webhook_timeout_seconds)
        request.app.state.webhook_transport = transport
    return transport


async def get_webhook_dispatcher(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    transport: Annotated[WebhookTransport, Depends(get_webhook_transport)],
) -> WebhookDispatcher:
    """Build a dispatcher that reads subscriptions through the request session."""
    settings = get_settings()
    source = RepositoryDispatchSource(session)
    return WebhookDispatcher(
        registry=source,
        collections=source,
        transport=transport,
        user_agent=settings.effective_webhook_user_agent,
        timeout_seconds=settings.webhook_timeout_seconds,
    )


Dispatcher = Annotated[WebhookDispatcher, Depends(get_webhook_dispatcher)]


def get_storage_provider(request: Request) -> StorageProvider:
    # Tests replace the provider on app state to point at a temp directory
    provider = getattr(request.app.state, "storage_provider", None)
    if provider is None:
        provider = LocalStorageProvider()
        request.app.state.storage_provider = provider
    return provider


Storage = Annotated[StorageProvider, Depends(get_storage_provider)]
