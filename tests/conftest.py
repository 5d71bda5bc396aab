"""Pytest configuration for all tests."""

from typing import Any, AsyncGenerator, Mapping

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pantry.domain.services import WebhookResponse, WebhookTransport
from pantry.infrastructure.auth import hash_password, jwt_service
from pantry.infrastructure.persistence import models  # noqa: F401
from pantry.infrastructure.persistence.database import Base
from pantry.infrastructure.persistence.models import OperatorModel
from pantry.infrastructure.storage import LocalStorageProvider

OPERATOR_EMAIL = "operator@pantry.test"
OPERATOR_PASSWORD = "correct-horse-battery"


class RecordingTransport(WebhookTransport):
    """In-memory webhook transport that records every POST.

    ``responses`` maps a URL to the ``WebhookResponse`` to return or the
    exception to raise; unknown URLs answer 200.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.responses: dict[str, WebhookResponse | BaseException] = {}

    async def post(
        self,
        url: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> WebhookResponse:
        self.calls.append({"url": url, "body": dict(body), "headers": dict(headers)})
        outcome = self.responses.get(url, WebhookResponse(status_code=200, body="ok"))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["url"] == url]


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def webhook_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def storage_provider(tmp_path) -> LocalStorageProvider:
    return LocalStorageProvider(storage_path=str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    webhook_transport: RecordingTransport,
    storage_provider: LocalStorageProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database, webhook and storage dependencies."""
    from pantry.infrastructure.api.app import app
    from pantry.infrastructure.api.dependencies import (
        get_storage_provider,
        get_webhook_transport,
    )
    from pantry.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_webhook_transport] = lambda: webhook_transport
    app.dependency_overrides[get_storage_provider] = lambda: storage_provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def operator(db_session: AsyncSession) -> OperatorModel:
    """Create the operator account."""
    model = OperatorModel(
        id="1700000000000",
        email=OPERATOR_EMAIL,
        password_hash=hash_password(OPERATOR_PASSWORD),
    )
    db_session.add(model)
    await db_session.commit()
    return model


@pytest.fixture
def operator_credentials(operator: OperatorModel) -> dict[str, str]:
    return {"email": OPERATOR_EMAIL, "password": OPERATOR_PASSWORD}


@pytest.fixture
def operator_token(operator: OperatorModel) -> str:
    return jwt_service.create_access_token(operator_id=operator.id, email=operator.email)


@pytest.fixture
def auth_headers(operator_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {operator_token}"}
