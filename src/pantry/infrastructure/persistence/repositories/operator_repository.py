"""Repository for operator accounts."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.infrastructure.persistence.models import OperatorModel


class OperatorRepository:
    """Repository for operator database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, operator: OperatorModel) -> OperatorModel:
        self.session.add(operator)
        await self.session.flush()
        return operator

    async def get_by_id(self, operator_id: str) -> OperatorModel | None:
        result = await self.session.execute(
            select(OperatorModel).where(OperatorModel.id == operator_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> OperatorModel | None:
        """Look up an operator by email (case-insensitive)."""
        result = await self.session.execute(
            select(OperatorModel).where(OperatorModel.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def update_last_login(self, operator: OperatorModel) -> None:
        operator.last_login = datetime.now(timezone.utc)
        await self.session.flush()
