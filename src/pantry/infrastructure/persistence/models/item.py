"""SQLAlchemy model for the items table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from pantry.infrastructure.persistence.database import Base


class ItemModel(Base):
    """SQLAlchemy model for the items table.

    Items belong to a collection and are removed with it.
    """

    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data: Mapped[str] = mapped_column(
        Text, nullable=False, default="{}", comment="JSON object of field values"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, collection_id={self.collection_id})>"
