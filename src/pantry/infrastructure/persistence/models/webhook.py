"""SQLAlchemy model for the webhooks table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from pantry.infrastructure.persistence.database import Base


class WebhookModel(Base):
    """SQLAlchemy model for the webhooks table.

    ``events`` is stored as a JSON array of event kinds. Decoding into a
    typed set happens in WebhookRepository, never in the dispatcher.
    """

    __tablename__ = "webhooks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    events: Mapped[str] = mapped_column(
        Text, nullable=False, comment="JSON array of subscribed events"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Webhook(id={self.id}, collection_id={self.collection_id}, url={self.url})>"
