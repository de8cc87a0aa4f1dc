"""Client ORM — a studio customer that owns websites, apps, CMS pages and subscribers.

Invariants:
    - client_slug is unique (public URLs address clients by slug)
    - updated_at is refreshed by every service-level write
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pvs_api.db.base import Base, utcnow


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    client: Mapped[str] = mapped_column(String(200), nullable=False)
    client_slug: Mapped[str | None] = mapped_column(
        String(200), nullable=True, unique=True, index=True,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    firstname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    lastname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    def summary(self) -> dict:
        """Nested client shape used inside app and deployment responses."""
        return {
            "id": self.id,
            "firstname": self.firstname,
            "lastname": self.lastname,
        }
