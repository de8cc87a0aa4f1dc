"""Website ORM — a client's marketing site, the target of website deployments.

Invariants:
    - domain and website_slug are each unique across all websites
    - status is a ProjectStatus value; priority orders the studio project board
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pvs_api.core.domain_types import ProjectStatus
from pvs_api.db.base import Base, utcnow


class Website(Base):
    __tablename__ = "websites"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    domain: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    website_slug: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True,
    )
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    features: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    seo_focus: Mapped[dict | str | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProjectStatus.PLANNING.value,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    client: Mapped["Client"] = relationship("Client", lazy="selectin")
