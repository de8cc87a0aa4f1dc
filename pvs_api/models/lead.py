"""Lead ORM — an inbound sales inquiry from the marketing site.

Invariants:
    - At most one unacknowledged lead per email (case-insensitive), checked before insert
    - interested_in holds package ids from core/lead_packages.py
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pvs_api.db.base import Base, utcnow


class Lead(Base):
    __tablename__ = "leads"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    budget: Mapped[str] = mapped_column(String(10), nullable=False)
    timeline: Mapped[str] = mapped_column(String(10), nullable=False)
    brief_summary: Mapped[str] = mapped_column(Text, nullable=False)
    has_seen_packages: Mapped[bool] = mapped_column(Boolean, nullable=False)
    interested_in: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    acknowledged: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
