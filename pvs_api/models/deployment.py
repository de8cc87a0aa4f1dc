"""Deployment ORM — a website release and the search-indexing state of its changed URLs.

Invariants:
    - changed_urls is a JSON list of {url, indexing_status, indexing_requested_at, indexed_at}
      (legacy rows may hold {url, indexed_at}; normalized on read by core/indexing.py)
    - indexing_status / indexing_requested_at / indexed_at are recomputed on every URL update
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pvs_api.core.domain_types import IndexingStatus
from pvs_api.db.base import Base, utcnow


class Deployment(Base):
    __tablename__ = "deployments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    website_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("websites.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    changed_urls: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    deploy_summary: Mapped[str] = mapped_column(Text, nullable=False)
    internal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    indexing_status: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=IndexingStatus.PENDING.value,
    )
    indexing_requested_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    indexed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    website: Mapped["Website"] = relationship("Website", lazy="selectin")
