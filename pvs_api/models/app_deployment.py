"""AppDeployment ORM — one release of an app into an environment.

Invariants:
    - environment is development | staging | production
    - status moves freely between AppDeploymentStatus values (no transition rules)
    - deployed_at set when status becomes deployed; rolled_back_at when rolled_back
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pvs_api.core.domain_types import AppDeploymentStatus, Environment
from pvs_api.db.base import Base, utcnow


class AppDeployment(Base):
    __tablename__ = "app_deployments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    app_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("apps.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    version: Mapped[str] = mapped_column(String(100), nullable=False)
    environment: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Environment.PRODUCTION.value,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppDeploymentStatus.PENDING.value,
    )
    deploy_summary: Mapped[str] = mapped_column(Text, nullable=False)
    commit_sha: Mapped[str | None] = mapped_column(String(40), nullable=True)
    commit_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    internal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deployed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    deployed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    rolled_back_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    rollback_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    app: Mapped["App"] = relationship("App", lazy="selectin")
