"""App Deployment Service — release records for apps, per environment.

Invariants:
    - New records are stored as deployed with deployed_at = now
    - Status changes are not validated against the current status
    - "latest" per environment = most recent deployed_at among status == deployed
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import AppDeploymentStatus, Environment
from pvs_api.core.errors import ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.app_deployment import AppDeployment
from pvs_api.services.apps import AppService

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = (AppDeploymentStatus.PENDING.value, AppDeploymentStatus.DEPLOYING.value)


class AppDeploymentService:
    """App deployment persistence operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, values: dict) -> AppDeployment:
        await AppService(self.db).get_or_404(values["app_id"])
        now = utcnow()
        deployment = AppDeployment(
            **values,
            status=AppDeploymentStatus.DEPLOYED.value,
            deployed_at=now,
            updated_at=now,
        )
        self.db.add(deployment)
        await self.db.commit()
        await self.db.refresh(deployment)
        logger.info(
            f"App deployment recorded: {deployment.version}",
            extra={"resource_id": str(deployment.id)},
        )
        return deployment

    async def list_by_app(
        self, app_id: UUID, limit: int = 20, offset: int = 0,
        environment: str | None = None,
    ) -> dict:
        app = await AppService(self.db).get_or_404(app_id)
        query = select(AppDeployment).where(AppDeployment.app_id == app_id)
        if environment:
            query = query.where(AppDeployment.environment == environment)
        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self.db.execute(
            query.order_by(AppDeployment.created_at.desc())
            .limit(limit).offset(offset),
        )
        return {
            "app_id": app_id,
            "app_name": app.name,
            "total": total,
            "limit": limit,
            "offset": offset,
            "deployments": [d.to_dict() for d in result.scalars().all()],
        }

    async def latest_by_environment(self, app_id: UUID) -> dict:
        app = await AppService(self.db).get_or_404(app_id)
        latest = {}
        for env in Environment:
            result = await self.db.execute(
                select(AppDeployment)
                .where(AppDeployment.app_id == app_id)
                .where(AppDeployment.environment == env.value)
                .where(AppDeployment.status == AppDeploymentStatus.DEPLOYED.value)
                .order_by(AppDeployment.deployed_at.desc())
                .limit(1),
            )
            record = result.scalar_one_or_none()
            latest[env.value] = record.to_dict() if record else None
        return {"app_id": app_id, "app_name": app.name, "latest": latest}

    async def list_active(self, limit: int = 50) -> list[dict]:
        result = await self.db.execute(
            select(AppDeployment)
            .where(AppDeployment.status.in_(_ACTIVE_STATUSES))
            .order_by(AppDeployment.created_at.desc())
            .limit(limit),
        )
        return [
            {**d.to_dict(), "apps": d.app.summary()}
            for d in result.scalars().all()
        ]

    async def get_or_404(self, deployment_id: UUID) -> AppDeployment:
        deployment = await self.db.get(AppDeployment, deployment_id)
        if deployment is None:
            raise ResourceNotFoundError("Deployment", str(deployment_id))
        return deployment

    async def get_detail(self, deployment_id: UUID) -> dict:
        deployment = await self.get_or_404(deployment_id)
        app = deployment.app
        return {
            **deployment.to_dict(),
            "app": app.summary(),
            "client": app.client.summary() if app.client else None,
        }

    async def update_status(
        self, deployment_id: UUID, status: str, rollback_reason: str | None = None,
    ) -> AppDeployment:
        deployment = await self.get_or_404(deployment_id)
        now = utcnow()
        deployment.status = status
        if status == AppDeploymentStatus.DEPLOYED.value:
            deployment.deployed_at = now
        elif status == AppDeploymentStatus.ROLLED_BACK.value:
            deployment.rolled_back_at = now
            if rollback_reason:
                deployment.rollback_reason = rollback_reason
        deployment.updated_at = now
        await self.db.commit()
        await self.db.refresh(deployment)
        return deployment
