"""App Deployments — release records for apps, per environment.

Invariants:
    - /active registered before /{deployment_id}
    - Status transitions are recorded as sent, without validation
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import Environment
from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.deployments import AppDeploymentCreate, AppDeploymentStatusUpdate
from pvs_api.services.app_deployments import AppDeploymentService

router = APIRouter(prefix="/api/app-deployments", tags=["app-deployments"])
app_router = APIRouter(prefix="/api/apps", tags=["app-deployments"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_app_deployment(
    body: AppDeploymentCreate, db: AsyncSession = Depends(get_db),
):
    values = body.model_dump()
    values["environment"] = body.environment.value
    deployment = await AppDeploymentService(db).create(values)
    return deployment.to_dict()


@router.get("/active")
async def list_active_deployments(
    limit: int = Query(50, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    deployments = await AppDeploymentService(db).list_active(limit)
    return {"total": len(deployments), "deployments": deployments}


@router.get("/{deployment_id}")
async def get_app_deployment(deployment_id: UUID, db: AsyncSession = Depends(get_db)):
    return await AppDeploymentService(db).get_detail(deployment_id)


@router.patch("/{deployment_id}/status")
async def update_app_deployment_status(
    deployment_id: UUID, body: AppDeploymentStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    deployment = await AppDeploymentService(db).update_status(
        deployment_id, body.status.value, body.rollback_reason,
    )
    return deployment.to_dict()


@app_router.get("/{app_id}/deployments")
async def list_app_deployments(
    app_id: UUID,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    environment: Environment | None = None,
    db: AsyncSession = Depends(get_db),
):
    return await AppDeploymentService(db).list_by_app(
        app_id, limit, offset, environment.value if environment else None,
    )


@app_router.get("/{app_id}/deployments/latest")
async def latest_app_deployments(app_id: UUID, db: AsyncSession = Depends(get_db)):
    return await AppDeploymentService(db).latest_by_environment(app_id)
