"""Deployments — website releases and the search-indexing state of their URLs.

Invariants:
    - Every response record is normalized (legacy URL entries upgraded)
    - /unindexed registered before /{deployment_id} so it is not parsed as an id
    - Legacy /indexed and /urls/indexed routes are aliases for the "indexed" moves
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core import indexing
from pvs_api.core.domain_types import IndexingStatus
from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.deployments import (
    DeploymentCreate, DeploymentStatusUpdate, UrlBatchStatusUpdate,
    UrlIndexed, UrlStatusUpdate,
)
from pvs_api.services.deployments import DeploymentService

router = APIRouter(prefix="/api/deployments", tags=["deployments"])
website_router = APIRouter(prefix="/api/websites", tags=["deployments"])

INDEXED = IndexingStatus.INDEXED.value


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_deployment(body: DeploymentCreate, db: AsyncSession = Depends(get_db)):
    deployment = await DeploymentService(db).create(body.model_dump())
    return indexing.normalize_deployment(deployment.to_dict())


@website_router.get("/{website_id}/deployments")
async def list_website_deployments(
    website_id: UUID,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).list_by_website(website_id, limit, offset)


@router.get("/unindexed")
async def list_unindexed(
    limit: int = Query(50, ge=1, le=100), db: AsyncSession = Depends(get_db),
):
    deployments = await DeploymentService(db).list_unindexed(limit)
    return {"total": len(deployments), "deployments": deployments}


@router.get("/{deployment_id}")
async def get_deployment(deployment_id: UUID, db: AsyncSession = Depends(get_db)):
    return await DeploymentService(db).get_detail(deployment_id)


@router.patch("/{deployment_id}/status")
async def update_deployment_status(
    deployment_id: UUID, body: DeploymentStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).update_status(deployment_id, body.status)


@router.patch("/{deployment_id}/urls/status")
async def update_url_status(
    deployment_id: UUID, body: UrlStatusUpdate, db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).update_url_status(
        deployment_id, body.url, body.status,
    )


@router.patch("/{deployment_id}/urls/batch")
async def update_urls_batch(
    deployment_id: UUID, body: UrlBatchStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).update_urls_batch(
        deployment_id, body.urls, body.status,
    )


# ─── Legacy aliases ─────────────────────────────────────────────

@router.patch("/{deployment_id}/indexed")
async def mark_deployment_indexed(
    deployment_id: UUID, db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).update_status(deployment_id, INDEXED)


@router.patch("/{deployment_id}/urls/indexed")
async def mark_url_indexed(
    deployment_id: UUID, body: UrlIndexed, db: AsyncSession = Depends(get_db),
):
    return await DeploymentService(db).update_url_status(
        deployment_id, body.url, INDEXED,
    )
