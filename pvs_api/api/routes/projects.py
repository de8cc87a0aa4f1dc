"""Projects — one board ordering websites and apps together."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.projects import ProjectReorder
from pvs_api.services.projects import ProjectBoardService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.patch("/reorder")
async def reorder_projects(body: ProjectReorder, db: AsyncSession = Depends(get_db)):
    return await ProjectBoardService(db).reorder(
        [item.model_dump() for item in body.items],
    )
