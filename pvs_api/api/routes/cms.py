"""CMS — per-client page content addressed by client slug."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.content import CmsPageCreate
from pvs_api.services.cms import CmsService

router = APIRouter(prefix="/api/cms", tags=["cms"])


@router.get("")
async def list_pages(db: AsyncSession = Depends(get_db)):
    return [p.to_dict() for p in await CmsService(db).list_all()]


@router.get("/{client_slug}")
async def list_client_pages(client_slug: str, db: AsyncSession = Depends(get_db)):
    return [p.to_dict() for p in await CmsService(db).list_for_client(client_slug)]


@router.get("/{client_slug}/active")
async def list_active_client_pages(client_slug: str, db: AsyncSession = Depends(get_db)):
    pages = await CmsService(db).list_for_client(client_slug, active_only=True)
    return [p.to_dict() for p in pages]


@router.post("/{client_slug}")
async def add_page(
    client_slug: str, body: CmsPageCreate, db: AsyncSession = Depends(get_db),
):
    page = await CmsService(db).add(client_slug, body.model_dump())
    return {"message": "CMS item added", "data": [page.to_dict()]}
