"""CMS Service — per-client page content addressed by client slug."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.db.base import utcnow
from pvs_api.models.cms_page import CmsPage
from pvs_api.services.clients import ClientService


class CmsService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[CmsPage]:
        result = await self.db.execute(select(CmsPage))
        return list(result.scalars().all())

    async def list_for_client(self, client_slug: str, active_only: bool = False) -> list[CmsPage]:
        client_id = await ClientService(self.db).get_id_by_slug_or_404(client_slug)
        query = select(CmsPage).where(CmsPage.client_id == client_id)
        if active_only:
            query = query.where(CmsPage.active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, client_slug: str, values: dict) -> CmsPage:
        client_id = await ClientService(self.db).get_id_by_slug_or_404(client_slug)
        page = CmsPage(**values, client_id=client_id, updated_at=utcnow())
        self.db.add(page)
        await self.db.commit()
        await self.db.refresh(page)
        return page
