"""Website Service — website CRUD, uniqueness checks and board priority.

Invariants:
    - Create checks run in order: client exists (404), domain free (409), slug free (409)
    - Update uniqueness checks exclude the website being updated
    - status must be a ProjectStatus value (400 "Invalid status")
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import PROJECT_STATUSES, invalid_project_status_detail
from pvs_api.core.errors import BusinessRuleError, ConflictError, ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.website import Website
from pvs_api.services.clients import ClientService

logger = logging.getLogger(__name__)

_DOMAIN_TAKEN = ("Domain already exists", "A website with this domain already exists.")
_SLUG_TAKEN = ("Website slug already exists", "A website with this slug already exists.")


def ensure_project_status(status: str) -> None:
    if status not in PROJECT_STATUSES:
        raise BusinessRuleError("Invalid status", invalid_project_status_detail())


class WebsiteService:
    """Website persistence operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Website]:
        result = await self.db.execute(
            select(Website).order_by(Website.created_at.desc()),
        )
        return list(result.scalars().all())

    async def list_by_client(self, client_id: UUID) -> list[Website]:
        result = await self.db.execute(
            select(Website)
            .where(Website.client_id == client_id)
            .order_by(Website.created_at.desc()),
        )
        return list(result.scalars().all())

    async def find_by_id(self, website_id: UUID) -> Website | None:
        return await self.db.get(Website, website_id)

    async def get_or_404(self, website_id: UUID) -> Website:
        website = await self.find_by_id(website_id)
        if website is None:
            raise ResourceNotFoundError("Website", str(website_id))
        return website

    async def find_by_domain(
        self, domain: str, exclude_id: UUID | None = None,
    ) -> Website | None:
        query = select(Website).where(Website.domain == domain)
        if exclude_id:
            query = query.where(Website.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def find_by_slug(
        self, slug: str, exclude_id: UUID | None = None,
    ) -> Website | None:
        query = select(Website).where(Website.website_slug == slug)
        if exclude_id:
            query = query.where(Website.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def get_details_for_email(
        self, website_id: UUID,
    ) -> tuple[str | None, str] | None:
        """(contact_email, title) for notification emails."""
        website = await self.find_by_id(website_id)
        if website is None:
            return None
        return website.contact_email, website.title

    async def _ensure_unique(
        self, domain: str | None, slug: str | None, exclude_id: UUID | None = None,
    ) -> None:
        if domain and await self.find_by_domain(domain, exclude_id):
            raise ConflictError(*_DOMAIN_TAKEN)
        if slug and await self.find_by_slug(slug, exclude_id):
            raise ConflictError(*_SLUG_TAKEN)

    async def create(self, values: dict) -> Website:
        if await ClientService(self.db).find_by_id(values["client_id"]) is None:
            raise ResourceNotFoundError(
                "Client", str(values["client_id"]),
                detail="The specified client_id does not exist.",
            )
        await self._ensure_unique(values["domain"], values["website_slug"])
        website = Website(**values)
        self.db.add(website)
        await self.db.commit()
        await self.db.refresh(website)
        logger.info(
            f"Website created: {website.domain}",
            extra={"website_id": str(website.id)},
        )
        return website

    async def update(self, website_id: UUID, changes: dict) -> Website:
        website = await self.get_or_404(website_id)
        if "status" in changes:
            ensure_project_status(changes["status"])
        await self._ensure_unique(
            changes.get("domain"), changes.get("website_slug"), website_id,
        )
        return await self._apply(website, changes)

    async def update_seo_focus(self, website_id: UUID, seo_focus: str) -> Website:
        website = await self.get_or_404(website_id)
        return await self._apply(website, {"seo_focus": seo_focus})

    async def update_status(self, website_id: UUID, status: str) -> Website:
        ensure_project_status(status)
        website = await self.get_or_404(website_id)
        return await self._apply(website, {"status": status})

    async def update_priority(self, website_id: UUID, priority: int) -> Website:
        website = await self.get_or_404(website_id)
        return await self._apply(website, {"priority": priority}, commit=False)

    async def _apply(
        self, website: Website, changes: dict, commit: bool = True,
    ) -> Website:
        for field, value in changes.items():
            setattr(website, field, value)
        website.updated_at = utcnow()
        if commit:
            await self.db.commit()
            await self.db.refresh(website)
        return website
