"""Client Service — CRUD over the clients table plus slug/id lookups.

Invariants:
    - client_slug uniqueness checked before insert (409, not a driver error)
    - Every write refreshes updated_at
    - Lookups return None; *_or_404 variants raise ResourceNotFoundError
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.errors import ConflictError, ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.client import Client

logger = logging.getLogger(__name__)


class ClientService:
    """Client persistence operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Client]:
        result = await self.db.execute(select(Client))
        return list(result.scalars().all())

    async def find_by_id(self, client_id: UUID) -> Client | None:
        return await self.db.get(Client, client_id)

    async def get_or_404(self, client_id: UUID) -> Client:
        client = await self.find_by_id(client_id)
        if client is None:
            raise ResourceNotFoundError("Client", str(client_id))
        return client

    async def get_id_by_slug(self, slug: str) -> UUID | None:
        result = await self.db.execute(
            select(Client.id).where(Client.client_slug == slug),
        )
        return result.scalar_one_or_none()

    async def get_id_by_slug_or_404(self, slug: str) -> UUID:
        client_id = await self.get_id_by_slug(slug)
        if client_id is None:
            raise ResourceNotFoundError("Client", slug)
        return client_id

    async def create(self, values: dict) -> Client:
        slug = values.get("client_slug")
        if slug and await self.get_id_by_slug(slug):
            raise ConflictError("Client slug already exists")
        client = Client(**values, updated_at=utcnow())
        self.db.add(client)
        await self.db.commit()
        await self.db.refresh(client)
        logger.info(
            f"Client created: {client.client}",
            extra={"resource_id": str(client.id)},
        )
        return client

    async def update(self, client_id: UUID, changes: dict) -> Client:
        client = await self.get_or_404(client_id)
        for field, value in changes.items():
            setattr(client, field, value)
        client.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(client)
        return client

    async def delete(self, client_id: UUID) -> Client:
        client = await self.get_or_404(client_id)
        await self.db.delete(client)
        await self.db.commit()
        logger.info("Client deleted", extra={"resource_id": str(client_id)})
        return client
