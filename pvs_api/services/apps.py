"""App Service — app CRUD, slug uniqueness and board priority.

Invariants:
    - app_slug unique across apps; update checks exclude the app itself
    - List responses nest the owning client as "clients": {id, firstname, lastname}
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.errors import ConflictError, ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.app import App
from pvs_api.services.clients import ClientService
from pvs_api.services.websites import ensure_project_status

logger = logging.getLogger(__name__)

_SLUG_TAKEN = ("App slug already exists", "An app with this slug already exists.")


def app_with_client(app: App) -> dict:
    return {**app.to_dict(), "clients": app.client.summary() if app.client else None}


class AppService:
    """App persistence operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[App]:
        result = await self.db.execute(select(App).order_by(App.created_at.desc()))
        return list(result.scalars().all())

    async def list_by_client(self, client_id: UUID) -> list[App]:
        result = await self.db.execute(
            select(App)
            .where(App.client_id == client_id)
            .order_by(App.created_at.desc()),
        )
        return list(result.scalars().all())

    async def find_by_id(self, app_id: UUID) -> App | None:
        return await self.db.get(App, app_id)

    async def get_or_404(self, app_id: UUID) -> App:
        app = await self.find_by_id(app_id)
        if app is None:
            raise ResourceNotFoundError("App", str(app_id))
        return app

    async def find_by_slug(
        self, slug: str, exclude_id: UUID | None = None,
    ) -> App | None:
        query = select(App).where(App.app_slug == slug)
        if exclude_id:
            query = query.where(App.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def create(self, values: dict) -> App:
        if await ClientService(self.db).find_by_id(values["client_id"]) is None:
            raise ResourceNotFoundError(
                "Client", str(values["client_id"]),
                detail="The specified client_id does not exist.",
            )
        if await self.find_by_slug(values["app_slug"]):
            raise ConflictError(*_SLUG_TAKEN)
        if values.get("status") is not None:
            ensure_project_status(values["status"])
        app = App(**{k: v for k, v in values.items() if v is not None})
        self.db.add(app)
        await self.db.commit()
        await self.db.refresh(app)
        logger.info(f"App created: {app.app_slug}", extra={"resource_id": str(app.id)})
        return app

    async def update(self, app_id: UUID, changes: dict) -> App:
        app = await self.get_or_404(app_id)
        if changes.get("app_slug") and await self.find_by_slug(changes["app_slug"], app_id):
            raise ConflictError(*_SLUG_TAKEN)
        if "status" in changes:
            ensure_project_status(changes["status"])
        return await self._apply(app, changes)

    async def update_status(self, app_id: UUID, status: str) -> App:
        ensure_project_status(status)
        app = await self.get_or_404(app_id)
        return await self._apply(app, {"status": status})

    async def update_priority(self, app_id: UUID, priority: int) -> App:
        app = await self.get_or_404(app_id)
        return await self._apply(app, {"priority": priority}, commit=False)

    async def delete(self, app_id: UUID) -> None:
        app = await self.get_or_404(app_id)
        await self.db.delete(app)
        await self.db.commit()
        logger.info("App deleted", extra={"resource_id": str(app_id)})

    async def _apply(self, app: App, changes: dict, commit: bool = True) -> App:
        for field, value in changes.items():
            setattr(app, field, value)
        app.updated_at = utcnow()
        if commit:
            await self.db.commit()
            await self.db.refresh(app)
        return app
