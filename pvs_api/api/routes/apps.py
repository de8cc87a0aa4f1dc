"""Apps — client app CRUD and board status.

Invariants:
    - Listings nest the owning client as "clients": {id, firstname, lastname}
    - Duplicate app_slug → 409; empty PATCH body → 400
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.apps import AppCreate, AppUpdate
from pvs_api.schemas.websites import StatusUpdate
from pvs_api.services.apps import AppService, app_with_client

router = APIRouter(prefix="/api/apps", tags=["apps"])
client_router = APIRouter(prefix="/api/clients", tags=["apps"])


@router.get("")
async def list_apps(db: AsyncSession = Depends(get_db)):
    return [app_with_client(a) for a in await AppService(db).list_all()]


@router.get("/{app_id}")
async def get_app(app_id: UUID, db: AsyncSession = Depends(get_db)):
    app = await AppService(db).get_or_404(app_id)
    return app_with_client(app)


@client_router.get("/{client_id}/apps")
async def list_client_apps(client_id: UUID, db: AsyncSession = Depends(get_db)):
    return [a.to_dict() for a in await AppService(db).list_by_client(client_id)]


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_app(body: AppCreate, db: AsyncSession = Depends(get_db)):
    app = await AppService(db).create(body.model_dump())
    return app.to_dict()


@router.patch("/{app_id}")
async def update_app(
    app_id: UUID, body: AppUpdate, db: AsyncSession = Depends(get_db),
):
    app = await AppService(db).update(app_id, body.changes())
    return app.to_dict()


@router.patch("/{app_id}/status")
async def update_app_status(
    app_id: UUID, body: StatusUpdate, db: AsyncSession = Depends(get_db),
):
    app = await AppService(db).update_status(app_id, body.status)
    return app.to_dict()


@router.delete("/{app_id}")
async def delete_app(app_id: UUID, db: AsyncSession = Depends(get_db)):
    await AppService(db).delete(app_id)
    return {"message": "App deleted successfully"}
