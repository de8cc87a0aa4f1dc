"""Internal Clients — the same client CRUD wrapped in message envelopes for internal tooling."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.clients import ClientUpdate, InternalClientCreate
from pvs_api.services.clients import ClientService

router = APIRouter(prefix="/api/internal/clients", tags=["internal"])


@router.get("")
async def list_clients(db: AsyncSession = Depends(get_db)):
    return {"clients": [c.to_dict() for c in await ClientService(db).list_all()]}


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_client(
    body: InternalClientCreate, db: AsyncSession = Depends(get_db),
):
    client = await ClientService(db).create(body.model_dump())
    return {"message": "Client created successfully", "data": [client.to_dict()]}


@router.put("/{client_id}", status_code=status.HTTP_201_CREATED)
async def update_client(
    client_id: UUID, body: ClientUpdate, db: AsyncSession = Depends(get_db),
):
    client = await ClientService(db).update(client_id, body.changes())
    return {"message": "Client updated successfully", "data": client.to_dict()}


@router.delete("/{client_id}")
async def delete_client(client_id: UUID, db: AsyncSession = Depends(get_db)):
    client = await ClientService(db).delete(client_id)
    return {"message": "Client deleted successfully", "data": [client.to_dict()]}
