"""Clients — studio customer CRUD.

Invariants:
    - POST /new answers 201 with [row] (list, as the datastore returns inserts)
    - PUT answers 201 with the updated row (kept from the public contract)
    - DELETE answers 200 with the deleted row
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.clients import ClientCreate, ClientUpdate
from pvs_api.services.clients import ClientService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("")
async def list_clients(db: AsyncSession = Depends(get_db)):
    return [c.to_dict() for c in await ClientService(db).list_all()]


@router.get("/{client_id}")
async def get_client(client_id: UUID, db: AsyncSession = Depends(get_db)):
    client = await ClientService(db).get_or_404(client_id)
    return client.to_dict()


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_client(body: ClientCreate, db: AsyncSession = Depends(get_db)):
    client = await ClientService(db).create(body.model_dump())
    return [client.to_dict()]


@router.put("/{client_id}", status_code=status.HTTP_201_CREATED)
async def update_client(
    client_id: UUID, body: ClientUpdate, db: AsyncSession = Depends(get_db),
):
    client = await ClientService(db).update(client_id, body.changes())
    return client.to_dict()


@router.delete("/{client_id}")
async def delete_client(client_id: UUID, db: AsyncSession = Depends(get_db)):
    client = await ClientService(db).delete(client_id)
    return client.to_dict()
