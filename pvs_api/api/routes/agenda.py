"""Agenda — personal task board ordered by priority.

Invariants:
    - PATCH /reorder registered before /{item_id} routes
    - status filter accepts the AgendaStatus values plus "active"
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.agenda import (
    AgendaItemCreate, AgendaItemUpdate, AgendaPriorityUpdate, AgendaReorder,
    AgendaStatusUpdate,
)
from pvs_api.services.agenda import AgendaService

router = APIRouter(prefix="/api/agenda", tags=["agenda"])

StatusFilter = Literal["pending", "in_progress", "completed", "active"]


@router.get("")
async def list_agenda(
    status_filter: StatusFilter | None = Query(None, alias="status"),
    category: str | None = None,
    include_completed: Literal["true", "false"] | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await AgendaService(db).list_items(
        status_filter, category, include_completed == "true", limit, offset,
    )


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_agenda_item(body: AgendaItemCreate, db: AsyncSession = Depends(get_db)):
    item = await AgendaService(db).create(body.model_dump())
    return item.to_dict()


@router.patch("/reorder")
async def reorder_agenda(body: AgendaReorder, db: AsyncSession = Depends(get_db)):
    items = await AgendaService(db).reorder(body.item_ids)
    return {
        "message": "Agenda reordered successfully",
        "items": [i.to_dict() for i in items],
    }


@router.get("/{item_id}")
async def get_agenda_item(item_id: UUID, db: AsyncSession = Depends(get_db)):
    item = await AgendaService(db).get_or_404(item_id)
    return item.to_dict()


@router.patch("/{item_id}")
async def update_agenda_item(
    item_id: UUID, body: AgendaItemUpdate, db: AsyncSession = Depends(get_db),
):
    item = await AgendaService(db).update(item_id, body.changes())
    return item.to_dict()


@router.patch("/{item_id}/status")
async def update_agenda_status(
    item_id: UUID, body: AgendaStatusUpdate, db: AsyncSession = Depends(get_db),
):
    item = await AgendaService(db).update_status(item_id, body.status.value)
    return item.to_dict()


@router.patch("/{item_id}/priority")
async def update_agenda_priority(
    item_id: UUID, body: AgendaPriorityUpdate, db: AsyncSession = Depends(get_db),
):
    item = await AgendaService(db).update_priority(item_id, body.priority)
    return item.to_dict()


@router.delete("/{item_id}")
async def delete_agenda_item(item_id: UUID, db: AsyncSession = Depends(get_db)):
    await AgendaService(db).delete(item_id)
    return {"message": "Agenda item deleted successfully"}
