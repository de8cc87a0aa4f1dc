"""Agenda Service — personal task board ordered by priority.

Invariants:
    - priority ascending is board order (0 = top); new items without a priority
      go to the end (max + 1)
    - completed_at set on transition to completed, cleared on any other status
    - description is sanitized rich text
    - Without a status filter, completed items are hidden unless include_completed
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import ACTIVE_AGENDA_STATUSES, AgendaStatus
from pvs_api.core.errors import ResourceNotFoundError
from pvs_api.core.html import sanitize_rich_text
from pvs_api.db.base import utcnow
from pvs_api.models.agenda_item import AgendaItem

logger = logging.getLogger(__name__)

ACTIVE_FILTER = "active"


class AgendaService:
    """Agenda persistence operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_items(
        self, status: str | None = None, category: str | None = None,
        include_completed: bool = False, limit: int = 50, offset: int = 0,
    ) -> dict:
        query = select(AgendaItem)
        if status == ACTIVE_FILTER:
            query = query.where(
                AgendaItem.status.in_([s.value for s in ACTIVE_AGENDA_STATUSES]),
            )
        elif status:
            query = query.where(AgendaItem.status == status)
        elif not include_completed:
            query = query.where(AgendaItem.status != AgendaStatus.COMPLETED.value)
        if category:
            query = query.where(AgendaItem.category == category)
        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))
        result = await self.db.execute(
            query.order_by(AgendaItem.priority.asc(), AgendaItem.created_at.asc())
            .limit(limit).offset(offset),
        )
        return {"items": [i.to_dict() for i in result.scalars().all()], "total": total}

    async def get_or_404(self, item_id: UUID) -> AgendaItem:
        item = await self.db.get(AgendaItem, item_id)
        if item is None:
            raise ResourceNotFoundError("Agenda item", str(item_id))
        return item

    async def _next_priority(self) -> int:
        highest = await self.db.scalar(select(func.max(AgendaItem.priority)))
        return 0 if highest is None else highest + 1

    async def create(self, values: dict) -> AgendaItem:
        values = dict(values)
        if values.get("description") is not None:
            values["description"] = sanitize_rich_text(values["description"])
        if values.get("priority") is None:
            values["priority"] = await self._next_priority()
        item = AgendaItem(**values)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        logger.info(f"Agenda item created: {item.name}", extra={"resource_id": str(item.id)})
        return item

    async def update(self, item_id: UUID, changes: dict) -> AgendaItem:
        item = await self.get_or_404(item_id)
        if changes.get("description") is not None:
            changes = {**changes, "description": sanitize_rich_text(changes["description"])}
        return await self._apply(item, changes)

    async def update_status(self, item_id: UUID, status: str) -> AgendaItem:
        item = await self.get_or_404(item_id)
        completed_at = utcnow() if status == AgendaStatus.COMPLETED.value else None
        return await self._apply(item, {"status": status, "completed_at": completed_at})

    async def update_priority(self, item_id: UUID, priority: int) -> AgendaItem:
        item = await self.get_or_404(item_id)
        return await self._apply(item, {"priority": priority})

    async def reorder(self, item_ids: list[UUID]) -> list[AgendaItem]:
        """Set priorities to list positions; every id must exist first."""
        items = []
        for item_id in item_ids:
            item = await self.db.get(AgendaItem, item_id)
            if item is None:
                raise ResourceNotFoundError(
                    "Agenda item", str(item_id),
                    detail=f"Item with ID {item_id} not found",
                )
            items.append(item)
        now = utcnow()
        for position, item in enumerate(items):
            item.priority = position
            item.updated_at = now
        await self.db.commit()
        for item in items:
            await self.db.refresh(item)
        return items

    async def delete(self, item_id: UUID) -> None:
        item = await self.get_or_404(item_id)
        await self.db.delete(item)
        await self.db.commit()

    async def _apply(self, item: AgendaItem, changes: dict) -> AgendaItem:
        for field, value in changes.items():
            setattr(item, field, value)
        item.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(item)
        return item
