"""Agenda Schemas — personal task board bodies.

Invariants:
    - priority >= 0 (0 is the top of the board)
    - reorder requires a non-empty list of item ids
"""

from datetime import datetime
from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, Field

from pvs_api.core.domain_types import AgendaStatus
from pvs_api.schemas.common import NonEmptyStr, PartialUpdate


class AgendaItemCreate(BaseModel):
    name: NonEmptyStr
    description: str | None = None
    category: str | None = None
    due_date: datetime | None = None
    priority: int | None = Field(None, ge=0)


class AgendaItemUpdate(PartialUpdate):
    _non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: NonEmptyStr | None = None
    description: str | None = None
    category: str | None = None
    due_date: datetime | None = None


class AgendaStatusUpdate(BaseModel):
    status: AgendaStatus


class AgendaPriorityUpdate(BaseModel):
    priority: int = Field(ge=0)


class AgendaReorder(BaseModel):
    item_ids: list[UUID] = Field(min_length=1)
