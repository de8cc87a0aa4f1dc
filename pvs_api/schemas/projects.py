"""Project Board Schemas — cross-type priority reorder of websites and apps."""

from uuid import UUID

from pydantic import BaseModel, Field

from pvs_api.core.domain_types import ReorderItemType


class ReorderItem(BaseModel):
    id: UUID
    type: ReorderItemType
    priority: int


class ProjectReorder(BaseModel):
    items: list[ReorderItem] = Field(min_length=1)
