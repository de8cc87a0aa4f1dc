"""App Schemas — creation and partial update of client apps."""

from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, EmailStr

from pvs_api.schemas.common import NonEmptyStr, PartialUpdate, SlugStr, UrlStr


class AppCreate(BaseModel):
    name: NonEmptyStr
    app_slug: SlugStr
    client_id: UUID
    description: str | None = None
    repository_url: UrlStr | None = None
    tech_stack: list[str] | None = None
    contact_email: EmailStr | None = None
    active: bool | None = None
    status: str | None = None
    priority: int | None = None


class AppUpdate(PartialUpdate):
    _non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "app_slug", "active", "status", "priority"},
    )

    name: NonEmptyStr | None = None
    app_slug: SlugStr | None = None
    description: str | None = None
    repository_url: UrlStr | None = None
    tech_stack: list[str] | None = None
    contact_email: EmailStr | None = None
    active: bool | None = None
    status: str | None = None
    priority: int | None = None
