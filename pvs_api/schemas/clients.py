"""Client Schemas — request bodies for /api/clients and /api/internal/clients."""

from typing import ClassVar

from pydantic import BaseModel, EmailStr

from pvs_api.schemas.common import NonEmptyStr, PartialUpdate


class ClientCreate(BaseModel):
    client: NonEmptyStr
    client_slug: NonEmptyStr
    active: bool
    firstname: str | None = None
    lastname: str | None = None
    email: EmailStr | None = None


class InternalClientCreate(BaseModel):
    """Internal tooling creates bare clients: name and active flag only."""
    client: NonEmptyStr
    active: bool


class ClientUpdate(PartialUpdate):
    _non_nullable: ClassVar[frozenset[str]] = frozenset({"client", "active"})

    client: NonEmptyStr | None = None
    active: bool | None = None
