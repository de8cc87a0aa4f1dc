"""Website Schemas — creation, partial update, SEO focus and status bodies.

Invariants:
    - website_slug matches ^[a-z0-9-]+$
    - status is validated in the service (custom "Invalid status" error body)
"""

from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, EmailStr

from pvs_api.schemas.common import NonEmptyStr, PartialUpdate, SlugStr


class WebsiteCreate(BaseModel):
    title: NonEmptyStr
    domain: NonEmptyStr
    website_slug: SlugStr
    client_id: UUID
    type: str | None = None
    features: str | None = None
    contact_email: EmailStr | None = None
    seo_focus: dict[str, Any] | None = None


class WebsiteUpdate(PartialUpdate):
    _non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "domain", "website_slug", "status", "priority"},
    )

    title: NonEmptyStr | None = None
    domain: NonEmptyStr | None = None
    website_slug: SlugStr | None = None
    type: str | None = None
    features: str | None = None
    contact_email: EmailStr | None = None
    seo_focus: dict[str, Any] | str | None = None
    status: str | None = None
    priority: int | None = None


class SeoFocusUpdate(BaseModel):
    seo_focus: str


class StatusUpdate(BaseModel):
    """Shared by websites and apps."""
    status: str
