"""Websites — client website CRUD, SEO focus and board status.

Invariants:
    - Create error order: unknown client (404) → duplicate domain (409) → duplicate slug (409)
    - Partial updates need at least one field (400)
    - Status values outside ProjectStatus → 400 "Invalid status"

Design Decisions:
    - /api/clients/{client_id}/websites lives here (client_router): the listing
      is a website query, only the URL is client-scoped
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.websites import (
    SeoFocusUpdate, StatusUpdate, WebsiteCreate, WebsiteUpdate,
)
from pvs_api.services.websites import WebsiteService

router = APIRouter(prefix="/api/websites", tags=["websites"])
client_router = APIRouter(prefix="/api/clients", tags=["websites"])


@router.get("")
async def list_websites(db: AsyncSession = Depends(get_db)):
    return [w.to_dict() for w in await WebsiteService(db).list_all()]


@router.get("/{website_id}")
async def get_website(website_id: UUID, db: AsyncSession = Depends(get_db)):
    website = await WebsiteService(db).get_or_404(website_id)
    return website.to_dict()


@client_router.get("/{client_id}/websites")
async def list_client_websites(client_id: UUID, db: AsyncSession = Depends(get_db)):
    return [w.to_dict() for w in await WebsiteService(db).list_by_client(client_id)]


@router.post("/new", status_code=status.HTTP_201_CREATED)
async def create_website(body: WebsiteCreate, db: AsyncSession = Depends(get_db)):
    website = await WebsiteService(db).create(body.model_dump())
    return website.to_dict()


@router.patch("/{website_id}")
async def update_website(
    website_id: UUID, body: WebsiteUpdate, db: AsyncSession = Depends(get_db),
):
    website = await WebsiteService(db).update(website_id, body.changes())
    return website.to_dict()


@router.patch("/{website_id}/seo-focus")
async def update_seo_focus(
    website_id: UUID, body: SeoFocusUpdate, db: AsyncSession = Depends(get_db),
):
    website = await WebsiteService(db).update_seo_focus(website_id, body.seo_focus)
    return website.to_dict()


@router.patch("/{website_id}/status")
async def update_website_status(
    website_id: UUID, body: StatusUpdate, db: AsyncSession = Depends(get_db),
):
    website = await WebsiteService(db).update_status(website_id, body.status)
    return website.to_dict()
