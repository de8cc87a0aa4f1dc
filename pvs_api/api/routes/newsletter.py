"""Newsletter — per-client subscriber signups."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.content import NewsletterSignup
from pvs_api.services.newsletter import NewsletterService

router = APIRouter(prefix="/api/newsletter", tags=["newsletter"])


@router.get("/all")
async def list_subscribers(db: AsyncSession = Depends(get_db)):
    subscribers = await NewsletterService(db).list_all()
    return {"newsletter": [s.to_dict() for s in subscribers]}


@router.post("/{client_slug}", status_code=status.HTTP_201_CREATED)
async def subscribe(
    client_slug: str, body: NewsletterSignup, db: AsyncSession = Depends(get_db),
):
    await NewsletterService(db).subscribe(
        client_slug, first_name=body.first_name,
        last_name=body.last_name, email=body.email,
    )
    return {"message": "Subscriber added."}
