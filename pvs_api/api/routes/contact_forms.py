"""Contact Forms — website contact submissions forwarded to the site owner."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.content import ContactFormCreate
from pvs_api.services.contact_forms import ContactFormService

router = APIRouter(prefix="/api/v1/contact-forms", tags=["contact-forms"])


@router.get("")
async def list_submissions(db: AsyncSession = Depends(get_db)):
    return [s.to_dict() for s in await ContactFormService(db).list_all()]


@router.post("/{website_id}", status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    website_id: UUID, body: ContactFormCreate, db: AsyncSession = Depends(get_db),
):
    submission = await ContactFormService(db).submit(website_id, body.model_dump())
    return [submission.to_dict()]
