"""Contact Form Service — stores website contact submissions and emails the owner.

Invariants:
    - Unknown website -> 404 before anything is stored
    - The owner email is best-effort (notifications logs and swallows failures)
    - Websites without a contact_email store the submission and skip the email
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.errors import ResourceNotFoundError
from pvs_api.models.contact_form import ContactFormSubmission
from pvs_api.services import notifications
from pvs_api.services.websites import WebsiteService

logger = logging.getLogger(__name__)


class ContactFormService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[ContactFormSubmission]:
        result = await self.db.execute(select(ContactFormSubmission))
        return list(result.scalars().all())

    async def submit(self, website_id: UUID, values: dict) -> ContactFormSubmission:
        details = await WebsiteService(self.db).get_details_for_email(website_id)
        if details is None:
            raise ResourceNotFoundError("Website", str(website_id))
        contact_email, title = details
        submission = ContactFormSubmission(**values, website_id=website_id)
        self.db.add(submission)
        await self.db.commit()
        await self.db.refresh(submission)
        if contact_email:
            await notifications.send_contact_submission_email(
                to=contact_email, website_title=title,
                fullname=submission.fullname, email=submission.email,
                phone=submission.phone, data=submission.data,
            )
        else:
            logger.warning(
                "Website has no contact email; submission not forwarded",
                extra={"website_id": str(website_id)},
            )
        return submission
