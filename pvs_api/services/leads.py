"""Lead Service — public lead intake with duplicate suppression and alerting.

Invariants:
    - One pending (unacknowledged) lead per email, compared case-insensitively
    - A lead is stored before it is announced; an announce failure surfaces as 500
      with the row already persisted
    - Client IP = first X-Forwarded-For entry, else X-Real-IP
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.errors import ConflictError
from pvs_api.models.lead import Lead
from pvs_api.services import notifications

logger = logging.getLogger(__name__)

SUPPORT_EMAIL = "info@pixelversestudios.io"
SUPPORT_SUBJECT = "PixelVerse Studios — Lead Follow-Up"


class LeadAlreadySubmittedError(ConflictError):
    """Pending lead exists for this email; body carries follow-up instructions."""

    def __init__(self):
        super().__init__(
            "Lead already submitted",
            "Thanks for reaching out — we already have your inquiry on file. "
            "If you have any new details or questions, please email us directly "
            f"at {SUPPORT_EMAIL}.",
        )

    def to_response(self) -> dict:
        return {
            **super().to_response(),
            "supportEmail": SUPPORT_EMAIL,
            "subjectLine": SUPPORT_SUBJECT,
        }


def client_ip(forwarded_for: str | None, real_ip: str | None) -> str | None:
    header = forwarded_for or real_ip
    if not header:
        return None
    first = header.split(",")[0].strip()
    return first or None


class LeadService:
    """Lead persistence and notification."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_pending_by_email(self, email: str) -> Lead | None:
        result = await self.db.execute(
            select(Lead)
            .where(func.lower(Lead.email) == email.lower())
            .where(Lead.acknowledged.is_(False))
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def submit(
        self, values: dict, *, user_agent: str | None, ip: str | None,
    ) -> Lead:
        if await self.find_pending_by_email(values["email"]):
            raise LeadAlreadySubmittedError()
        lead = Lead(**values, user_agent=user_agent, ip=ip, acknowledged=False)
        self.db.add(lead)
        await self.db.commit()
        await self.db.refresh(lead)
        await notifications.notify_lead(lead.to_dict())
        logger.info("Lead inserted", extra={"lead_id": str(lead.id)})
        return lead
