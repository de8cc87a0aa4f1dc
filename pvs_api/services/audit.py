"""Audit Request Service — stores free-audit requests and alerts the studio."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.models.audit_request import AuditRequest
from pvs_api.services import notifications

logger = logging.getLogger(__name__)

PENDING = "pending"


class AuditRequestService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, values: dict) -> AuditRequest:
        """Insert, alert Discord (raises), then email audit recipients (best-effort)."""
        record = AuditRequest(**values, status=PENDING)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        row = record.to_dict()
        await notifications.alert_audit_request(row)
        await notifications.send_audit_request_email(row)
        logger.info("Audit request stored", extra={"resource_id": str(record.id)})
        return record
