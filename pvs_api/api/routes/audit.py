"""Audit Requests — free website audit intake."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.audit import AuditRequestCreate
from pvs_api.services.audit import AuditRequestService

router = APIRouter(prefix="/api/audit", tags=["audit"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_audit_request(
    body: AuditRequestCreate, db: AsyncSession = Depends(get_db),
):
    """Store the request, alert Discord, then email the audit recipients."""
    record = await AuditRequestService(db).create(body.model_dump())
    return {"id": record.id, "status": record.status, "created_at": record.created_at}
