"""Leads — public lead intake form.

Invariants:
    - Only POST is served; any other method → 405 {"error": "Method Not Allowed"}
    - Invalid bodies → 400 {"error": "Invalid payload", "details": {formErrors, fieldErrors}}
    - A pending lead for the same email → 409 with support contact details

Design Decisions:
    - Body parsed here instead of by FastAPI: the lead form has its own 400 shape
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.infrastructure.database import get_db
from pvs_api.schemas.leads import LeadCreate, flatten_errors
from pvs_api.services.leads import LeadService, client_ip

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/leads", tags=["leads"])


def _invalid_payload(details: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid payload", "details": details},
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_lead(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        payload = await request.json()
    except ValueError:
        return _invalid_payload({"formErrors": ["Invalid JSON"], "fieldErrors": {}})
    try:
        body = LeadCreate.model_validate(payload)
    except ValidationError as exc:
        logger.warning(f"Lead payload rejected: {exc.error_count()} errors")
        return _invalid_payload(flatten_errors(exc))

    values = body.model_dump(mode="json", exclude={"honeypot"})
    lead = await LeadService(db).submit(
        values,
        user_agent=request.headers.get("user-agent"),
        ip=client_ip(
            request.headers.get("x-forwarded-for"),
            request.headers.get("x-real-ip"),
        ),
    )
    return {
        "id": lead.id,
        "createdAt": lead.created_at,
        "acknowledged": lead.acknowledged,
    }


@router.api_route(
    "", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False,
)
async def lead_method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method Not Allowed"},
        headers={"Allow": "POST"},
    )
