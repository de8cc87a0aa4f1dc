"""Domani — beta feedback, support, waitlist and user views over the isolated Domani datastore.

Invariants:
    - Every query uses get_domani_db, never the primary session
    - Lists answer {items, total, limit, offset}, newest first, limit 1..100
    - The beta-launch blast reports per-recipient results and never aborts midway
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import FeedbackCategory, Platform, SignupCohort, UserTier
from pvs_api.infrastructure.database import get_domani_db
from pvs_api.schemas.domani import BetaLaunchRequest, UnsubscribeRequest
from pvs_api.services import notifications
from pvs_api.services.domani import DomaniService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/domani", tags=["domani"])


def _value(member) -> str | None:
    return member.value if member is not None else None


@router.get("/feedback")
async def list_feedback(
    category: FeedbackCategory | None = None,
    status: str | None = None,
    platform: Platform | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_domani_db),
):
    return await DomaniService(db).list_feedback(
        _value(category), status, _value(platform), limit, offset,
    )


@router.get("/support")
async def list_support_requests(
    category: str | None = None,
    status: str | None = None,
    platform: Platform | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_domani_db),
):
    return await DomaniService(db).list_support_requests(
        category, status, _value(platform), limit, offset,
    )


@router.get("/waitlist")
async def list_waitlist(
    status: str | None = None,
    confirmed: bool | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_domani_db),
):
    return await DomaniService(db).list_waitlist(status, confirmed, limit, offset)


@router.get("/users")
async def list_users(
    tier: UserTier | None = None,
    cohort: SignupCohort | None = None,
    include_deleted: bool = False,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_domani_db),
):
    return await DomaniService(db).list_users(
        _value(tier), _value(cohort), include_deleted, limit, offset,
    )


@router.post("/waitlist/unsubscribe")
async def unsubscribe_waitlist(
    body: UnsubscribeRequest, db: AsyncSession = Depends(get_domani_db),
):
    entry = await DomaniService(db).unsubscribe_from_waitlist(body.email)
    return {"message": "Successfully unsubscribed from waitlist", "email": entry.email}


@router.post("/users/unsubscribe")
async def unsubscribe_user(
    body: UnsubscribeRequest, db: AsyncSession = Depends(get_domani_db),
):
    profile = await DomaniService(db).unsubscribe_user(body.email)
    return {"message": "Successfully unsubscribed", "email": profile.email}


@router.post("/beta-launch/send")
async def send_beta_launch(body: BetaLaunchRequest):
    """Email the beta store links to every recipient, pausing between sends."""
    summary = await notifications.send_beta_launch_blast(
        [r.model_dump() for r in body.recipients],
        ios_link=body.ios_link,
        android_link=body.android_link,
        delay_ms=body.delay_between_emails,
    )
    logger.info(
        f"Beta launch blast: {summary['sent']}/{summary['total']} sent",
    )
    return summary
