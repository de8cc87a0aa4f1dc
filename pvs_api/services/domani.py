"""Domani Service — read-mostly access to the Domani app datastore.

Invariants:
    - Every query runs on a get_domani_db session (DomaniBase tables only)
    - Lists are newest first and return {items, total, limit, offset}
    - Email lookups for unsubscribe use the lower-cased address
    - Profiles with deleted_at set are hidden unless include_deleted
"""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.errors import ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.domani import BetaFeedback, Profile, SupportRequest, WaitlistEntry

logger = logging.getLogger(__name__)

UNSUBSCRIBED = "unsubscribed"


class DomaniService:
    """Domani datastore queries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _page(self, query: Select, order_col, limit: int, offset: int) -> dict:
        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))
        result = await self.db.execute(
            query.order_by(order_col.desc()).limit(limit).offset(offset),
        )
        return {
            "items": [row.to_dict() for row in result.scalars().all()],
            "total": total,
            "limit": limit,
            "offset": offset,
        }

    async def list_feedback(
        self, category: str | None = None, status: str | None = None,
        platform: str | None = None, limit: int = 50, offset: int = 0,
    ) -> dict:
        query = select(BetaFeedback)
        if category:
            query = query.where(BetaFeedback.category == category)
        if status:
            query = query.where(BetaFeedback.status == status)
        if platform:
            query = query.where(BetaFeedback.platform == platform)
        return await self._page(query, BetaFeedback.created_at, limit, offset)

    async def list_support_requests(
        self, category: str | None = None, status: str | None = None,
        platform: str | None = None, limit: int = 50, offset: int = 0,
    ) -> dict:
        query = select(SupportRequest)
        if category:
            query = query.where(SupportRequest.category == category)
        if status:
            query = query.where(SupportRequest.status == status)
        if platform:
            query = query.where(SupportRequest.platform == platform)
        return await self._page(query, SupportRequest.created_at, limit, offset)

    async def list_waitlist(
        self, status: str | None = None, confirmed: bool | None = None,
        limit: int = 50, offset: int = 0,
    ) -> dict:
        query = select(WaitlistEntry)
        if status:
            query = query.where(WaitlistEntry.status == status)
        if confirmed is not None:
            query = query.where(WaitlistEntry.confirmed == confirmed)
        return await self._page(query, WaitlistEntry.created_at, limit, offset)

    async def list_users(
        self, tier: str | None = None, cohort: str | None = None,
        include_deleted: bool = False, limit: int = 50, offset: int = 0,
    ) -> dict:
        query = select(Profile)
        if tier:
            query = query.where(Profile.tier == tier)
        if cohort:
            query = query.where(Profile.signup_cohort == cohort)
        if not include_deleted:
            query = query.where(Profile.deleted_at.is_(None))
        return await self._page(query, Profile.created_at, limit, offset)

    async def unsubscribe_from_waitlist(self, email: str) -> WaitlistEntry:
        result = await self.db.execute(
            select(WaitlistEntry).where(WaitlistEntry.email == email.lower()),
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise ResourceNotFoundError(
                "Waitlist entry", email, message="Email not found on waitlist",
            )
        entry.status = UNSUBSCRIBED
        await self.db.commit()
        logger.info("Waitlist unsubscribe", extra={"recipient": entry.email})
        return entry

    async def unsubscribe_user(self, email: str) -> Profile:
        result = await self.db.execute(
            select(Profile)
            .where(Profile.email == email.lower())
            .where(Profile.deleted_at.is_(None)),
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise ResourceNotFoundError(
                "User", email, message="User not found or already unsubscribed",
            )
        profile.deleted_at = utcnow()
        await self.db.commit()
        logger.info("Domani user unsubscribed", extra={"recipient": profile.email})
        return profile
