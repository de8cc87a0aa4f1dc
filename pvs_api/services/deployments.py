"""Deployment Service — website releases and the indexing state of their URLs.

Invariants:
    - New deployments store every changed URL as pending
    - Every URL update recomputes and persists the deployment-level status/timestamps
    - Website history = non-indexed deployments of any age + anything from the last
      three calendar months, newest first
    - Reads always pass through normalize_deployment (legacy URL entries upgraded)

Design Decisions:
    - State transitions delegated to core/indexing.py (pure); this module only loads,
      saves and raises HTTP-facing errors
    - Release email failures are logged and swallowed: the record is already stored
"""

import calendar
import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core import indexing
from pvs_api.core.domain_types import IndexingStatus
from pvs_api.core.errors import BusinessRuleError, ResourceNotFoundError
from pvs_api.db.base import utcnow
from pvs_api.models.deployment import Deployment
from pvs_api.services import notifications
from pvs_api.services.websites import WebsiteService

logger = logging.getLogger(__name__)

HISTORY_MONTHS = 3


def months_ago(now: datetime, months: int) -> datetime:
    """Same wall-clock time `months` calendar months earlier (day clamped)."""
    month_index = now.month - 1 - months
    year = now.year + month_index // 12
    month = month_index % 12 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def _parse_ts(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _now_iso() -> str:
    return utcnow().isoformat()


class DeploymentService:
    """Website deployment persistence and indexing updates."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, values: dict) -> Deployment:
        website = await WebsiteService(self.db).get_or_404(values["website_id"])
        urls = [indexing.new_url_entry(u) for u in values["changed_urls"]]
        deployment = Deployment(
            website_id=website.id,
            changed_urls=urls,
            deploy_summary=values["deploy_summary"],
            internal_notes=values.get("internal_notes"),
            indexing_status=IndexingStatus.PENDING.value,
        )
        self.db.add(deployment)
        await self.db.commit()
        await self.db.refresh(deployment)
        logger.info(
            f"Deployment recorded for {website.domain}",
            extra={"resource_id": str(deployment.id), "website_id": str(website.id)},
        )
        if website.contact_email:
            try:
                await notifications.send_deployment_email(
                    to=website.contact_email,
                    website_title=website.title,
                    deployment_date=deployment.created_at,
                    summary_markdown=deployment.deploy_summary,
                    changed_urls=values["changed_urls"],
                )
            except Exception as e:
                logger.error(
                    f"Deployment email failed: {e}",
                    extra={"recipient": website.contact_email, "website_id": str(website.id)},
                )
        return deployment

    async def list_by_website(
        self, website_id: UUID, limit: int = 20, offset: int = 0,
    ) -> dict:
        website = await WebsiteService(self.db).get_or_404(website_id)
        cutoff = months_ago(utcnow(), HISTORY_MONTHS)
        query = (
            select(Deployment)
            .where(Deployment.website_id == website_id)
            .where(or_(
                Deployment.indexing_status.is_(None),
                Deployment.indexing_status != IndexingStatus.INDEXED.value,
                Deployment.created_at >= cutoff,
            ))
        )
        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))
        result = await self.db.execute(
            query.order_by(Deployment.created_at.desc()).limit(limit).offset(offset),
        )
        return {
            "website_id": website_id,
            "website_title": website.title,
            "total": total,
            "limit": limit,
            "offset": offset,
            "deployments": [
                indexing.normalize_deployment(d.to_dict())
                for d in result.scalars().all()
            ],
        }

    async def list_unindexed(self, limit: int = 50) -> list[dict]:
        result = await self.db.execute(
            select(Deployment)
            .where(or_(
                Deployment.indexing_status.is_(None),
                Deployment.indexing_status != IndexingStatus.INDEXED.value,
            ))
            .order_by(Deployment.created_at.desc())
            .limit(limit),
        )
        return [indexing.normalize_deployment(d.to_dict()) for d in result.scalars().all()]

    async def get_or_404(self, deployment_id: UUID) -> Deployment:
        deployment = await self.db.get(Deployment, deployment_id)
        if deployment is None:
            raise ResourceNotFoundError("Deployment", str(deployment_id))
        return deployment

    async def get_detail(self, deployment_id: UUID) -> dict:
        deployment = await self.get_or_404(deployment_id)
        website = deployment.website
        return {
            **indexing.normalize_deployment(deployment.to_dict()),
            "website": {"id": website.id, "title": website.title, "domain": website.domain},
            "client": website.client.summary() if website.client else None,
        }

    # ─── Indexing moves ─────────────────────────────────────────

    async def update_status(self, deployment_id: UUID, target: str) -> dict:
        """Move every URL of the deployment towards `target`."""
        deployment = await self.get_or_404(deployment_id)
        urls = indexing.normalize_changed_urls(deployment.changed_urls)
        return await self._save(deployment, indexing.apply_to_all(urls, target, _now_iso()))

    async def update_url_status(self, deployment_id: UUID, url: str, target: str) -> dict:
        deployment = await self.get_or_404(deployment_id)
        urls = indexing.normalize_changed_urls(deployment.changed_urls)
        entry = next((u for u in urls if u["url"] == url), None)
        if entry is None:
            raise ResourceNotFoundError("URL", url, message="URL not found in deployment")
        if entry["indexing_status"] == IndexingStatus.INDEXED.value:
            raise BusinessRuleError("Cannot change status: URL is already indexed")
        if entry["indexing_status"] == target:
            return indexing.normalize_deployment(deployment.to_dict())
        updated = indexing.apply_to_selected(urls, {url}, target, _now_iso())
        return await self._save(deployment, updated)

    async def update_urls_batch(
        self, deployment_id: UUID, selected: list[str], target: str,
    ) -> dict:
        deployment = await self.get_or_404(deployment_id)
        urls = indexing.normalize_changed_urls(deployment.changed_urls)
        known = {u["url"] for u in urls}
        missing = [u for u in selected if u not in known]
        if missing:
            raise ResourceNotFoundError(
                "URL", ", ".join(missing),
                message=f"URLs not found in deployment: {', '.join(missing)}",
            )
        updated = indexing.apply_to_selected(urls, set(selected), target, _now_iso())
        return await self._save(deployment, updated)

    async def _save(self, deployment: Deployment, urls: list[dict]) -> dict:
        fields = indexing.deployment_fields(urls)
        deployment.changed_urls = fields["changed_urls"]
        deployment.indexing_status = fields["indexing_status"]
        deployment.indexing_requested_at = _parse_ts(fields["indexing_requested_at"])
        deployment.indexed_at = _parse_ts(fields["indexed_at"])
        await self.db.commit()
        await self.db.refresh(deployment)
        return indexing.normalize_deployment(deployment.to_dict())
