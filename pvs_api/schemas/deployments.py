"""Deployment Schemas — website releases (URL indexing) and app releases.

Invariants:
    - changed_urls is a non-empty list of valid URLs
    - Indexing moves accept only requested | indexed (pending is never a target)
    - commit_sha, when given, is 7-40 characters
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from pvs_api.core.domain_types import AppDeploymentStatus, Environment
from pvs_api.schemas.common import NonEmptyStr, UrlStr

IndexingTarget = Literal["requested", "indexed"]


# ─── Website deployments ────────────────────────────────────────

class DeploymentCreate(BaseModel):
    website_id: UUID
    changed_urls: list[UrlStr] = Field(min_length=1)
    deploy_summary: NonEmptyStr
    internal_notes: str | None = None


class DeploymentStatusUpdate(BaseModel):
    status: IndexingTarget


class UrlStatusUpdate(BaseModel):
    url: NonEmptyStr
    status: IndexingTarget


class UrlBatchStatusUpdate(BaseModel):
    urls: list[NonEmptyStr] = Field(min_length=1)
    status: IndexingTarget


class UrlIndexed(BaseModel):
    url: NonEmptyStr


# ─── App deployments ────────────────────────────────────────────

class AppDeploymentCreate(BaseModel):
    app_id: UUID
    version: NonEmptyStr
    environment: Environment = Environment.PRODUCTION
    deploy_summary: NonEmptyStr
    commit_sha: str | None = Field(None, min_length=7, max_length=40)
    commit_url: UrlStr | None = None
    internal_notes: str | None = None
    deployed_by: str | None = None


class AppDeploymentStatusUpdate(BaseModel):
    status: AppDeploymentStatus
    rollback_reason: str | None = None
