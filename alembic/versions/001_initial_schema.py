"""Initial schema — clients, websites, apps, deployments, agenda, intake and legacy tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
    return columns


def _client_fk() -> sa.Column:
    return sa.Column(
        "client_id", UUID(as_uuid=True),
        sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("client", sa.String(200), nullable=False),
        sa.Column("client_slug", sa.String(200), nullable=True, unique=True, index=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("firstname", sa.String(100), nullable=True),
        sa.Column("lastname", sa.String(100), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "websites",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _client_fk(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("domain", sa.String(255), nullable=False, unique=True),
        sa.Column("website_slug", sa.String(200), nullable=False, unique=True),
        sa.Column("type", sa.String(100), nullable=True),
        sa.Column("features", sa.String, nullable=True),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("seo_focus", sa.JSON, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="planning"),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "apps",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _client_fk(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("app_slug", sa.String(200), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("repository_url", sa.String(500), nullable=True),
        sa.Column("tech_stack", sa.JSON, nullable=True),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("status", sa.String(20), nullable=False, server_default="planning"),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "app_deployments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "app_id", UUID(as_uuid=True),
            sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("version", sa.String(100), nullable=False),
        sa.Column("environment", sa.String(20), nullable=False, server_default="production"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("deploy_summary", sa.Text, nullable=False),
        sa.Column("commit_sha", sa.String(40), nullable=True),
        sa.Column("commit_url", sa.String(500), nullable=True),
        sa.Column("internal_notes", sa.Text, nullable=True),
        sa.Column("deployed_by", sa.String(200), nullable=True),
        sa.Column("deployed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rolled_back_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rollback_reason", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "deployments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "website_id", UUID(as_uuid=True),
            sa.ForeignKey("websites.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("changed_urls", sa.JSON, nullable=False),
        sa.Column("deploy_summary", sa.Text, nullable=False),
        sa.Column("internal_notes", sa.Text, nullable=True),
        sa.Column("indexing_status", sa.String(20), nullable=True, server_default="pending"),
        sa.Column("indexing_requested_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("indexed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "agenda_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "cms",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _client_fk(),
        sa.Column("page", sa.String(200), nullable=False),
        sa.Column("content", sa.JSON, nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )

    op.create_table(
        "contact_forms",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "website_id", UUID(as_uuid=True),
            sa.ForeignKey("websites.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("fullname", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("data", sa.JSON, nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        "newsletter",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _client_fk(),
        sa.Column("firstname", sa.String(100), nullable=False),
        sa.Column("lastname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "leads",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, index=True),
        sa.Column("budget", sa.String(10), nullable=False),
        sa.Column("timeline", sa.String(10), nullable=False),
        sa.Column("brief_summary", sa.Text, nullable=False),
        sa.Column("has_seen_packages", sa.Boolean, nullable=False),
        sa.Column("interested_in", sa.JSON, nullable=False),
        sa.Column("user_agent", sa.Text, nullable=True),
        sa.Column("ip", sa.String(64), nullable=True),
        sa.Column("acknowledged", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(updated=False),
    )

    op.create_table(
        "audit_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("website_url", sa.String(500), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=True),
        sa.Column("specifics", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        *_timestamps(),
    )

    # Legacy GraphQL tables
    op.create_table(
        "legacy_users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password", sa.String(100), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "legacy_clients",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, index=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("status", sa.String(100), nullable=True),
        sa.Column("meetings", sa.JSON, nullable=False),
        sa.Column("project", sa.JSON, nullable=True),
        sa.Column("notes", sa.JSON, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "ggc_newsletter",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("subscribed", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )


def downgrade() -> None:
    for table in (
        "ggc_newsletter", "legacy_clients", "legacy_users", "audit_requests",
        "leads", "newsletter", "contact_forms", "cms", "agenda_items",
        "deployments", "app_deployments", "apps", "websites", "clients",
    ):
        op.drop_table(table)
