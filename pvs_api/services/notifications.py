"""Notifications — every outbound email and alert the REST and GraphQL flows send.

Invariants:
    - Contact-form and audit emails are best-effort: failures logged, never raised
    - Deployment emails raise; the deployments flow logs and continues
    - Lead and audit alerts raise: a failed alert fails the request (500)
    - Beta-launch blast records per-recipient failures and keeps going

Design Decisions:
    - One module owns "what is sent and through which provider"; infrastructure/
      modules only know how to talk to their provider
    - Timestamps rendered as ISO strings before entering any text body
"""

import asyncio
import logging
from datetime import datetime

from pvs_api.config import get_settings
from pvs_api.core.errors import ConfigurationError
from pvs_api.infrastructure import discord, gmail, nylas, resend
from pvs_api.services import email_templates

logger = logging.getLogger(__name__)

LEAD_DISCORD_USERNAME = "PixelVerse Lead Alerts"
LEAD_DISCORD_FOOTER = "Lead intake notifications"
AUDIT_DISCORD_USERNAME = "PixelVerse Audit Alerts"
AUDIT_DISCORD_TITLE = "PixelVerse Studios — New Audit Request"
AUDIT_DISCORD_FOOTER = "Audit request notifications"
BETA_LAUNCH_SUBJECT = "Domani beta is live"
INTRO_MEETING_SUBJECT = "Intro Meeting Confirmed!"
PASSWORD_RESET_SUBJECT = "Reset your PixelVerse Studios password"


def _iso(value) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _with_iso_timestamps(record: dict) -> dict:
    return {
        key: _iso(value) if key.endswith("_at") else value
        for key, value in record.items()
    }


def _discord_webhook() -> str:
    webhook = get_settings().lead_notify_discord_webhook.strip()
    if not webhook:
        raise ConfigurationError("LEAD_NOTIFY_DISCORD_WEBHOOK")
    return webhook


# ─── Contact forms ──────────────────────────────────────────────

async def send_contact_submission_email(
    *, to: str, website_title: str, fullname: str, email: str,
    phone: str, data: dict,
) -> bool:
    """Email a website's owner about a new contact-form submission."""
    subject = f"New Contact Form Submission for {website_title}"
    html = email_templates.contact_submission_html(
        website=website_title, fullname=fullname, email=email,
        phone=phone, data=data,
    )
    try:
        await gmail.send_email(to, subject, html)
        return True
    except Exception as e:
        logger.error(
            f"Contact submission email failed: {e}",
            extra={"recipient": to, "service": "gmail"},
        )
        return False


# ─── Audit requests ─────────────────────────────────────────────

async def alert_audit_request(record: dict) -> None:
    record = _with_iso_timestamps(record)
    await discord.post_embed(
        _discord_webhook(),
        username=AUDIT_DISCORD_USERNAME,
        content=AUDIT_DISCORD_TITLE,
        description=email_templates.audit_request_text(record),
        timestamp=record["created_at"],
        footer=AUDIT_DISCORD_FOOTER,
    )


async def send_audit_request_email(record: dict) -> bool:
    """Email the configured audit recipients; skipped when none are set."""
    recipients = get_settings().audit_recipients
    if not recipients:
        return False
    record = _with_iso_timestamps(record)
    html = email_templates.audit_request_html(
        name=record["name"], email=record["email"],
        website_url=record["website_url"],
        phone_number=record.get("phone_number"),
        specifics=record.get("specifics"),
        submitted_at=record["created_at"],
    )
    try:
        await gmail.send_email(
            recipients, email_templates.DEFAULT_AUDIT_SUBJECT, html,
        )
        return True
    except Exception as e:
        logger.error(
            f"Audit request email failed: {e}",
            extra={"recipient": ", ".join(recipients), "service": "gmail"},
        )
        return False


# ─── Deployments ────────────────────────────────────────────────

async def send_deployment_email(
    *, to: str, website_title: str, deployment_date: datetime,
    summary_markdown: str, changed_urls: list[str],
) -> None:
    html = email_templates.deployment_html(
        website_title=website_title,
        deployment_date=email_templates.format_deployment_date(deployment_date),
        summary_markdown=summary_markdown,
        changed_urls=changed_urls,
    )
    await nylas.send_email(to, f"🚀 New Deployment: {website_title}", html)


# ─── Leads ──────────────────────────────────────────────────────

async def notify_lead(lead: dict) -> None:
    """Resend email when LEAD_NOTIFY_USE_RESEND is truthy, Discord embed otherwise."""
    settings = get_settings()
    lead = _with_iso_timestamps(lead)
    text = email_templates.lead_text(lead)
    if settings.use_resend_for_leads:
        recipients = settings.lead_recipients
        if not recipients:
            raise ConfigurationError("LEAD_NOTIFY_TO")
        await resend.send_email(
            sender=settings.lead_notify_from,
            to=recipients,
            subject=f"New Lead: {lead['name']} • {lead['budget']} • {lead['timeline']}",
            html=email_templates.lead_html(lead, settings.lead_notify_logo_url),
            text=text,
        )
        return
    await discord.post_embed(
        _discord_webhook(),
        username=LEAD_DISCORD_USERNAME,
        content=email_templates.LEAD_HEADLINE,
        description=text,
        timestamp=lead["created_at"],
        footer=LEAD_DISCORD_FOOTER,
    )


# ─── Domani ─────────────────────────────────────────────────────

async def send_beta_launch_blast(
    recipients: list[dict], *, ios_link: str, android_link: str,
    delay_ms: int = 1000,
) -> dict:
    """Send the beta-launch email to each recipient in order."""
    results = []
    for index, recipient in enumerate(recipients):
        if index and delay_ms:
            await asyncio.sleep(delay_ms / 1000)
        html = email_templates.beta_launch_html(
            name=recipient.get("name"), ios_link=ios_link,
            android_link=android_link,
        )
        try:
            await gmail.send_email(recipient["email"], BETA_LAUNCH_SUBJECT, html)
            results.append({"email": recipient["email"], "success": True})
        except Exception as e:
            logger.warning(
                f"Beta launch email failed: {e}",
                extra={"recipient": recipient["email"], "service": "gmail"},
            )
            results.append({
                "email": recipient["email"], "success": False, "error": str(e),
            })
    sent = sum(1 for r in results if r["success"])
    return {
        "total": len(results),
        "sent": sent,
        "failed": len(results) - sent,
        "results": results,
    }


# ─── Legacy dashboard ───────────────────────────────────────────

async def send_intro_meeting_email(
    to: str, *, name: str | None, scheduled_for: str | None,
    join_url: str | None,
) -> None:
    html = email_templates.intro_meeting_html(
        name=name, scheduled_for=scheduled_for, join_url=join_url,
    )
    await gmail.send_email(to, INTRO_MEETING_SUBJECT, html)


async def send_password_reset_email(
    to: str, *, name: str | None, token: str,
) -> None:
    settings = get_settings()
    html = email_templates.password_reset_html(
        name=name,
        reset_link=f"{settings.password_reset_url}?token={token}",
        expires_hours=settings.reset_token_expire_hours,
    )
    await gmail.send_email(to, PASSWORD_RESET_SUBJECT, html)
