"""Gmail Mailer — OAuth2 (XOAUTH2) SMTP delivery via aiosmtplib.

Invariants:
    - An access token is refreshed from Google's token endpoint for every send
    - Every message is multipart/alternative: text part derived from HTML when not given
    - send_email raises on failure; callers decide whether to swallow

Design Decisions:
    - aiosmtplib with implicit TLS on 465 and STARTTLS negotiated by connect() on 587;
      AUTH XOAUTH2 issued as a raw command
    - Token refresh over httpx (same outbound plumbing as every other integration)
"""

import base64
import logging
from email.message import EmailMessage

import aiosmtplib
import httpx

from pvs_api.config import get_settings
from pvs_api.core.errors import ConfigurationError, ExternalServiceError
from pvs_api.core.html import html_to_text
from pvs_api.infrastructure.outbound_http import http_client, ensure_success

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
_AUTH_SUCCESS = 235


async def fetch_access_token(http: httpx.AsyncClient | None = None) -> str:
    """Exchange the configured refresh token for a short-lived access token."""
    settings = get_settings()
    if not settings.gmail_refresh_token:
        raise ConfigurationError("GMAIL_REFRESH_TOKEN")
    async with http_client(http) as client:
        response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": settings.gmail_client_id,
                "client_secret": settings.gmail_client_secret,
                "refresh_token": settings.gmail_refresh_token,
                "grant_type": "refresh_token",
            },
        )
    ensure_success("Google OAuth token", response)
    return response.json()["access_token"]


def xoauth2_string(user: str, access_token: str) -> str:
    raw = f"user={user}\x01auth=Bearer {access_token}\x01\x01"
    return base64.b64encode(raw.encode()).decode()


def build_message(
    *, sender: str, to: list[str], subject: str, html: str,
    text: str | None = None,
) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = ", ".join(to)
    message["Subject"] = subject
    message.set_content(text if text is not None else html_to_text(html))
    message.add_alternative(html, subtype="html")
    return message


async def _deliver(message: EmailMessage, user: str, access_token: str) -> None:
    settings = get_settings()
    smtp = aiosmtplib.SMTP(
        hostname=settings.gmail_smtp_host,
        port=settings.gmail_smtp_port,
        use_tls=settings.gmail_smtp_port == 465,
        start_tls=settings.gmail_smtp_port == 587,
        timeout=30,
    )
    await smtp.connect()
    try:
        response = await smtp.execute_command(
            b"AUTH", b"XOAUTH2", xoauth2_string(user, access_token).encode(),
        )
        if response.code != _AUTH_SUCCESS:
            raise ExternalServiceError(
                "gmail", f"Gmail authentication failed ({response.code})",
                status_code=response.code,
            )
        await smtp.send_message(message)
    finally:
        await smtp.quit()


def _recipients(to: str | list[str]) -> list[str]:
    return [to] if isinstance(to, str) else list(to)


async def send_email(
    to: str | list[str],
    subject: str,
    html: str,
    text: str | None = None,
    *,
    http: httpx.AsyncClient | None = None,
) -> None:
    """Send an email through Gmail; raises on any failure."""
    settings = get_settings()
    if not settings.gmail_user:
        raise ConfigurationError("GMAIL_USER")
    recipients = _recipients(to)
    message = build_message(
        sender=settings.gmail_user, to=recipients, subject=subject,
        html=html, text=text,
    )
    access_token = await fetch_access_token(http)
    try:
        await _deliver(message, settings.gmail_user, access_token)
    except aiosmtplib.SMTPException as e:
        raise ExternalServiceError("gmail", f"Gmail delivery failed: {e}")
    logger.info(
        "Email sent via Gmail",
        extra={"service": "gmail", "recipient": ", ".join(recipients)},
    )
