"""Resend — transactional email over the Resend REST API."""

import logging

import httpx

from pvs_api.config import get_settings
from pvs_api.core.errors import ConfigurationError
from pvs_api.infrastructure.outbound_http import http_client, ensure_success

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


async def send_email(
    *,
    sender: str,
    to: list[str],
    subject: str,
    html: str,
    text: str,
    http: httpx.AsyncClient | None = None,
) -> None:
    """Send one email; raises on missing key or non-2xx response."""
    api_key = get_settings().resend_api_key
    if not api_key:
        raise ConfigurationError("RESEND_API_KEY")
    async with http_client(http) as client:
        response = await client.post(
            RESEND_EMAILS_URL,
            headers={"Authorization": f"Bearer {api_key}"},
            json={
                "from": sender, "to": to, "subject": subject,
                "html": html, "text": text,
            },
        )
    ensure_success("Resend email", response, http_status=500)
    logger.info(
        "Resend email sent",
        extra={"service": "resend", "recipient": ", ".join(to)},
    )
