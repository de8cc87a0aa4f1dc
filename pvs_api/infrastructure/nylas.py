"""Nylas Mailer — client-facing transactional email through the Nylas v3 REST API.

Invariants:
    - Every message CCs the configured studio address
    - send_email raises on failure; callers decide whether to swallow
"""

import logging

import httpx

from pvs_api.config import get_settings
from pvs_api.core.errors import ConfigurationError
from pvs_api.infrastructure.outbound_http import http_client, ensure_success

logger = logging.getLogger(__name__)


def _messages_send_url(api_uri: str, grant_id: str) -> str:
    return f"{api_uri.rstrip('/')}/v3/grants/{grant_id}/messages/send"


async def send_email(
    to: str | list[str],
    subject: str,
    html: str,
    *,
    http: httpx.AsyncClient | None = None,
) -> None:
    settings = get_settings()
    if not settings.nylas_api_key:
        raise ConfigurationError("NYLAS_API_KEY")
    if not settings.nylas_grant_id:
        raise ConfigurationError("NYLAS_GRANT_ID")
    recipients = [to] if isinstance(to, str) else list(to)
    body = {
        "subject": subject,
        "body": html,
        "to": [{"email": r} for r in recipients],
        "cc": [{"email": settings.nylas_cc_email}],
    }
    async with http_client(http) as client:
        response = await client.post(
            _messages_send_url(settings.nylas_api_uri, settings.nylas_grant_id),
            headers={"Authorization": f"Bearer {settings.nylas_api_key}"},
            json=body,
        )
    ensure_success("Nylas send", response)
    logger.info(
        f"Email sent via Nylas: {subject}",
        extra={"service": "nylas", "recipient": ", ".join(recipients)},
    )
