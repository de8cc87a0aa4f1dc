"""Discord Webhooks — post a single-embed alert message.

Invariants:
    - Descriptions over 4096 characters are rejected before any request
    - Webhook failures raise ExternalServiceError with http_status 500
      (alerting failures surface to the caller as server errors)
"""

import logging

import httpx

from pvs_api.core.errors import ExternalServiceError
from pvs_api.infrastructure.outbound_http import http_client, ensure_success

logger = logging.getLogger(__name__)

MAX_EMBED_DESCRIPTION = 4096
BRAND_COLOR = 0x3F00E9


def build_embed_payload(
    *, username: str, content: str, description: str,
    timestamp: str | None, footer: str, color: int = BRAND_COLOR,
) -> dict:
    embed: dict = {
        "description": description,
        "color": color,
        "footer": {"text": footer},
    }
    if timestamp:
        embed["timestamp"] = timestamp
    return {"username": username, "content": content, "embeds": [embed]}


async def post_embed(
    webhook_url: str,
    *,
    username: str,
    content: str,
    description: str,
    timestamp: str | None,
    footer: str,
    http: httpx.AsyncClient | None = None,
) -> None:
    """Send one embed to a Discord incoming webhook."""
    if len(description) > MAX_EMBED_DESCRIPTION:
        raise ExternalServiceError(
            "discord", "Discord payload exceeds maximum embed length",
            http_status=500,
        )
    payload = build_embed_payload(
        username=username, content=content, description=description,
        timestamp=timestamp, footer=footer,
    )
    async with http_client(http) as client:
        response = await client.post(webhook_url, json=payload)
    ensure_success("Discord webhook", response, http_status=500)
    logger.info("Discord alert sent", extra={"service": "discord"})
