"""Calendly — fetch scheduled events and invitees by their API URIs."""

import httpx

from pvs_api.config import get_settings
from pvs_api.core.errors import ConfigurationError
from pvs_api.infrastructure.outbound_http import http_client, ensure_success


async def _get_resource(uri: str, http: httpx.AsyncClient | None) -> dict:
    token = get_settings().calendly_access_token
    if not token:
        raise ConfigurationError("CALENDLY_ACCESS_TOKEN")
    async with http_client(http) as client:
        response = await client.get(
            uri, headers={"Authorization": f"Bearer {token}"},
        )
    ensure_success("Calendly", response)
    return response.json().get("resource") or {}


async def get_event(uri: str, *, http: httpx.AsyncClient | None = None) -> dict:
    return await _get_resource(uri, http)


async def get_invitee(uri: str, *, http: httpx.AsyncClient | None = None) -> dict:
    return await _get_resource(uri, http)
