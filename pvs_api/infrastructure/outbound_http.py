"""Outbound HTTP — shared httpx plumbing for every third-party integration.

Invariants:
    - Callers may inject an httpx.AsyncClient (tests use httpx.MockTransport)
    - Non-2xx responses raise ExternalServiceError carrying status and body text
    - No retries: a failed call fails once
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx

from pvs_api.core.errors import ExternalServiceError

DEFAULT_TIMEOUT_SECONDS = 15.0


@asynccontextmanager
async def http_client(
    http: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield the injected client, or a short-lived one owned by this block."""
    if http is not None:
        yield http
        return
    async with httpx.AsyncClient(timeout=timeout) as client:
        yield client


def ensure_success(
    service: str, response: httpx.Response, http_status: int = 502,
) -> None:
    if response.is_success:
        return
    raise ExternalServiceError(
        service,
        f"{service} request failed ({response.status_code}): {response.text}",
        status_code=response.status_code,
        http_status=http_status,
    )
