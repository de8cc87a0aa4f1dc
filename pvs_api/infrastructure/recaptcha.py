"""reCAPTCHA Enterprise — create an assessment and return its risk score."""

import logging

import httpx

from pvs_api.config import get_settings
from pvs_api.core.errors import ExternalServiceError
from pvs_api.infrastructure.outbound_http import http_client

logger = logging.getLogger(__name__)

RECAPTCHA_API = "https://recaptchaenterprise.googleapis.com/v1"


async def assess_token(
    token: str, *, http: httpx.AsyncClient | None = None,
) -> float:
    """Return the assessment risk score (0.0 when the API omits one)."""
    settings = get_settings()
    url = f"{RECAPTCHA_API}/projects/{settings.recaptcha_project_id}/assessments"
    payload = {
        "event": {
            "token": token,
            "siteKey": settings.recaptcha_site_key,
            "expectedAction": settings.recaptcha_expected_action,
        },
    }
    async with http_client(http) as client:
        response = await client.post(
            url, params={"key": settings.recaptcha_api_key}, json=payload,
        )
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not response.is_success:
        message = (data.get("error") or {}).get("message") or "Unknown error"
        raise ExternalServiceError(
            "recaptcha", f"Google reCAPTCHA API error: {message}",
            status_code=response.status_code, http_status=500,
        )
    return float((data.get("riskAnalysis") or {}).get("score") or 0)
