"""reCAPTCHA — verify a front-end token against reCAPTCHA Enterprise.

Invariants:
    - Missing token → 400 before any outbound call
    - score >= recaptcha_min_score → 200, below → 403
    - API or transport failure → 500 {"error": "Verification failed.", "details": ...}
"""

import logging

import httpx
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pvs_api.config import get_settings
from pvs_api.core.errors import ExternalServiceError
from pvs_api.infrastructure import recaptcha
from pvs_api.schemas.content import RecaptchaVerify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/recaptcha", tags=["recaptcha"])


@router.post("/verify")
async def verify_recaptcha(body: RecaptchaVerify):
    if not body.token:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No reCAPTCHA token provided."},
        )
    try:
        score = await recaptcha.assess_token(body.token)
    except (ExternalServiceError, httpx.HTTPError) as e:
        logger.error(f"reCAPTCHA assessment failed: {e}", extra={"service": "recaptcha"})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Verification failed.", "details": str(e)},
        )
    if score >= get_settings().recaptcha_min_score:
        return {"success": True, "message": "reCAPTCHA verified successfully."}
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"success": False, "message": "reCAPTCHA verification failed."},
    )
