"""reCAPTCHA Routes — score threshold and failure envelopes."""

import httpx
import pytest

from pvs_api.core.errors import ExternalServiceError


@pytest.fixture
def score(monkeypatch):
    """Stub the assessment; set score["value"] or score["error"]."""
    state = {"value": 0.9, "error": None, "tokens": []}

    async def fake_assess(token, **kwargs):
        state["tokens"].append(token)
        if state["error"]:
            raise state["error"]
        return state["value"]

    monkeypatch.setattr("pvs_api.infrastructure.recaptcha.assess_token", fake_assess)
    return state


async def test_missing_token(client, score):
    res = await client.post("/api/recaptcha/verify", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "No reCAPTCHA token provided."}
    assert score["tokens"] == []


async def test_high_score_passes(client, score):
    res = await client.post("/api/recaptcha/verify", json={"token": "tok"})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "reCAPTCHA verified successfully."}
    assert score["tokens"] == ["tok"]


async def test_threshold_is_inclusive(client, score):
    score["value"] = 0.5
    res = await client.post("/api/recaptcha/verify", json={"token": "tok"})
    assert res.status_code == 200


async def test_low_score_forbidden(client, score):
    score["value"] = 0.1
    res = await client.post("/api/recaptcha/verify", json={"token": "tok"})
    assert res.status_code == 403
    assert res.json() == {"success": False, "message": "reCAPTCHA verification failed."}


@pytest.mark.parametrize("error", [
    ExternalServiceError("recaptcha", "Google reCAPTCHA API error: bad key", http_status=500),
    httpx.ConnectError("connection refused"),
])
async def test_api_failure(client, score, error):
    score["error"] = error
    res = await client.post("/api/recaptcha/verify", json={"token": "tok"})
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Verification failed."
    assert body["details"] == str(error)
