"""Calendly and reCAPTCHA Enterprise clients over MockTransport."""

import json

import pytest

from pvs_api.core.errors import ConfigurationError, ExternalServiceError
from pvs_api.infrastructure import calendly, recaptcha


async def test_calendly_returns_resource(configure, mock_http):
    configure(calendly_access_token="cal")
    http = mock_http(200, json={"resource": {"email": "pat@shop.test"}})
    invitee = await calendly.get_invitee("https://api.calendly.test/i/1", http=http)
    assert invitee == {"email": "pat@shop.test"}
    assert http.sent[0].headers["authorization"] == "Bearer cal"


async def test_calendly_requires_token(configure, mock_http):
    configure(calendly_access_token="")
    with pytest.raises(ConfigurationError):
        await calendly.get_event("https://api.calendly.test/e/1", http=mock_http())


async def test_calendly_error(configure, mock_http):
    configure(calendly_access_token="cal")
    with pytest.raises(ExternalServiceError):
        await calendly.get_event(
            "https://api.calendly.test/e/1", http=mock_http(404, text="missing"),
        )


async def test_recaptcha_score(configure, mock_http):
    configure(
        recaptcha_project_id="proj", recaptcha_api_key="key",
        recaptcha_site_key="site", recaptcha_expected_action="SUBMIT",
    )
    http = mock_http(200, json={"riskAnalysis": {"score": 0.7}})
    assert await recaptcha.assess_token("tok", http=http) == 0.7

    [request] = http.sent
    assert request.url.path == "/v1/projects/proj/assessments"
    assert request.url.params["key"] == "key"
    assert json.loads(request.content)["event"] == {
        "token": "tok", "siteKey": "site", "expectedAction": "SUBMIT",
    }


async def test_recaptcha_missing_score_is_zero(configure, mock_http):
    configure(recaptcha_project_id="proj")
    assert await recaptcha.assess_token("tok", http=mock_http(200, json={})) == 0.0


async def test_recaptcha_api_error(configure, mock_http):
    configure(recaptcha_project_id="proj")
    http = mock_http(400, json={"error": {"message": "Invalid site key"}})
    with pytest.raises(ExternalServiceError) as exc:
        await recaptcha.assess_token("tok", http=http)
    assert exc.value.message == "Google reCAPTCHA API error: Invalid site key"
    assert exc.value.http_status == 500
