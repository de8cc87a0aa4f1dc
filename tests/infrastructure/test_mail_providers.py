"""Mail providers — Nylas, Resend and the Gmail token exchange over MockTransport."""

import base64
import json
from urllib.parse import parse_qs

import pytest

from pvs_api.core.errors import ConfigurationError, ExternalServiceError
from pvs_api.infrastructure import gmail, nylas, resend


# ─── Nylas ──────────────────────────────────────────────────────

async def test_nylas_sends_with_cc(configure, mock_http):
    configure(
        nylas_api_key="nyk", nylas_grant_id="grant-1",
        nylas_api_uri="https://nylas.test/", nylas_cc_email="studio@pvs.test",
    )
    http = mock_http(200, json={"data": {"id": "m1"}})
    await nylas.send_email("owner@acme.test", "Hello", "<p>Hi</p>", http=http)

    [request] = http.sent
    assert str(request.url) == "https://nylas.test/v3/grants/grant-1/messages/send"
    assert request.headers["authorization"] == "Bearer nyk"
    body = json.loads(request.content)
    assert body["to"] == [{"email": "owner@acme.test"}]
    assert body["cc"] == [{"email": "studio@pvs.test"}]
    assert body["subject"] == "Hello"


async def test_nylas_requires_api_key(configure, mock_http):
    configure(nylas_api_key="", nylas_grant_id="grant-1")
    with pytest.raises(ConfigurationError):
        await nylas.send_email("a@b.test", "s", "h", http=mock_http())


async def test_nylas_failure_raises(configure, mock_http):
    configure(nylas_api_key="nyk", nylas_grant_id="grant-1")
    with pytest.raises(ExternalServiceError):
        await nylas.send_email("a@b.test", "s", "h", http=mock_http(401, text="nope"))


# ─── Resend ─────────────────────────────────────────────────────

async def test_resend_posts_email(configure, mock_http):
    configure(resend_api_key="rk")
    http = mock_http(200, json={"id": "e1"})
    await resend.send_email(
        sender="Leads <leads@pvs.test>", to=["ops@pvs.test"], subject="New Lead",
        html="<p>x</p>", text="x", http=http,
    )
    [request] = http.sent
    assert request.headers["authorization"] == "Bearer rk"
    body = json.loads(request.content)
    assert body["from"] == "Leads <leads@pvs.test>"
    assert body["to"] == ["ops@pvs.test"]
    assert body["text"] == "x"


async def test_resend_without_key(configure, mock_http):
    configure(resend_api_key="")
    with pytest.raises(ConfigurationError) as exc:
        await resend.send_email(
            sender="a", to=["b"], subject="s", html="h", text="t", http=mock_http(),
        )
    assert exc.value.setting == "RESEND_API_KEY"


async def test_resend_error_is_500(configure, mock_http):
    configure(resend_api_key="rk")
    with pytest.raises(ExternalServiceError) as exc:
        await resend.send_email(
            sender="a", to=["b"], subject="s", html="h", text="t",
            http=mock_http(422, text="invalid from"),
        )
    assert exc.value.http_status == 500


# ─── Gmail ──────────────────────────────────────────────────────

async def test_gmail_token_exchange(configure, mock_http):
    configure(
        gmail_client_id="cid", gmail_client_secret="secret",
        gmail_refresh_token="refresh",
    )
    http = mock_http(200, json={"access_token": "ya29.token"})
    assert await gmail.fetch_access_token(http) == "ya29.token"

    [request] = http.sent
    assert str(request.url) == gmail.GOOGLE_TOKEN_URL
    form = parse_qs(request.content.decode())
    assert form["grant_type"] == ["refresh_token"]
    assert form["refresh_token"] == ["refresh"]


async def test_gmail_requires_refresh_token(configure, mock_http):
    configure(gmail_refresh_token="")
    with pytest.raises(ConfigurationError):
        await gmail.fetch_access_token(mock_http())


def test_xoauth2_string():
    decoded = base64.b64decode(gmail.xoauth2_string("me@pvs.test", "tok")).decode()
    assert decoded == "user=me@pvs.test\x01auth=Bearer tok\x01\x01"


def test_build_message_derives_text_part():
    message = gmail.build_message(
        sender="me@pvs.test", to=["a@x.test", "b@x.test"], subject="Beta",
        html="<h1>Domani</h1><p>is live</p>",
    )
    assert message["To"] == "a@x.test, b@x.test"
    text_part, html_part = message.iter_parts()
    assert text_part.get_content().strip() == "Domani\nis live"
    assert html_part.get_content_subtype() == "html"


class _FakeSMTP:
    """Stands in for aiosmtplib.SMTP; records constructor kwargs and calls."""

    instances: list["_FakeSMTP"] = []

    def __init__(self, auth_code=235, **kwargs):
        self.kwargs = kwargs
        self.calls: list[str] = []
        self.auth_code = auth_code
        _FakeSMTP.instances.append(self)

    async def connect(self):
        self.calls.append("connect")

    async def starttls(self):
        self.calls.append("starttls")

    async def execute_command(self, *args):
        self.calls.append(b" ".join(args[:2]).decode())
        return type("Response", (), {"code": self.auth_code, "message": ""})()

    async def send_message(self, message):
        self.calls.append("send_message")

    async def quit(self):
        self.calls.append("quit")


@pytest.fixture
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setattr(gmail.aiosmtplib, "SMTP", _FakeSMTP)
    return _FakeSMTP


async def _gmail_send(configure, mock_http, port):
    configure(
        gmail_user="me@pvs.test", gmail_refresh_token="refresh",
        gmail_smtp_port=port,
    )
    await gmail.send_email(
        "a@x.test", "Hi", "<p>Hi</p>",
        http=mock_http(200, json={"access_token": "tok"}),
    )


async def test_gmail_submission_port_negotiates_tls_on_connect(
    configure, mock_http, fake_smtp,
):
    await _gmail_send(configure, mock_http, 587)

    [smtp] = fake_smtp.instances
    assert smtp.kwargs["start_tls"] is True
    assert smtp.kwargs["use_tls"] is False
    assert smtp.calls == ["connect", "AUTH XOAUTH2", "send_message", "quit"]


async def test_gmail_implicit_tls_port(configure, mock_http, fake_smtp):
    await _gmail_send(configure, mock_http, 465)

    [smtp] = fake_smtp.instances
    assert smtp.kwargs["use_tls"] is True
    assert smtp.kwargs["start_tls"] is False
    assert "starttls" not in smtp.calls


async def test_gmail_rejected_auth_raises_and_quits(
    configure, mock_http, monkeypatch,
):
    instances = []

    def _rejecting(**kwargs):
        smtp = _FakeSMTP(auth_code=535, **kwargs)
        instances.append(smtp)
        return smtp

    monkeypatch.setattr(gmail.aiosmtplib, "SMTP", _rejecting)
    with pytest.raises(ExternalServiceError):
        await _gmail_send(configure, mock_http, 587)
    [smtp] = instances
    assert "send_message" not in smtp.calls
    assert smtp.calls[-1] == "quit"
