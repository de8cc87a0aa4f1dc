"""Email Templates — escaping, formatting helpers and plain-text lead bodies."""

from datetime import datetime

from pvs_api.services import email_templates


def _lead(**overrides):
    lead = {
        "id": "lead-1", "name": "Grace", "email": "grace@navy.test",
        "budget": "3-6k", "timeline": "ASAP", "has_seen_packages": True,
        "brief_summary": "Line one\nLine <two>", "interested_in": ["core-lite"],
        "created_at": "2024-03-03T16:05:00+00:00", "user_agent": None, "ip": "203.0.113.9",
        "acknowledged": False,
    }
    lead.update(overrides)
    return lead


def test_format_deployment_date():
    value = datetime(2025, 3, 3, 16, 5)
    assert email_templates.format_deployment_date(value) == "Monday, March 3, 2025 at 04:05 PM"


def test_format_utc_timestamp():
    assert (
        email_templates.format_utc_timestamp("2024-03-03T16:05:00Z")
        == "Sun, 03 Mar 2024 16:05:00 GMT"
    )
    assert email_templates.format_utc_timestamp("yesterday") == "yesterday"


def test_contact_submission_escapes_values():
    html = email_templates.contact_submission_html(
        website="Acme", fullname="<b>Jane</b>", email="jane@x.test", phone="555",
        data={"message": "<script>hi</script>"},
    )
    assert "&lt;b&gt;Jane&lt;/b&gt;" in html
    assert "<script>" not in html
    assert "<strong>message:</strong>" in html


def test_audit_request_defaults():
    html = email_templates.audit_request_html(
        name="Linus", email="l@x.test", website_url="https://l.test",
        phone_number=None, specifics=None, submitted_at="2024-03-03T16:05:00Z",
    )
    assert "Not provided" in html
    assert "No specifics were provided." in html
    assert "Sun, 03 Mar 2024 16:05:00 GMT" in html


def test_audit_request_text():
    text = email_templates.audit_request_text({
        "name": "Linus", "email": "l@x.test", "website_url": "l.test",
        "phone_number": None, "specifics": "Slow", "status": "pending",
        "created_at": "2024-03-03",
    })
    assert "Phone: n/a" in text
    assert "Specifics: Slow" in text


def test_deployment_summary_markdown_is_rendered_not_escaped():
    html = email_templates.deployment_html(
        website_title="Acme", deployment_date="today",
        summary_markdown="**Hero** updated <img>", changed_urls=["https://a.test/"],
    )
    assert "<strong>Hero</strong>" in html
    assert "&lt;img&gt;" in html
    assert 'href="https://a.test/"' in html


def test_lead_text_lists_package_names():
    text = email_templates.lead_text(_lead())
    assert text.startswith(email_templates.LEAD_HEADLINE)
    assert "Seen Packages: Yes" in text
    assert "Interested In:" in text
    assert "Core Lite" in text
    assert "User Agent: n/a" in text


def test_lead_text_without_packages():
    assert "Interested In:" not in email_templates.lead_text(_lead(interested_in=[]))


def test_lead_html_breaks_summary_lines_safely():
    html = email_templates.lead_html(_lead(), logo_url="https://cdn.test/logo.png")
    assert "Line one<br />Line &lt;two&gt;" in html
    assert 'src="https://cdn.test/logo.png"' in html


def test_password_reset_html():
    html = email_templates.password_reset_html(
        name=None, reset_link="https://pvs.test/reset?token=abc", expires_hours=1,
    )
    assert "https://pvs.test/reset?token=abc" in html
