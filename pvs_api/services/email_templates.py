"""Email Templates — jinja2 rendering for every outbound email body.

Invariants:
    - All HTML bodies render through one autoescaping Environment
    - User-supplied values are escaped by the template engine, never pre-formatted into HTML
    - Plain-text builders are pure string functions (no template engine)
"""

from datetime import datetime

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from pvs_api.core.html import markdown_to_html
from pvs_api.core.lead_packages import package_display_name

_env = Environment(
    loader=PackageLoader("pvs_api", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

DEFAULT_AUDIT_SUBJECT = "New Free Website Audit Request"


def render(template_name: str, **context) -> str:
    return _env.get_template(template_name).render(**context)


def format_deployment_date(value: datetime) -> str:
    """Long human date, e.g. 'Monday, March 3, 2025 at 04:05 PM'."""
    return (
        f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, "
        f"{value.year} at {value.strftime('%I:%M %p')}"
    )


def format_utc_timestamp(value: str) -> str:
    """RFC-1123 style UTC rendering; unparseable input is returned as-is."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%a, %d %b %Y %H:%M:%S GMT")


# ─── Contact forms ──────────────────────────────────────────────

def contact_submission_html(
    *, website: str, fullname: str, email: str, phone: str, data: dict,
) -> str:
    return render(
        "contact_submission.html",
        website=website, fullname=fullname, email=email, phone=phone,
        data=data or {},
    )


# ─── Audit requests ─────────────────────────────────────────────

def audit_request_html(
    *, name: str, email: str, website_url: str,
    phone_number: str | None, specifics: str | None, submitted_at: str,
) -> str:
    return render(
        "audit_request.html",
        name=name, email=email, website_url=website_url,
        phone_number=phone_number, specifics=specifics,
        submitted_at=format_utc_timestamp(submitted_at),
    )


def audit_request_text(record: dict) -> str:
    return "\n".join([
        f"Name: {record['name']}",
        f"Email: {record['email']}",
        f"Website: {record['website_url']}",
        f"Phone: {record.get('phone_number') or 'n/a'}",
        f"Specifics: {record.get('specifics') or 'n/a'}",
        f"Status: {record['status']}",
        f"Submitted At: {record['created_at']}",
    ])


# ─── Deployments ────────────────────────────────────────────────

def deployment_html(
    *, website_title: str, deployment_date: str,
    summary_markdown: str, changed_urls: list[str],
) -> str:
    return render(
        "deployment.html",
        website_title=website_title,
        deployment_date=deployment_date,
        summary_html=Markup(markdown_to_html(summary_markdown)),
        changed_urls=changed_urls,
    )


# ─── Leads ──────────────────────────────────────────────────────

LEAD_HEADLINE = "PixelVerse Studios — New Lead Submission"


def lead_html(lead: dict, logo_url: str | None = None) -> str:
    packages = [package_display_name(p) for p in lead.get("interested_in") or []]
    return render(
        "lead_notification.html", lead=lead, packages=packages,
        logo_url=logo_url,
    )


def lead_text(lead: dict) -> str:
    interested = lead.get("interested_in") or []
    interested_section = (
        ["", "Interested In:"]
        + [f"  • {package_display_name(p)}" for p in interested]
        if interested else []
    )
    return "\n".join([
        LEAD_HEADLINE,
        "",
        f"Name: {lead['name']}",
        f"Email: {lead['email']}",
        f"Budget Range: {lead['budget']}",
        f"Timeline: {lead['timeline']}",
        f"Seen Packages: {'Yes' if lead['has_seen_packages'] else 'No'}",
        "",
        "Project Summary:",
        lead["brief_summary"],
        *interested_section,
        "",
        f"Lead ID: {lead['id']}",
        f"Submitted At: {lead['created_at']}",
        f"User Agent: {lead.get('user_agent') or 'n/a'}",
        f"IP: {lead.get('ip') or 'n/a'}",
        f"Acknowledged: {'Yes' if lead['acknowledged'] else 'No'}",
    ])


# ─── Legacy / Domani ────────────────────────────────────────────

def intro_meeting_html(
    *, name: str | None, scheduled_for: str | None, join_url: str | None,
) -> str:
    return render(
        "intro_meeting.html", name=name, scheduled_for=scheduled_for,
        join_url=join_url,
    )


def password_reset_html(
    *, name: str | None, reset_link: str, expires_hours: int,
) -> str:
    return render(
        "password_reset.html", name=name, reset_link=reset_link,
        expires_hours=expires_hours,
    )


def beta_launch_html(
    *, name: str | None, ios_link: str, android_link: str,
) -> str:
    return render(
        "beta_launch.html", name=name, ios_link=ios_link,
        android_link=android_link,
    )
