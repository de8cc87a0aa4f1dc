"""Lead intake helpers — client IP resolution and flattened validation errors."""

import pytest
from pydantic import ValidationError

from pvs_api.core.lead_packages import package_display_name
from pvs_api.schemas.leads import LeadCreate, flatten_errors
from pvs_api.services.leads import client_ip


@pytest.mark.parametrize("forwarded, real, expected", [
    ("203.0.113.9, 10.0.0.1", "198.51.100.4", "203.0.113.9"),
    (None, "198.51.100.4", "198.51.100.4"),
    ("  ", None, None),
    (None, None, None),
])
def test_client_ip(forwarded, real, expected):
    assert client_ip(forwarded, real) == expected


def test_flatten_groups_by_field():
    with pytest.raises(ValidationError) as exc:
        LeadCreate.model_validate({
            "name": "", "email": "x@y.test", "budget": "3-6k", "timeline": "ASAP",
            "briefSummary": "long enough summary", "hasSeenPackages": False,
            "honeypot": "filled",
        })
    flat = flatten_errors(exc.value)
    assert flat["formErrors"] == []
    assert set(flat["fieldErrors"]) == {"name", "honeypot"}


def test_flatten_root_errors_go_to_form_errors():
    with pytest.raises(ValidationError) as exc:
        LeadCreate.model_validate(["not", "an", "object"])
    flat = flatten_errors(exc.value)
    assert flat["formErrors"]
    assert flat["fieldErrors"] == {}


def test_interested_in_defaults_to_empty():
    lead = LeadCreate.model_validate({
        "name": "Ada", "email": "a@b.test", "budget": "<1k", "timeline": "unsure",
        "briefSummary": "long enough summary", "hasSeenPackages": True, "honeypot": "",
    })
    assert lead.interested_in == []


def test_package_display_name_falls_back_to_id():
    assert package_display_name("seo-starter").startswith("🔍 SEO Starter")
    assert package_display_name("mystery") == "mystery"
