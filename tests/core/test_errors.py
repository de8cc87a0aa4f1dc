"""Error hierarchy — HTTP status, category and the public error body."""

import pytest

from pvs_api.core.errors import (
    BusinessRuleError,
    ConfigurationError,
    ConflictError,
    DatabaseError,
    ErrorCategory,
    ExternalServiceError,
    PvsError,
    ResourceNotFoundError,
)

RAISABLE = [
    BusinessRuleError("Invalid status"),
    ResourceNotFoundError("Website", "w-1"),
    ConflictError("Domain already exists"),
    DatabaseError("timeout", "query"),
    ExternalServiceError("nylas", "Nylas API error"),
    ConfigurationError("RESEND_API_KEY"),
]


@pytest.mark.parametrize("error,status", zip(RAISABLE, [400, 404, 409, 503, 502, 500]))
def test_http_status(error, status):
    assert error.http_status == status


def test_every_category_has_an_error_type():
    assert {e.category for e in RAISABLE} == set(ErrorCategory)


def test_response_body_adds_message_only_with_detail():
    assert ConflictError("Slug already exists").to_response() == {
        "error": "Slug already exists",
    }
    err = ResourceNotFoundError(
        "Client", "c-1", detail="The specified client_id does not exist.",
    )
    assert err.to_response() == {
        "error": "Client not found",
        "message": "The specified client_id does not exist.",
    }
    assert err.context.resource_id == "c-1"


def test_external_service_error_keeps_upstream_status():
    err = ExternalServiceError("gmail", "auth failed", status_code=535, http_status=500)
    assert isinstance(err, PvsError)
    assert err.http_status == 500
    assert err.status_code == 535
    assert err.context.service == "gmail"
