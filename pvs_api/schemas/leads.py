"""Lead Schemas — public lead-intake form body and its flattened error shape.

Invariants:
    - honeypot must be the empty string (bots fill every field)
    - interestedIn only accepts known package ids; defaults to []
    - Validation failures flatten to {"formErrors": [...], "fieldErrors": {field: [msgs]}}

Design Decisions:
    - Body parsed by the route, not by FastAPI: leads answer with their own 400 shape
      instead of the global {"errors": [...]} envelope
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from pvs_api.core.domain_types import LeadBudget, LeadTimeline
from pvs_api.core.lead_packages import VALID_PACKAGE_IDS


class LeadCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    budget: LeadBudget
    timeline: LeadTimeline
    brief_summary: str = Field(min_length=10, max_length=2000, alias="briefSummary")
    has_seen_packages: bool = Field(alias="hasSeenPackages")
    honeypot: str = Field(max_length=0)
    interested_in: list[str] = Field(default_factory=list, alias="interestedIn")

    @field_validator("interested_in")
    @classmethod
    def known_packages(cls, v: list[str]) -> list[str]:
        unknown = [p for p in v if p not in VALID_PACKAGE_IDS]
        if unknown:
            raise ValueError(f"Unknown package ids: {', '.join(unknown)}")
        return v


def flatten_errors(exc: ValidationError) -> dict:
    """Group validation messages by top-level field; root errors go to formErrors."""
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        if not error["loc"]:
            form_errors.append(error["msg"])
            continue
        field_errors.setdefault(str(error["loc"][0]), []).append(error["msg"])
    return {"formErrors": form_errors, "fieldErrors": field_errors}
