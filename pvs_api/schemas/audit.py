"""Audit Request Schemas — free website audit intake.

Invariants:
    - Strings are trimmed before length checks
    - email is lower-cased
    - websiteUrl may omit the protocol; it is stored exactly as trimmed
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from pvs_api.schemas.common import check_url

Trimmed = Annotated[str, StringConstraints(strip_whitespace=True)]


class AuditRequestCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Trimmed = Field(min_length=1, max_length=200)
    email: EmailStr
    website_url: Trimmed = Field(min_length=1, alias="websiteUrl")
    phone_number: Trimmed | None = Field(
        None, min_length=7, max_length=30, alias="phoneNumber",
    )
    specifics: Trimmed | None = Field(None, max_length=2000)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("website_url")
    @classmethod
    def valid_website(cls, v: str) -> str:
        candidate = v if "://" in v else f"https://{v}"
        check_url(candidate)
        if "." not in candidate.split("://", 1)[1].split("/", 1)[0]:
            raise ValueError("Website URL must be valid")
        return v
