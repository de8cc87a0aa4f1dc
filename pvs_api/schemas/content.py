"""Content Schemas — CMS pages, contact-form submissions, newsletter and reCAPTCHA."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from pvs_api.schemas.common import NonEmptyStr


class CmsPageCreate(BaseModel):
    page: NonEmptyStr
    content: Any = Field(...)
    active: bool


class ContactFormCreate(BaseModel):
    fullname: NonEmptyStr
    email: NonEmptyStr
    phone: NonEmptyStr
    data: dict[str, Any] = Field(min_length=1)


class NewsletterSignup(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: NonEmptyStr = Field(alias="firstName")
    last_name: NonEmptyStr = Field(alias="lastName")
    email: EmailStr


class RecaptchaVerify(BaseModel):
    token: str | None = None
