"""Domani Schemas — unsubscribe and beta-launch blast bodies."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from pvs_api.schemas.common import UrlStr


class UnsubscribeRequest(BaseModel):
    email: EmailStr


class BetaRecipient(BaseModel):
    email: EmailStr
    name: str | None = None


class BetaLaunchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recipients: list[BetaRecipient] = Field(min_length=1)
    ios_link: UrlStr = Field(alias="iosLink")
    android_link: UrlStr = Field(alias="androidLink")
    delay_between_emails: int = Field(
        1000, ge=0, le=10_000, alias="delayBetweenEmails",
    )
