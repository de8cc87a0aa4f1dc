"""Newsletter resolvers — the legacy studio mailing list."""

import strawberry
from sqlalchemy import select
from strawberry.types import Info

from pvs_api.infrastructure import calendly
from pvs_api.legacy_graphql.context import db_of
from pvs_api.legacy_graphql.errors import user_input_error
from pvs_api.legacy_graphql.types import NewsletterUser
from pvs_api.models.newsletter_participant import NewsletterParticipant

ALREADY_SUBSCRIBED = "You are already subscribed."


async def _subscribe(info: Info, email: str, name: str | None) -> NewsletterUser:
    db = db_of(info)
    result = await db.execute(
        select(NewsletterParticipant).where(NewsletterParticipant.email == email),
    )
    if result.scalar_one_or_none():
        raise user_input_error(ALREADY_SUBSCRIBED, {"email": ALREADY_SUBSCRIBED})
    participant = NewsletterParticipant(email=email, name=name, subscribed=True)
    db.add(participant)
    await db.commit()
    await db.refresh(participant)
    return NewsletterUser.from_row(participant)


@strawberry.type
class NewsletterQuery:

    @strawberry.field
    async def get_all_newsletter_users(self, info: Info) -> list[NewsletterUser]:
        result = await db_of(info).execute(select(NewsletterParticipant))
        return [NewsletterUser.from_row(p) for p in result.scalars().all()]

    @strawberry.field
    async def get_subscribed_newsletter_users(self, info: Info) -> list[NewsletterUser]:
        result = await db_of(info).execute(
            select(NewsletterParticipant).where(NewsletterParticipant.subscribed.is_(True)),
        )
        return [NewsletterUser.from_row(p) for p in result.scalars().all()]


@strawberry.type
class NewsletterMutation:

    @strawberry.mutation
    async def add_newsletter_participant(
        self, info: Info, email: str, name: str | None = None,
    ) -> NewsletterUser:
        if not email.strip():
            raise user_input_error("Email is required", {"email": "Email is required"})
        return await _subscribe(info, email.strip(), name)

    @strawberry.mutation
    async def add_calendly_participant(self, info: Info, invitee_uri: str) -> NewsletterUser:
        invitee = await calendly.get_invitee(invitee_uri)
        return await _subscribe(info, invitee.get("email", ""), invitee.get("name"))
