"""Client resolvers — Calendly intake and prospect notes/project editing."""

import logging
from typing import Annotated

import strawberry
from sqlalchemy import select
from strawberry.types import Info

from pvs_api.db.base import utcnow
from pvs_api.infrastructure import calendly
from pvs_api.legacy_graphql.context import db_of, parse_id, require_user
from pvs_api.legacy_graphql.errors import user_input_error
from pvs_api.legacy_graphql.types import Client
from pvs_api.models.legacy_client import LegacyClient
from pvs_api.services import notifications

logger = logging.getLogger(__name__)

PHASE_1 = "Phase 1: Information Gathering"

ClientID = Annotated[str, strawberry.argument(name="clientID")]


def meeting_from_calendly(event: dict, invitee: dict) -> dict:
    location = event.get("location") or {}
    return {
        "location": location.get("type"),
        "url": location.get("join_url"),
        "created": event.get("created_at"),
        "scheduledFor": event.get("start_time"),
        "prepInfo": invitee.get("questions_and_answers") or [],
        "notes": [],
    }


async def _all_clients(info: Info) -> list[Client]:
    result = await db_of(info).execute(
        select(LegacyClient).order_by(LegacyClient.created_at),
    )
    return [Client.from_row(c) for c in result.scalars().all()]


async def _client_or_error(info: Info, client_id: str) -> LegacyClient:
    parsed = parse_id(client_id)
    client = await db_of(info).get(LegacyClient, parsed) if parsed else None
    if client is None:
        raise user_input_error("Client not found", {"clientID": client_id})
    return client


@strawberry.type
class ClientQuery:

    @strawberry.field
    async def get_all_clients(self, info: Info) -> list[Client]:
        require_user(info)
        return await _all_clients(info)

    @strawberry.field
    async def get_client(self, info: Info, client_id: ClientID) -> Client:
        require_user(info)
        return Client.from_row(await _client_or_error(info, client_id))


@strawberry.type
class ClientMutation:

    @strawberry.mutation
    async def set_client_meetings(
        self, info: Info, event_uri: str, invitee_uri: str,
    ) -> Client:
        """Record a Calendly booking on the invitee's client, creating it if new."""
        event = await calendly.get_event(event_uri)
        invitee = await calendly.get_invitee(invitee_uri)
        meeting = meeting_from_calendly(event, invitee)
        db = db_of(info)

        result = await db.execute(
            select(LegacyClient).where(LegacyClient.email == invitee.get("email")),
        )
        client = result.scalar_one_or_none()
        if client is not None:
            client.meetings = [*(client.meetings or []), meeting]
            client.updated_at = utcnow()
            await db.commit()
            return Client.from_row(client)

        client = LegacyClient(
            email=invitee.get("email"),
            first_name=invitee.get("first_name"),
            last_name=invitee.get("last_name"),
            status=PHASE_1,
            meetings=[meeting],
        )
        db.add(client)
        await db.commit()
        await db.refresh(client)
        try:
            await notifications.send_intro_meeting_email(
                client.email, name=client.first_name,
                scheduled_for=meeting["scheduledFor"], join_url=meeting["url"],
            )
        except Exception as e:
            logger.error(
                f"Intro meeting email failed: {e}", extra={"recipient": client.email},
            )
        return Client.from_row(client)

    @strawberry.mutation
    async def edit_client_notes(
        self, info: Info, client_id: ClientID, notes: list[str],
    ) -> list[Client]:
        if not notes:
            raise user_input_error("Notes are required", {"notes": "Notes are required"})
        require_user(info)
        client = await _client_or_error(info, client_id)
        client.notes = list(notes)
        client.updated_at = utcnow()
        await db_of(info).commit()
        return await _all_clients(info)

    @strawberry.mutation
    async def edit_client_project(
        self, info: Info, client_id: ClientID,
        title: str | None = None, domain: str | None = None,
        external_dependencies: list[str] | None = None,
    ) -> list[Client]:
        require_user(info)
        client = await _client_or_error(info, client_id)
        project = dict(client.project or {})
        if title is not None:
            project["title"] = title
        if domain is not None:
            project["domain"] = domain
        if external_dependencies is not None:
            project["externalDependencies"] = list(external_dependencies)
        client.project = project
        client.updated_at = utcnow()
        await db_of(info).commit()
        return await _all_clients(info)
