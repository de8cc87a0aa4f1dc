"""GraphQL Types — strawberry object types over the legacy tables.

Field names are snake_case here and camelCase on the wire (strawberry default).
Meeting and project payloads live in JSON columns and are mapped from dicts.
"""

import strawberry

from pvs_api.models.legacy_client import LegacyClient
from pvs_api.models.legacy_user import LegacyUser
from pvs_api.models.newsletter_participant import NewsletterParticipant


@strawberry.type
class User:
    id: strawberry.ID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    token: str | None = None

    @classmethod
    def from_row(cls, row: LegacyUser, token: str | None = None) -> "User":
        return cls(
            id=strawberry.ID(str(row.id)), email=row.email,
            first_name=row.first_name, last_name=row.last_name, token=token,
        )


@strawberry.type
class MeetingPrepInfo:
    question: str | None = None
    answer: str | None = None
    position: float | None = None


@strawberry.type
class Meeting:
    location: str | None = None
    url: str | None = None
    created: str | None = None
    scheduled_for: str | None = None
    prep_info: list[MeetingPrepInfo] = strawberry.field(default_factory=list)
    notes: list[str] = strawberry.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Meeting":
        return cls(
            location=data.get("location"),
            url=data.get("url"),
            created=data.get("created"),
            scheduled_for=data.get("scheduledFor"),
            prep_info=[
                MeetingPrepInfo(
                    question=p.get("question"), answer=p.get("answer"),
                    position=p.get("position"),
                )
                for p in data.get("prepInfo") or []
            ],
            notes=list(data.get("notes") or []),
        )


@strawberry.type
class ClientProject:
    title: str | None = None
    domain: str | None = None
    external_dependencies: list[str] = strawberry.field(default_factory=list)
    hours_logged: float | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ClientProject":
        return cls(
            title=data.get("title"),
            domain=data.get("domain"),
            external_dependencies=list(data.get("externalDependencies") or []),
            hours_logged=data.get("hoursLogged"),
            notes=data.get("notes"),
        )


@strawberry.type
class Client:
    id: strawberry.ID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    status: str | None = None
    meetings: list[Meeting] = strawberry.field(default_factory=list)
    project: ClientProject | None = None
    notes: list[str] = strawberry.field(default_factory=list)

    @classmethod
    def from_row(cls, row: LegacyClient) -> "Client":
        return cls(
            id=strawberry.ID(str(row.id)),
            email=row.email,
            first_name=row.first_name,
            last_name=row.last_name,
            status=row.status,
            meetings=[Meeting.from_dict(m) for m in row.meetings or []],
            project=ClientProject.from_dict(row.project) if row.project else None,
            notes=list(row.notes or []),
        )


@strawberry.type
class NewsletterUser:
    id: strawberry.ID
    email: str
    name: str | None = None
    subscribed: bool = True

    @classmethod
    def from_row(cls, row: NewsletterParticipant) -> "NewsletterUser":
        return cls(
            id=strawberry.ID(str(row.id)), email=row.email, name=row.name,
            subscribed=row.subscribed,
        )
