"""GraphQL request context — DB session and the caller decoded from the bearer token."""

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.types import Info

from pvs_api.infrastructure.database import get_db
from pvs_api.legacy_graphql.auth import user_from_header
from pvs_api.legacy_graphql.errors import invalid_token_error


async def get_context(request: Request, db: AsyncSession = Depends(get_db)) -> dict:
    return {
        "db": db,
        "user": user_from_header(request.headers.get("authorization")),
    }


def db_of(info: Info) -> AsyncSession:
    return info.context["db"]


def require_user(info: Info) -> dict:
    """Token payload of the caller; raises "Invalid User Token" when absent or invalid."""
    user = info.context.get("user")
    if not user:
        raise invalid_token_error()
    return user


def parse_id(value: str) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None
