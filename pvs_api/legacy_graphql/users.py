"""User resolvers — registration, login, profile and password management."""

import logging

import strawberry
from sqlalchemy import select
from strawberry.types import Info

from pvs_api.db.base import utcnow
from pvs_api.legacy_graphql import auth
from pvs_api.legacy_graphql.context import db_of, parse_id, require_user
from pvs_api.legacy_graphql.errors import user_input_error
from pvs_api.legacy_graphql.types import User
from pvs_api.models.legacy_user import LegacyUser
from pvs_api.services import notifications

logger = logging.getLogger(__name__)


async def _find_by_email(info: Info, email: str) -> LegacyUser | None:
    result = await db_of(info).execute(
        select(LegacyUser).where(LegacyUser.email == email.strip().lower()),
    )
    return result.scalar_one_or_none()


def _with_token(user: LegacyUser) -> User:
    return User.from_row(user, auth.create_token(str(user.id), user.email))


@strawberry.type
class UserQuery:

    @strawberry.field
    async def get_user(self, info: Info, email: str) -> User:
        user = await _find_by_email(info, email)
        if user is None:
            raise user_input_error(
                "User Doesn't Exist",
                {"user": "No user found with those credentials"},
            )
        return User.from_row(user)

    @strawberry.field
    async def get_all_users(self, info: Info) -> list[User]:
        result = await db_of(info).execute(select(LegacyUser))
        users = result.scalars().all()
        if not users:
            raise user_input_error("No Users", {"user": "No users found"})
        return [User.from_row(u) for u in users]

    @strawberry.field
    async def get_logged_in_user(self, info: Info) -> User:
        token = require_user(info)
        user = await _find_by_email(info, token.get("email", ""))
        if user is None:
            raise user_input_error("User not found")
        return User.from_row(user)


@strawberry.type
class UserMutation:

    @strawberry.mutation
    async def register(
        self, info: Info, email: str, password: str,
        first_name: str | None = None, last_name: str | None = None,
    ) -> User:
        errors = auth.validate_registration(email, password)
        if errors:
            raise user_input_error("Registration Errors", errors)
        if await _find_by_email(info, email):
            raise user_input_error(
                "User Exists",
                {"email": "User already exists with these credentials"},
            )
        db = db_of(info)
        user = LegacyUser(
            email=email.strip().lower(),
            password=auth.hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info("Legacy user registered", extra={"resource_id": str(user.id)})
        return _with_token(user)

    @strawberry.mutation
    async def login(self, info: Info, email: str, password: str) -> User:
        errors = auth.validate_login(email, password)
        if errors:
            raise user_input_error("Login Error", errors)
        user = await _find_by_email(info, email)
        if user is None:
            raise user_input_error(
                "User not found. Try another email, or create an account with us.",
                {"invalid": email},
            )
        if not auth.verify_password(password, user.password):
            raise user_input_error("Wrong password", {"general": "Invalid credentials"})
        return _with_token(user)

    @strawberry.mutation
    async def update_user(
        self, info: Info, email: str,
        first_name: str | None = None, last_name: str | None = None,
    ) -> User:
        require_user(info)
        if not email.strip():
            raise user_input_error("Invalid Credentials", {"general": "Email is required"})
        user = await _find_by_email(info, email)
        if user is None:
            raise user_input_error("Not Found", {"general": "User not found"})
        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        user.updated_at = utcnow()
        await db_of(info).commit()
        return _with_token(user)

    @strawberry.mutation
    async def update_password(self, info: Info, email: str, new_password: str) -> User:
        if not email.strip() or not new_password:
            raise user_input_error("Invalid credentials")
        if not auth.is_valid_password(new_password):
            raise user_input_error("Invalid Credentials", {"password": "Invalid password"})
        user = await _find_by_email(info, email)
        if user is None:
            raise user_input_error("User not found")
        if auth.verify_password(new_password, user.password):
            raise user_input_error(
                "Matching Passwords",
                {"password": "Your new password can't match your previous password"},
            )
        user.password = auth.hash_password(new_password)
        user.updated_at = utcnow()
        await db_of(info).commit()
        return _with_token(user)

    @strawberry.mutation
    async def delete_user(self, info: Info, id: str) -> list[User]:
        db = db_of(info)
        user_id = parse_id(id)
        user = await db.get(LegacyUser, user_id) if user_id else None
        if user is None:
            raise user_input_error("User not found")
        await db.delete(user)
        await db.commit()
        result = await db.execute(select(LegacyUser))
        return [User.from_row(u) for u in result.scalars().all()]

    @strawberry.mutation
    async def send_password_reset_email(self, info: Info, email: str) -> list[User]:
        user = await _find_by_email(info, email)
        if user is None:
            raise user_input_error(
                "User not found",
                {"password": "No user was found with that email. Please try again, or register for an account"},
            )
        token = auth.create_reset_token(str(user.id), user.email)
        await notifications.send_password_reset_email(
            user.email, name=user.first_name, token=token,
        )
        return [User.from_row(user)]
