"""GraphQL error helpers — Apollo-style error codes in extensions."""

from graphql import GraphQLError

BAD_USER_INPUT = "BAD_USER_INPUT"
UNAUTHENTICATED = "UNAUTHENTICATED"


def user_input_error(message: str, errors: dict | None = None) -> GraphQLError:
    extensions = {"code": BAD_USER_INPUT}
    if errors:
        extensions["errors"] = errors
    return GraphQLError(message, extensions=extensions)


def invalid_token_error() -> GraphQLError:
    return GraphQLError("Invalid User Token", extensions={"code": UNAUTHENTICATED})
