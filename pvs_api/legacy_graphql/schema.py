"""Legacy GraphQL Schema — merged Query/Mutation and the FastAPI router serving it.

Invariants:
    - Served at /graphql over the primary datastore session (get_db)
    - Input errors carry extensions.code = BAD_USER_INPUT and an `errors` map
"""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from pvs_api.legacy_graphql.clients import ClientMutation, ClientQuery
from pvs_api.legacy_graphql.context import get_context
from pvs_api.legacy_graphql.newsletter import NewsletterMutation, NewsletterQuery
from pvs_api.legacy_graphql.users import UserMutation, UserQuery

Query = merge_types("Query", (UserQuery, ClientQuery, NewsletterQuery))
Mutation = merge_types("Mutation", (UserMutation, ClientMutation, NewsletterMutation))

schema = strawberry.Schema(query=Query, mutation=Mutation)

router = GraphQLRouter(schema, context_getter=get_context)
