"""Legacy GraphQL — the earlier dashboard API (users, prospects, newsletter).

Invariants:
    - Separate tables (legacy_users, legacy_clients, ggc_newsletter) in the primary datastore
    - Auth is a bearer JWT verified per request; missing/invalid tokens mean "no user"

Design Decisions:
    - strawberry over a hand-written GraphQL layer: typed resolvers, FastAPI router
    - One module per resolver group, merged in schema.py
"""
