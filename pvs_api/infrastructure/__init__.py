"""Infrastructure Layer — datastores, observability and third-party clients.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Outbound HTTP failures map to ExternalServiceError; nothing is retried

Design Decisions:
    - One module per provider; callers inject an httpx.AsyncClient in tests
"""
