"""PixelVerse Ops API — studio operations backend (clients, sites, apps, releases, intake).

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
