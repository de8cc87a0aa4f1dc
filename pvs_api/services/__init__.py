"""Services Layer — one service class per resource plus outbound notifications.

Invariants:
    - Services raise PvsError subclasses; routes never build error responses
    - Every outbound email or alert goes through services/notifications.py

Design Decisions:
    - Service classes take the AsyncSession in __init__ (one per request)
"""
