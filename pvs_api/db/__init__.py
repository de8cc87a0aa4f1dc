"""Database Declarations — SQLAlchemy bases for the primary and Domani datastores.

Invariants:
    - Engines and sessions live in infrastructure/database.py, never here
"""
