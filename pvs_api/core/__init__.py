"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - URL indexing state rules live here so deployments services only read and
      write rows (ADR: functional core, imperative shell)
"""
