"""Pydantic Schemas — request validation for every REST endpoint.

Invariants:
    - Schemas validate at system boundary (request bodies, query params)
    - Domain value sets from core/domain_types.py used for enum fields
    - camelCase wire names mapped with Field(alias=...) and populate_by_name

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
    - Responses are plain row dicts (to_dict()), so no response schemas
"""
