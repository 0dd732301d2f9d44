"""Schemas — Pydantic models at the API boundary (request bodies) and handler output (DTOs).

Invariants:
    - Request bodies only coerce types; business rules live in core validators
    - DTOs are frozen projections of domain entities
"""
