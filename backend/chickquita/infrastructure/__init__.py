"""Infrastructure Layer — persistence, request identity and cross-cutting concerns.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - All database failures are mapped to core StoreError subclasses

Design Decisions:
    - Stores translate rows to domain entities so handlers never see ORM objects
"""
