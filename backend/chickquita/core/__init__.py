"""Core Layer — pure domain logic: entities, validators, result model, store contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - No IO: store contracts are async Protocols, but nothing in core awaits them
    - Time is always passed in, never read from the clock here

Design Decisions:
    - Functional core separated from the async handler shell (services/)
"""
