"""Services Layer — command handlers and command dispatch.

Invariants:
    - Handlers split by aggregate (max 4 public commands each)
    - Command dispatch uses explicit dict mapping (no auto-discovery)
    - Handlers return Result values; expected outcomes never raise

Design Decisions:
    - One handler file per aggregate for locality
"""
