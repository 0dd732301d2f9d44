"""Queries — read requests, each answered by exactly one query handler.

Invariants:
    - Queries never mutate; their handlers make no store writes
    - Results are tenant-scoped like commands; a missing parent (coop, flock) is NotFound
    - Omitted filters default to None and mean "no restriction"
"""

from dataclasses import dataclass
from datetime import date

from chickquita.core.domain_types import (
    CoopId, FlockId, PurchaseId, PurchaseType,
)


# ─── Coops ───────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class GetCoopsQuery:
    include_archived: bool = False


@dataclass(frozen=True, kw_only=True)
class GetCoopByIdQuery:
    coop_id: CoopId | None = None


# ─── Flocks ──────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class GetFlocksQuery:
    coop_id: CoopId | None = None
    include_inactive: bool = False


@dataclass(frozen=True, kw_only=True)
class GetFlockByIdQuery:
    flock_id: FlockId | None = None


@dataclass(frozen=True, kw_only=True)
class GetFlockHistoryQuery:
    flock_id: FlockId | None = None


# ─── Daily records ───────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class GetDailyRecordsQuery:
    flock_id: FlockId | None = None
    start_date: date | None = None
    end_date: date | None = None


# ─── Purchases ───────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class GetPurchasesQuery:
    from_date: date | None = None
    to_date: date | None = None
    type: PurchaseType | None = None
    flock_id: FlockId | None = None


@dataclass(frozen=True, kw_only=True)
class GetPurchaseByIdQuery:
    purchase_id: PurchaseId | None = None
