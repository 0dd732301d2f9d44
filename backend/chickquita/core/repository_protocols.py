"""Boundary Protocols — contracts between the command handlers and their collaborators.

Invariants:
    - Core NEVER imports from the shell — dependency arrows point inward only
    - Reads of many rows return newest first (coops/flocks by created_at, records and
      purchases by their own date; flock history by change_date)
    - Stores are implicitly scoped to the caller's tenant: rows of other tenants never
      surface, EXCEPT PurchaseStore.get_by_id, whose result handlers compare explicitly
    - add/update/delete raise UniquenessViolation when a unique constraint rejects the write
    - Any other store failure is an exception the handler wraps as a Failure result

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; the pure core never awaits them
"""

from datetime import date
from typing import Protocol

from chickquita.core.coop import Coop
from chickquita.core.daily_record import DailyRecord
from chickquita.core.domain_types import (
    CoopId, DailyRecordId, FlockHistoryId, FlockId, PurchaseId, PurchaseType, TenantId,
)
from chickquita.core.flock import Flock, FlockHistoryEntry
from chickquita.core.purchase import Purchase


class IdentityContext(Protocol):
    """Already-authenticated caller identity, supplied per request."""
    def is_authenticated(self) -> bool: ...
    def current_tenant_id(self) -> TenantId | None: ...


class CoopStore(Protocol):
    async def get_by_id(self, coop_id: CoopId) -> Coop | None: ...
    async def list_all(self, include_archived: bool = False) -> list[Coop]: ...
    async def exists_by_name(self, name: str) -> bool: ...
    async def count_flocks(self, coop_id: CoopId) -> int: ...
    async def add(self, coop: Coop) -> Coop: ...
    async def update(self, coop: Coop) -> Coop: ...
    async def delete(self, coop_id: CoopId) -> None: ...


class FlockStore(Protocol):
    async def get_by_id(self, flock_id: FlockId) -> Flock | None: ...
    async def list_by_coop(
        self, coop_id: CoopId, include_inactive: bool = False,
    ) -> list[Flock]: ...
    async def exists_by_identifier_in_coop(
        self, coop_id: CoopId, identifier: str,
        exclude_flock_id: FlockId | None = None,
    ) -> bool: ...
    async def add(self, flock: Flock) -> Flock: ...
    async def update(self, flock: Flock) -> Flock: ...


class FlockHistoryStore(Protocol):
    async def get_by_id(self, history_id: FlockHistoryId) -> FlockHistoryEntry | None: ...
    async def update(self, entry: FlockHistoryEntry) -> FlockHistoryEntry: ...


class DailyRecordStore(Protocol):
    async def get_by_id(self, record_id: DailyRecordId) -> DailyRecord | None: ...
    async def search(
        self, flock_id: FlockId | None = None,
        start_date: date | None = None, end_date: date | None = None,
    ) -> list[DailyRecord]: ...
    async def exists_for_flock_and_date(
        self, flock_id: FlockId, record_date: date,
    ) -> bool: ...
    async def add(self, record: DailyRecord) -> DailyRecord: ...
    async def update(self, record: DailyRecord) -> DailyRecord: ...
    async def delete(self, record_id: DailyRecordId) -> None: ...


class PurchaseStore(Protocol):
    async def get_by_id(self, purchase_id: PurchaseId) -> Purchase | None: ...
    async def search(
        self, from_date: date | None = None, to_date: date | None = None,
        purchase_type: PurchaseType | None = None, coop_id: CoopId | None = None,
    ) -> list[Purchase]: ...
    async def add(self, purchase: Purchase) -> Purchase: ...
    async def update(self, purchase: Purchase) -> Purchase: ...
    async def delete(self, purchase_id: PurchaseId) -> None: ...
