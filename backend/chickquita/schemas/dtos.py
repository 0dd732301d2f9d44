"""DTOs — read projections returned by command and query handlers, plus the pure projectors.

Invariants:
    - project_* functions are pure field mappings: no business logic, no IO
    - DTOs are frozen; handlers hand them to the HTTP shell as-is

Design Decisions:
    - Pydantic models so the HTTP shell serializes them without a second schema
    - FlockDto omits history; history entries are read through their own query
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from chickquita.core.coop import Coop
from chickquita.core.daily_record import DailyRecord
from chickquita.core.domain_types import PurchaseType, QuantityUnit
from chickquita.core.flock import Flock, FlockHistoryEntry
from chickquita.core.purchase import Purchase


class _Dto(BaseModel):
    model_config = ConfigDict(frozen=True)


class CoopDto(_Dto):
    id: UUID
    tenant_id: UUID
    name: str
    location: str | None
    is_active: bool
    flocks_count: int = 0
    created_at: datetime
    updated_at: datetime


class FlockDto(_Dto):
    id: UUID
    tenant_id: UUID
    coop_id: UUID
    identifier: str
    hatch_date: date
    current_hens: int
    current_roosters: int
    current_chicks: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class FlockHistoryDto(_Dto):
    id: UUID
    tenant_id: UUID
    flock_id: UUID
    change_date: datetime
    hens: int
    roosters: int
    chicks: int
    reason: str
    notes: str | None
    created_at: datetime
    updated_at: datetime


class DailyRecordDto(_Dto):
    id: UUID
    tenant_id: UUID
    flock_id: UUID
    record_date: date
    egg_count: int
    notes: str | None
    created_at: datetime
    updated_at: datetime


class PurchaseDto(_Dto):
    id: UUID
    tenant_id: UUID
    coop_id: UUID | None
    name: str
    type: PurchaseType
    amount: Decimal
    quantity: Decimal
    unit: QuantityUnit
    purchase_date: date
    consumed_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


def project_coop(coop: Coop, flocks_count: int = 0) -> CoopDto:
    return CoopDto(
        id=coop.id, tenant_id=coop.tenant_id, name=coop.name,
        location=coop.location, is_active=coop.is_active,
        flocks_count=flocks_count,
        created_at=coop.created_at, updated_at=coop.updated_at,
    )


def project_flock(flock: Flock) -> FlockDto:
    return FlockDto(
        id=flock.id, tenant_id=flock.tenant_id, coop_id=flock.coop_id,
        identifier=flock.identifier, hatch_date=flock.hatch_date,
        current_hens=flock.current_hens,
        current_roosters=flock.current_roosters,
        current_chicks=flock.current_chicks,
        is_active=flock.is_active,
        created_at=flock.created_at, updated_at=flock.updated_at,
    )


def project_flock_history(entry: FlockHistoryEntry) -> FlockHistoryDto:
    return FlockHistoryDto(
        id=entry.id, tenant_id=entry.tenant_id, flock_id=entry.flock_id,
        change_date=entry.change_date, hens=entry.hens,
        roosters=entry.roosters, chicks=entry.chicks,
        reason=entry.reason, notes=entry.notes,
        created_at=entry.created_at, updated_at=entry.updated_at,
    )


def project_daily_record(record: DailyRecord) -> DailyRecordDto:
    return DailyRecordDto(
        id=record.id, tenant_id=record.tenant_id, flock_id=record.flock_id,
        record_date=record.record_date, egg_count=record.egg_count,
        notes=record.notes,
        created_at=record.created_at, updated_at=record.updated_at,
    )


def project_purchase(purchase: Purchase) -> PurchaseDto:
    return PurchaseDto(
        id=purchase.id, tenant_id=purchase.tenant_id,
        coop_id=purchase.coop_id, name=purchase.name, type=purchase.type,
        amount=purchase.amount, quantity=purchase.quantity,
        unit=purchase.unit, purchase_date=purchase.purchase_date,
        consumed_date=purchase.consumed_date, notes=purchase.notes,
        created_at=purchase.created_at, updated_at=purchase.updated_at,
    )
