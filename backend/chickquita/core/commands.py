"""Commands — intent-to-mutate values, each consumed by exactly one handler.

Invariants:
    - Commands are frozen; handlers never mutate their input
    - Every field a form may omit defaults to None so validators, not constructors,
      report what is missing

Design Decisions:
    - kw_only dataclasses: the HTTP shell builds commands from request bodies by name
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from chickquita.core.domain_types import (
    CoopId, DailyRecordId, FlockHistoryId, FlockId, PurchaseId,
    PurchaseType, QuantityUnit,
)


# ─── Coops ───────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class CreateCoopCommand:
    name: str | None = None
    location: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateCoopCommand:
    coop_id: CoopId | None = None
    name: str | None = None
    location: str | None = None


@dataclass(frozen=True, kw_only=True)
class ArchiveCoopCommand:
    coop_id: CoopId | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteCoopCommand:
    coop_id: CoopId | None = None


# ─── Flocks ──────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class CreateFlockCommand:
    coop_id: CoopId | None = None
    identifier: str | None = None
    hatch_date: date | None = None
    initial_hens: int = 0
    initial_roosters: int = 0
    initial_chicks: int = 0
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateFlockCommand:
    """Identifier and hatch date only — composition changes go through maturation."""
    flock_id: FlockId | None = None
    identifier: str | None = None
    hatch_date: date | None = None


@dataclass(frozen=True, kw_only=True)
class ArchiveFlockCommand:
    flock_id: FlockId | None = None


@dataclass(frozen=True, kw_only=True)
class MatureChicksCommand:
    flock_id: FlockId | None = None
    chicks_to_mature: int = 0
    hens: int = 0
    roosters: int = 0
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateFlockHistoryNotesCommand:
    history_id: FlockHistoryId | None = None
    notes: str | None = None


# ─── Daily records ───────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class CreateDailyRecordCommand:
    flock_id: FlockId | None = None
    record_date: date | None = None
    egg_count: int = 0
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateDailyRecordCommand:
    record_id: DailyRecordId | None = None
    egg_count: int = 0
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteDailyRecordCommand:
    record_id: DailyRecordId | None = None


# ─── Purchases ───────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class CreatePurchaseCommand:
    name: str | None = None
    type: PurchaseType | None = None
    amount: Decimal | None = None
    quantity: Decimal | None = None
    unit: QuantityUnit | None = None
    purchase_date: date | None = None
    coop_id: CoopId | None = None
    consumed_date: date | None = None
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdatePurchaseCommand(CreatePurchaseCommand):
    purchase_id: PurchaseId | None = None


@dataclass(frozen=True, kw_only=True)
class DeletePurchaseCommand:
    purchase_id: PurchaseId | None = None
