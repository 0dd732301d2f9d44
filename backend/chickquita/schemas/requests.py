"""Request Schemas — Pydantic request bodies for the command endpoints.

Invariants:
    - Field names match the command fields they feed, so routes build commands
      with model_dump() plus the ids taken from the path
    - Bodies coerce types only (UUID, date, Decimal, enum); lengths, ranges and
      cross-field rules are reported by the command validators

Design Decisions:
    - Optional fields everywhere: a missing name surfaces as the domain's
      "Coop name is required." instead of a generic pydantic error
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from chickquita.core.domain_types import PurchaseType, QuantityUnit


class CoopRequest(BaseModel):
    """Create / update a coop."""
    name: str | None = None
    location: str | None = None


class FlockCreateRequest(BaseModel):
    identifier: str | None = None
    hatch_date: date | None = None
    initial_hens: int = 0
    initial_roosters: int = 0
    initial_chicks: int = 0
    notes: str | None = None


class FlockUpdateRequest(BaseModel):
    """Identity fields only; composition changes go through mature-chicks."""
    identifier: str | None = None
    hatch_date: date | None = None


class MatureChicksRequest(BaseModel):
    chicks_to_mature: int = 0
    hens: int = 0
    roosters: int = 0
    notes: str | None = None


class HistoryNotesRequest(BaseModel):
    notes: str | None = None


class DailyRecordCreateRequest(BaseModel):
    record_date: date | None = None
    egg_count: int = 0
    notes: str | None = None


class DailyRecordUpdateRequest(BaseModel):
    egg_count: int = 0
    notes: str | None = None


class PurchaseRequest(BaseModel):
    """Create / update a purchase."""
    name: str | None = None
    type: PurchaseType | None = None
    amount: Decimal | None = None
    quantity: Decimal | None = None
    unit: QuantityUnit | None = None
    purchase_date: date | None = None
    coop_id: UUID | None = None
    consumed_date: date | None = None
    notes: str | None = None
