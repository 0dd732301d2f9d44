"""Purchase Aggregate — a recorded expense, optionally tied to a coop.

Invariants:
    - name 1-100 chars, amount >= 0, quantity > 0, notes at most 500 chars
    - purchase_date not after today; consumed_date, when set, not before purchase_date
    - tenant_id never changes; ownership is compared by handlers, not here
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from chickquita.core.domain_types import (
    CoopId, PurchaseId, PurchaseType, QuantityUnit, TenantId,
    MAX_NOTES_LENGTH, MAX_PURCHASE_NAME_LENGTH,
)
from chickquita.core.enforce_edit_window import utc_date
from chickquita.core.errors import DomainValidationError
from chickquita.core.rules import (
    check_non_negative, check_not_future, check_optional_text,
    check_positive, check_required_text,
)


@dataclass(frozen=True)
class PurchaseDetails:
    """The editable fields of a purchase, shared by create() and update()."""
    name: str
    type: PurchaseType
    amount: Decimal
    quantity: Decimal
    unit: QuantityUnit
    purchase_date: date
    coop_id: CoopId | None = None
    consumed_date: date | None = None
    notes: str | None = None

    def ensure_valid(self, today: date) -> None:
        checks = (
            (check_required_text(
                self.name, "Purchase name", MAX_PURCHASE_NAME_LENGTH,
            ), "name"),
            (check_non_negative(
                self.amount, "Amount must be greater than or equal to zero.",
            ), "amount"),
            (check_positive(
                self.quantity, "Quantity must be greater than zero.",
            ), "quantity"),
            (check_not_future(self.purchase_date, "Purchase date", today), "purchase_date"),
            (check_optional_text(self.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
        )
        for problem, field_name in checks:
            if problem:
                raise DomainValidationError(problem, field_name)
        if self.consumed_date is not None and self.consumed_date < self.purchase_date:
            raise DomainValidationError(
                "Consumed date cannot be before purchase date.", "consumed_date",
            )


@dataclass
class Purchase:
    id: PurchaseId
    tenant_id: TenantId
    name: str
    type: PurchaseType
    amount: Decimal
    quantity: Decimal
    unit: QuantityUnit
    purchase_date: date
    coop_id: CoopId | None
    consumed_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls, tenant_id: TenantId, details: PurchaseDetails, now: datetime,
    ) -> "Purchase":
        details.ensure_valid(utc_date(now))
        return cls(
            id=PurchaseId(uuid4()),
            tenant_id=tenant_id,
            name=details.name,
            type=details.type,
            amount=details.amount,
            quantity=details.quantity,
            unit=details.unit,
            purchase_date=details.purchase_date,
            coop_id=details.coop_id,
            consumed_date=details.consumed_date,
            notes=details.notes,
            created_at=now,
            updated_at=now,
        )

    def update(self, details: PurchaseDetails, now: datetime) -> None:
        details.ensure_valid(utc_date(now))
        self.name = details.name
        self.type = details.type
        self.amount = details.amount
        self.quantity = details.quantity
        self.unit = details.unit
        self.purchase_date = details.purchase_date
        self.coop_id = details.coop_id
        self.consumed_date = details.consumed_date
        self.notes = details.notes
        self.updated_at = now
