"""DailyRecord Aggregate — egg count for one flock on one calendar date.

Invariants:
    - flock_id and record_date never change after create()
    - record_date is not after today, egg_count >= 0, notes at most 500 chars
    - update() is refused outside the same-day edit window (see enforce_edit_window)
"""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import uuid4

from chickquita.core.domain_types import (
    DailyRecordId, FlockId, TenantId, MAX_NOTES_LENGTH,
)
from chickquita.core.enforce_edit_window import (
    EDIT_RESTRICTION_UPDATE, is_editable, utc_date,
)
from chickquita.core.errors import DomainValidationError
from chickquita.core.rules import (
    check_non_negative, check_not_future, check_optional_text,
)


def _ensure_values(egg_count: int, notes: str | None) -> None:
    problem = check_non_negative(egg_count, "Egg count cannot be negative.")
    if problem:
        raise DomainValidationError(problem, "egg_count")
    problem = check_optional_text(notes, "Notes", MAX_NOTES_LENGTH)
    if problem:
        raise DomainValidationError(problem, "notes")


@dataclass
class DailyRecord:
    id: DailyRecordId
    tenant_id: TenantId
    flock_id: FlockId
    record_date: date
    egg_count: int
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls, tenant_id: TenantId, flock_id: FlockId, record_date: date,
        egg_count: int, notes: str | None, now: datetime,
    ) -> "DailyRecord":
        problem = check_not_future(record_date, "Record date", utc_date(now))
        if problem:
            raise DomainValidationError(problem, "record_date")
        _ensure_values(egg_count, notes)
        return cls(
            id=DailyRecordId(uuid4()),
            tenant_id=tenant_id,
            flock_id=flock_id,
            record_date=record_date,
            egg_count=egg_count,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def is_editable(self, now: datetime) -> bool:
        return is_editable(self.created_at, now)

    def update(self, egg_count: int, notes: str | None, now: datetime) -> None:
        if not self.is_editable(now):
            raise DomainValidationError(EDIT_RESTRICTION_UPDATE)
        _ensure_values(egg_count, notes)
        self.egg_count = egg_count
        self.notes = notes
        self.updated_at = now
