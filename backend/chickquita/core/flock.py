"""Flock Aggregate — a group of birds in one coop, with its append-only composition history.

Invariants:
    - create() appends exactly one "Initial" history entry matching the initial counts,
      stamped with the creation instant
    - history is append-only; entries are never removed and only their notes change
    - current counts change only through update_composition(), which always appends
    - update() touches identifier and hatch_date only — never counts, never history
    - archive() flips is_active and nothing else; archiving twice is a no-op
    - There is no transition back from archived to active

Design Decisions:
    - History lives on the aggregate: stores persist entries the flock appended,
      so the composition/history pairing cannot drift
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import uuid4

from chickquita.core.domain_types import (
    CoopId, FlockHistoryId, FlockId, HistoryReason, TenantId,
    MAX_FLOCK_IDENTIFIER_LENGTH, MAX_NOTES_LENGTH, MAX_REASON_LENGTH,
)
from chickquita.core.enforce_edit_window import utc_date
from chickquita.core.errors import DomainValidationError
from chickquita.core.rules import (
    check_non_negative, check_not_future, check_optional_text, check_required_text,
)

ARCHIVED_FLOCK_MATURATION = "Cannot mature chicks in an archived flock"


def _raise_if(problem: str | None, field_name: str | None) -> None:
    if problem:
        raise DomainValidationError(problem, field_name)


def _ensure_counts(hens: int, roosters: int, chicks: int) -> None:
    _raise_if(check_non_negative(hens, "Hens count cannot be negative."), "hens")
    _raise_if(
        check_non_negative(roosters, "Roosters count cannot be negative."), "roosters",
    )
    _raise_if(check_non_negative(chicks, "Chicks count cannot be negative."), "chicks")


@dataclass
class FlockHistoryEntry:
    """One composition snapshot. Counts, reason and change_date are fixed at creation."""
    id: FlockHistoryId
    tenant_id: TenantId
    flock_id: FlockId
    change_date: datetime
    hens: int
    roosters: int
    chicks: int
    reason: str
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def record(
        cls, tenant_id: TenantId, flock_id: FlockId, hens: int, roosters: int,
        chicks: int, reason: str, notes: str | None, now: datetime,
    ) -> "FlockHistoryEntry":
        _ensure_counts(hens, roosters, chicks)
        _raise_if(check_required_text(reason, "Reason", MAX_REASON_LENGTH), "reason")
        _raise_if(check_optional_text(notes, "Notes", MAX_NOTES_LENGTH), "notes")
        return cls(
            id=FlockHistoryId(uuid4()),
            tenant_id=tenant_id,
            flock_id=flock_id,
            change_date=now,
            hens=hens,
            roosters=roosters,
            chicks=chicks,
            reason=reason,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def update_notes(self, notes: str | None, now: datetime) -> None:
        _raise_if(check_optional_text(notes, "Notes", MAX_NOTES_LENGTH), "notes")
        self.notes = notes
        self.updated_at = now


@dataclass
class Flock:
    id: FlockId
    tenant_id: TenantId
    coop_id: CoopId
    identifier: str
    hatch_date: date
    current_hens: int
    current_roosters: int
    current_chicks: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    history: list[FlockHistoryEntry] = field(default_factory=list)

    @classmethod
    def create(
        cls, tenant_id: TenantId, coop_id: CoopId, identifier: str,
        hatch_date: date, hens: int, roosters: int, chicks: int,
        notes: str | None, now: datetime,
    ) -> "Flock":
        _ensure_identity(identifier, hatch_date, now)
        _ensure_counts(hens, roosters, chicks)
        if hens + roosters + chicks == 0:
            raise DomainValidationError(
                "At least one animal type must have a count greater than 0.",
            )
        flock = cls(
            id=FlockId(uuid4()),
            tenant_id=tenant_id,
            coop_id=coop_id,
            identifier=identifier,
            hatch_date=hatch_date,
            current_hens=hens,
            current_roosters=roosters,
            current_chicks=chicks,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        flock.history.append(FlockHistoryEntry.record(
            tenant_id, flock.id, hens, roosters, chicks,
            HistoryReason.INITIAL.value, notes, now,
        ))
        return flock

    def update(self, identifier: str, hatch_date: date, now: datetime) -> None:
        _ensure_identity(identifier, hatch_date, now)
        self.identifier = identifier
        self.hatch_date = hatch_date
        self.updated_at = now

    def update_composition(
        self, hens: int, roosters: int, chicks: int, reason: str,
        notes: str | None, now: datetime,
    ) -> FlockHistoryEntry:
        entry = FlockHistoryEntry.record(
            self.tenant_id, self.id, hens, roosters, chicks, reason, notes, now,
        )
        self.history.append(entry)
        self.current_hens = hens
        self.current_roosters = roosters
        self.current_chicks = chicks
        self.updated_at = now
        return entry

    def mature_chicks(
        self, chicks_to_mature: int, hens: int, roosters: int,
        notes: str | None, now: datetime,
    ) -> FlockHistoryEntry:
        """Move chicks into the adult counts, recording a "Maturation" entry."""
        if not self.is_active:
            raise DomainValidationError(ARCHIVED_FLOCK_MATURATION)
        if chicks_to_mature > self.current_chicks:
            raise DomainValidationError(
                f"Cannot mature {chicks_to_mature} chicks: "
                f"flock only has {self.current_chicks} chicks",
            )
        if hens + roosters != chicks_to_mature:
            raise DomainValidationError(
                "The sum of hens and roosters must equal chicks to mature.",
            )
        return self.update_composition(
            self.current_hens + hens,
            self.current_roosters + roosters,
            self.current_chicks - chicks_to_mature,
            HistoryReason.MATURATION.value,
            notes,
            now,
        )

    def archive(self, now: datetime) -> bool:
        """Archive the flock. Returns False when it was already archived."""
        if not self.is_active:
            return False
        self.is_active = False
        self.updated_at = now
        return True


def _ensure_identity(identifier: str, hatch_date: date, now: datetime) -> None:
    _raise_if(
        check_required_text(
            identifier, "Flock identifier", MAX_FLOCK_IDENTIFIER_LENGTH,
        ),
        "identifier",
    )
    _raise_if(check_not_future(hatch_date, "Hatch date", utc_date(now)), "hatch_date")
