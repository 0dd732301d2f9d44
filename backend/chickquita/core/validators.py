"""Command Validators — structural checks on a command's own fields, before any store access.

Invariants:
    - Every validator is PURE: (command, today) -> list[FieldViolation], empty when valid
    - All violations of a command are collected, never just the first
    - Cross-field rules (at least one animal, hens + roosters == chicks_to_mature)
      are reported with field=None
    - require_id covers the target-id check that must run before a lookup

Design Decisions:
    - Plain functions, one per command, over a rule-builder DSL: each rule list reads
      top to bottom like the form it guards
    - Store-dependent rules (existence, uniqueness, edit window) live in handlers
"""

from datetime import date
from uuid import UUID

from chickquita.core.commands import (
    CreateCoopCommand, CreateDailyRecordCommand, CreateFlockCommand,
    CreatePurchaseCommand, MatureChicksCommand, UpdateCoopCommand,
    UpdateDailyRecordCommand, UpdateFlockCommand, UpdateFlockHistoryNotesCommand,
)
from chickquita.core.domain_types import (
    PurchaseType, QuantityUnit,
    MAX_COOP_NAME_LENGTH, MAX_FLOCK_IDENTIFIER_LENGTH, MAX_LOCATION_LENGTH,
    MAX_NOTES_LENGTH, MAX_PURCHASE_NAME_LENGTH,
)
from chickquita.core.errors import FieldViolation
from chickquita.core.rules import (
    check_non_negative, check_not_future, check_optional_text,
    check_positive, check_required_text,
)


def _collect(*checks: tuple[str | None, str | None]) -> list[FieldViolation]:
    return [
        FieldViolation(field_name, problem)
        for problem, field_name in checks
        if problem
    ]


def require_id(value: UUID | None, label: str, field_name: str) -> list[FieldViolation]:
    if value is None:
        return [FieldViolation(field_name, f"{label} is required.")]
    return []


# ─── Coops ───────────────────────────────────────────────────────

def validate_coop_fields(
    command: CreateCoopCommand | UpdateCoopCommand,
) -> list[FieldViolation]:
    return _collect(
        (check_required_text(command.name, "Coop name", MAX_COOP_NAME_LENGTH), "name"),
        (check_optional_text(
            command.location, "Location", MAX_LOCATION_LENGTH,
        ), "location"),
    )


# ─── Flocks ──────────────────────────────────────────────────────

def _flock_identity(identifier: str | None, hatch_date: date | None, today: date):
    return (
        (check_required_text(
            identifier, "Flock identifier", MAX_FLOCK_IDENTIFIER_LENGTH,
        ), "identifier"),
        (check_not_future(hatch_date, "Hatch date", today), "hatch_date"),
    )


def validate_create_flock(command: CreateFlockCommand, today: date) -> list[FieldViolation]:
    violations = require_id(command.coop_id, "Coop ID", "coop_id")
    violations += _collect(
        *_flock_identity(command.identifier, command.hatch_date, today),
        (check_non_negative(
            command.initial_hens, "Initial hens count cannot be negative.",
        ), "initial_hens"),
        (check_non_negative(
            command.initial_roosters, "Initial roosters count cannot be negative.",
        ), "initial_roosters"),
        (check_non_negative(
            command.initial_chicks, "Initial chicks count cannot be negative.",
        ), "initial_chicks"),
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )
    if not (
        command.initial_hens > 0
        or command.initial_roosters > 0
        or command.initial_chicks > 0
    ):
        violations.append(FieldViolation(
            None, "At least one animal type must have a count greater than 0.",
        ))
    return violations


def validate_update_flock(command: UpdateFlockCommand, today: date) -> list[FieldViolation]:
    return _collect(*_flock_identity(command.identifier, command.hatch_date, today))


def validate_mature_chicks(command: MatureChicksCommand) -> list[FieldViolation]:
    violations = _collect(
        (check_positive(
            command.chicks_to_mature, "Chicks to mature must be greater than 0.",
        ), "chicks_to_mature"),
        (check_non_negative(command.hens, "Hens count cannot be negative."), "hens"),
        (check_non_negative(
            command.roosters, "Roosters count cannot be negative.",
        ), "roosters"),
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )
    if command.hens + command.roosters != command.chicks_to_mature:
        violations.append(FieldViolation(
            None, "The sum of hens and roosters must equal chicks to mature.",
        ))
    return violations


def validate_history_notes(command: UpdateFlockHistoryNotesCommand) -> list[FieldViolation]:
    return _collect(
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )


# ─── Daily records ───────────────────────────────────────────────

def validate_create_daily_record(
    command: CreateDailyRecordCommand, today: date,
) -> list[FieldViolation]:
    violations = require_id(command.flock_id, "Flock ID", "flock_id")
    violations += _collect(
        (check_not_future(command.record_date, "Record date", today), "record_date"),
        (check_non_negative(
            command.egg_count, "Egg count cannot be negative.",
        ), "egg_count"),
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )
    return violations


def validate_update_daily_record(command: UpdateDailyRecordCommand) -> list[FieldViolation]:
    return _collect(
        (check_non_negative(
            command.egg_count, "Egg count cannot be negative.",
        ), "egg_count"),
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )


# ─── Purchases ───────────────────────────────────────────────────

def validate_purchase_fields(command: CreatePurchaseCommand, today: date) -> list[FieldViolation]:
    """Shared by create and update: UpdatePurchaseCommand extends CreatePurchaseCommand."""
    violations = _collect(
        (check_required_text(
            command.name, "Purchase name", MAX_PURCHASE_NAME_LENGTH,
        ), "name"),
        (check_non_negative(
            command.amount, "Amount must be greater than or equal to zero.",
        ), "amount"),
        (check_positive(
            command.quantity, "Quantity must be greater than zero.",
        ), "quantity"),
        (check_not_future(
            command.purchase_date, "Purchase date", today,
        ), "purchase_date"),
        (check_optional_text(command.notes, "Notes", MAX_NOTES_LENGTH), "notes"),
    )
    if not isinstance(command.type, PurchaseType):
        violations.append(FieldViolation("type", "Purchase type must be a valid value."))
    if not isinstance(command.unit, QuantityUnit):
        violations.append(FieldViolation("unit", "Quantity unit must be a valid value."))
    if (
        command.consumed_date is not None
        and command.purchase_date is not None
        and command.consumed_date < command.purchase_date
    ):
        violations.append(FieldViolation(
            "consumed_date", "Consumed date cannot be before purchase date.",
        ))
    return violations
