"""Flock Aggregate — tests for composition, history and archival invariants.

Tests cover:
    - create() appends one "Initial" entry matching the counts
    - At least one animal is required; negative counts are rejected
    - update() changes identity fields only
    - update_composition() always appends history
    - archive() is idempotent and returns whether it changed anything
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from chickquita.core.errors import DomainValidationError
from chickquita.core.flock import Flock

NOW = datetime(2026, 4, 2, 12, 0, tzinfo=timezone.utc)


def _flock(hens=6, roosters=1, chicks=3) -> Flock:
    return Flock.create(
        uuid4(), uuid4(), "Brown layers", date(2026, 1, 15),
        hens, roosters, chicks, "first batch", NOW,
    )


def test_create_records_initial_history():
    flock = _flock()
    assert flock.is_active
    assert len(flock.history) == 1
    entry = flock.history[0]
    assert entry.reason == "Initial"
    assert entry.notes == "first batch"
    assert (entry.hens, entry.roosters, entry.chicks) == (6, 1, 3)
    assert entry.flock_id == flock.id
    assert entry.tenant_id == flock.tenant_id


def test_create_requires_one_animal():
    with pytest.raises(DomainValidationError, match="At least one animal"):
        _flock(0, 0, 0)


def test_create_rejects_negative_counts():
    with pytest.raises(DomainValidationError) as exc:
        _flock(hens=-1)
    assert exc.value.field == "hens"


def test_create_rejects_future_hatch_date():
    with pytest.raises(DomainValidationError, match="cannot be in the future"):
        Flock.create(
            uuid4(), uuid4(), "Future", NOW.date() + timedelta(days=1),
            1, 0, 0, None, NOW,
        )


def test_update_touches_identity_only():
    flock = _flock()
    later = NOW + timedelta(hours=1)
    flock.update("Renamed", date(2026, 1, 10), later)
    assert flock.identifier == "Renamed"
    assert flock.updated_at == later
    assert (flock.current_hens, flock.current_roosters, flock.current_chicks) == (6, 1, 3)
    assert len(flock.history) == 1


def test_update_composition_appends_history():
    flock = _flock()
    entry = flock.update_composition(5, 1, 3, "Predator loss", None, NOW)
    assert flock.current_hens == 5
    assert flock.history[-1] is entry
    assert len(flock.history) == 2


def test_archive_is_idempotent():
    flock = _flock()
    assert flock.archive(NOW) is True
    stamped = flock.updated_at
    assert flock.archive(NOW + timedelta(days=1)) is False
    assert flock.is_active is False
    assert flock.updated_at == stamped
    assert len(flock.history) == 1


def test_history_notes_edit_keeps_counts():
    flock = _flock()
    entry = flock.history[0]
    entry.update_notes("edited", NOW + timedelta(minutes=5))
    assert entry.notes == "edited"
    assert (entry.hens, entry.roosters, entry.chicks) == (6, 1, 3)
    assert entry.change_date == NOW
