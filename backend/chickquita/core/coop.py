"""Coop Aggregate — a tenant's housing location for flocks.

Invariants:
    - name is 1-100 chars, location at most 200 chars
    - tenant_id and id never change after create()
    - archive() is one-way here; archiving twice raises (handlers report Validation)

Design Decisions:
    - Hard-delete eligibility (no owned flocks) is a store count, not aggregate state:
      the coop does not load its flocks
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from chickquita.core.domain_types import (
    CoopId, TenantId, MAX_COOP_NAME_LENGTH, MAX_LOCATION_LENGTH,
)
from chickquita.core.errors import DomainValidationError
from chickquita.core.rules import check_optional_text, check_required_text


def _ensure_valid(name: str, location: str | None) -> None:
    problem = check_required_text(name, "Coop name", MAX_COOP_NAME_LENGTH)
    if problem:
        raise DomainValidationError(problem, "name")
    problem = check_optional_text(location, "Location", MAX_LOCATION_LENGTH)
    if problem:
        raise DomainValidationError(problem, "location")


@dataclass
class Coop:
    id: CoopId
    tenant_id: TenantId
    name: str
    location: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls, tenant_id: TenantId, name: str, location: str | None, now: datetime,
    ) -> "Coop":
        _ensure_valid(name, location)
        return cls(
            id=CoopId(uuid4()),
            tenant_id=tenant_id,
            name=name,
            location=location,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def update(self, name: str, location: str | None, now: datetime) -> None:
        _ensure_valid(name, location)
        self.name = name
        self.location = location
        self.updated_at = now

    def archive(self, now: datetime) -> None:
        if not self.is_active:
            raise DomainValidationError("Coop is already archived")
        self.is_active = False
        self.updated_at = now
