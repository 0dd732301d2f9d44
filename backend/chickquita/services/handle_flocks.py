"""Flock Handlers — create, update, archive, mature_chicks.

Invariants:
    - Flock identifiers are unique per coop (exact match); update excludes the flock itself
    - update never changes composition counts or history
    - archive is idempotent: an archived flock succeeds with no store write
    - Cross-tenant flocks/coops are invisible: NotFound "Flock not found" / "Coop not found"
    - mature_chicks appends exactly one "Maturation" history entry

Design Decisions:
    - Conflict probe runs after field validation so invalid identifiers never reach the store
"""

import logging

from chickquita.core.commands import (
    ArchiveFlockCommand, CreateFlockCommand, MatureChicksCommand, UpdateFlockCommand,
)
from chickquita.core.domain_types import TenantId
from chickquita.core.errors import Error
from chickquita.core.flock import ARCHIVED_FLOCK_MATURATION, Flock
from chickquita.core.repository_protocols import CoopStore, FlockStore, IdentityContext
from chickquita.core.result import Result, Success
from chickquita.core.validators import (
    require_id, validate_create_flock, validate_mature_chicks, validate_update_flock,
)
from chickquita.schemas.dtos import FlockDto, project_flock
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)

FLOCK_IDENTIFIER_CONFLICT = "A flock with this identifier already exists in the coop"


class FlockHandlers(HandlerBase):
    """Flock command handlers."""

    def __init__(
        self, identity: IdentityContext, flocks: FlockStore, coops: CoopStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._flocks = flocks
        self._coops = coops

    async def create(self, command: CreateFlockCommand) -> Result[FlockDto]:
        name = "CreateFlockCommand"
        logger.info(
            f"Processing {name} - coop: {command.coop_id}, "
            f"identifier: {command.identifier}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = validate_create_flock(command, self.today())
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._create(auth.value, command), "create", "flock",
            FLOCK_IDENTIFIER_CONFLICT,
        )

    async def _create(self, tenant_id: TenantId, command: CreateFlockCommand):
        name = "CreateFlockCommand"
        coop = await self._coops.get_by_id(command.coop_id)
        if coop is None:
            return self.reject(
                name, Error.not_found("Coop not found"), entity_id=str(command.coop_id),
            )
        if await self._flocks.exists_by_identifier_in_coop(coop.id, command.identifier):
            return self.reject(name, Error.conflict(FLOCK_IDENTIFIER_CONFLICT))
        flock = Flock.create(
            tenant_id, coop.id, command.identifier, command.hatch_date,
            command.initial_hens, command.initial_roosters, command.initial_chicks,
            command.notes, self.now(),
        )
        added = await self._flocks.add(flock)
        logger.info(
            f"Created flock {added.id} in coop {coop.id}",
            extra={"tenant_id": str(tenant_id), "entity_id": str(added.id)},
        )
        return Success(project_flock(added))

    async def update(self, command: UpdateFlockCommand) -> Result[FlockDto]:
        name = "UpdateFlockCommand"
        logger.info(f"Processing {name} - id: {command.flock_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.flock_id, "Flock ID", "flock_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._update(command), "update", "flock", FLOCK_IDENTIFIER_CONFLICT,
        )

    async def _update(self, command: UpdateFlockCommand):
        name = "UpdateFlockCommand"
        flock = await self._flocks.get_by_id(command.flock_id)
        if flock is None:
            return self.reject(
                name, Error.not_found("Flock not found"), entity_id=str(command.flock_id),
            )
        violations = validate_update_flock(command, self.today())
        if violations:
            return self.invalid(name, violations)
        if await self._flocks.exists_by_identifier_in_coop(
            flock.coop_id, command.identifier, exclude_flock_id=flock.id,
        ):
            return self.reject(name, Error.conflict(FLOCK_IDENTIFIER_CONFLICT))
        flock.update(command.identifier, command.hatch_date, self.now())
        updated = await self._flocks.update(flock)
        return Success(project_flock(updated))

    async def archive(self, command: ArchiveFlockCommand) -> Result[bool]:
        name = "ArchiveFlockCommand"
        logger.info(f"Processing {name} - id: {command.flock_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.flock_id, "Flock ID", "flock_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._archive(command), "archive", "flock")

    async def _archive(self, command: ArchiveFlockCommand):
        flock = await self._flocks.get_by_id(command.flock_id)
        if flock is None:
            return self.reject(
                "ArchiveFlockCommand", Error.not_found("Flock not found"),
                entity_id=str(command.flock_id),
            )
        if not flock.archive(self.now()):
            logger.info(f"Flock {flock.id} already archived")
            return Success(True)
        await self._flocks.update(flock)
        logger.info(f"Archived flock {flock.id}", extra={"entity_id": str(flock.id)})
        return Success(True)

    async def mature_chicks(self, command: MatureChicksCommand) -> Result[FlockDto]:
        name = "MatureChicksCommand"
        logger.info(
            f"Processing {name} - id: {command.flock_id}, "
            f"chicks: {command.chicks_to_mature}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.flock_id, "Flock ID", "flock_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._mature_chicks(command), "mature chicks in", "flock",
        )

    async def _mature_chicks(self, command: MatureChicksCommand):
        name = "MatureChicksCommand"
        flock = await self._flocks.get_by_id(command.flock_id)
        if flock is None:
            return self.reject(
                name, Error.not_found("Flock not found"), entity_id=str(command.flock_id),
            )
        if not flock.is_active:
            return self.reject(
                name, Error.validation(ARCHIVED_FLOCK_MATURATION),
                entity_id=str(flock.id),
            )
        violations = validate_mature_chicks(command)
        if violations:
            return self.invalid(name, violations)
        flock.mature_chicks(
            command.chicks_to_mature, command.hens, command.roosters,
            command.notes, self.now(),
        )
        updated = await self._flocks.update(flock)
        return Success(project_flock(updated))
