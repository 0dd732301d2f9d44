"""Coop Handlers — create, update, archive, delete.

Invariants:
    - Coop names are unique per tenant; update probes only when the name changes
    - A coop owning any flock cannot be hard-deleted (Validation, delete never called)
    - Archiving an archived coop is Validation "Coop is already archived"
    - Cross-tenant coops are invisible: the store returns None -> NotFound "Coop not found"
"""

import logging

from chickquita.core.commands import (
    ArchiveCoopCommand, CreateCoopCommand, DeleteCoopCommand, UpdateCoopCommand,
)
from chickquita.core.coop import Coop
from chickquita.core.domain_types import TenantId
from chickquita.core.errors import Error
from chickquita.core.repository_protocols import CoopStore, IdentityContext
from chickquita.core.result import Result, Success
from chickquita.core.validators import require_id, validate_coop_fields
from chickquita.schemas.dtos import CoopDto, project_coop
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)

COOP_NAME_CONFLICT = "A coop with this name already exists"
COOP_HAS_FLOCKS = (
    "Cannot delete coop with existing flocks. "
    "Please delete or move all flocks first."
)


class CoopHandlers(HandlerBase):
    """Coop command handlers."""

    def __init__(
        self, identity: IdentityContext, coops: CoopStore, clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._coops = coops

    async def create(self, command: CreateCoopCommand) -> Result[CoopDto]:
        name = "CreateCoopCommand"
        logger.info(f"Processing {name} - name: {command.name}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = validate_coop_fields(command)
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._create(auth.value, command), "create", "coop",
            COOP_NAME_CONFLICT,
        )

    async def _create(self, tenant_id: TenantId, command: CreateCoopCommand):
        if await self._coops.exists_by_name(command.name):
            return self.reject(
                "CreateCoopCommand", Error.conflict(COOP_NAME_CONFLICT),
                tenant_id=str(tenant_id),
            )
        coop = Coop.create(tenant_id, command.name, command.location, self.now())
        added = await self._coops.add(coop)
        logger.info(
            f"Created coop {added.id}",
            extra={"tenant_id": str(tenant_id), "entity_id": str(added.id)},
        )
        return Success(project_coop(added, flocks_count=0))

    async def update(self, command: UpdateCoopCommand) -> Result[CoopDto]:
        name = "UpdateCoopCommand"
        logger.info(f"Processing {name} - id: {command.coop_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.coop_id, "Coop ID", "coop_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._update(command), "update", "coop", COOP_NAME_CONFLICT,
        )

    async def _update(self, command: UpdateCoopCommand):
        name = "UpdateCoopCommand"
        coop = await self._coops.get_by_id(command.coop_id)
        if coop is None:
            return self.reject(
                name, Error.not_found("Coop not found"), entity_id=str(command.coop_id),
            )
        violations = validate_coop_fields(command)
        if violations:
            return self.invalid(name, violations)
        if coop.name != command.name and await self._coops.exists_by_name(command.name):
            return self.reject(name, Error.conflict(COOP_NAME_CONFLICT))
        flocks_count = await self._coops.count_flocks(coop.id)
        coop.update(command.name, command.location, self.now())
        updated = await self._coops.update(coop)
        return Success(project_coop(updated, flocks_count=flocks_count))

    async def archive(self, command: ArchiveCoopCommand) -> Result[bool]:
        name = "ArchiveCoopCommand"
        logger.info(f"Processing {name} - id: {command.coop_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.coop_id, "Coop ID", "coop_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._archive(command), "archive", "coop")

    async def _archive(self, command: ArchiveCoopCommand):
        coop = await self._coops.get_by_id(command.coop_id)
        if coop is None:
            return self.reject(
                "ArchiveCoopCommand", Error.not_found("Coop not found"),
                entity_id=str(command.coop_id),
            )
        coop.archive(self.now())
        await self._coops.update(coop)
        return Success(True)

    async def delete(self, command: DeleteCoopCommand) -> Result[bool]:
        name = "DeleteCoopCommand"
        logger.info(f"Processing {name} - id: {command.coop_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.coop_id, "Coop ID", "coop_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._delete(command), "delete", "coop")

    async def _delete(self, command: DeleteCoopCommand):
        name = "DeleteCoopCommand"
        coop = await self._coops.get_by_id(command.coop_id)
        if coop is None:
            return self.reject(
                name, Error.not_found("Coop not found"), entity_id=str(command.coop_id),
            )
        if await self._coops.count_flocks(coop.id) > 0:
            return self.reject(name, Error.validation(COOP_HAS_FLOCKS))
        await self._coops.delete(coop.id)
        logger.info(f"Deleted coop {coop.id}", extra={"entity_id": str(coop.id)})
        return Success(True)
