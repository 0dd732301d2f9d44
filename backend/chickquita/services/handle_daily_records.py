"""Daily Record Handlers — create, update, delete egg-production records.

Invariants:
    - At most one record per (flock_id, record_date); same date on another flock is fine
    - update/delete of a locked record (created on an earlier UTC day) is Validation
      "same-day edit restriction" and the store write is never invoked
    - The lock is evaluated fresh on every call from (created_at, now)
    - Cross-tenant records/flocks are invisible: NotFound
"""

import logging

from chickquita.core.commands import (
    CreateDailyRecordCommand, DeleteDailyRecordCommand, UpdateDailyRecordCommand,
)
from chickquita.core.daily_record import DailyRecord
from chickquita.core.domain_types import TenantId
from chickquita.core.enforce_edit_window import (
    EDIT_RESTRICTION_DELETE, EDIT_RESTRICTION_UPDATE,
)
from chickquita.core.errors import Error
from chickquita.core.repository_protocols import (
    DailyRecordStore, FlockStore, IdentityContext,
)
from chickquita.core.result import Result, Success
from chickquita.core.validators import (
    require_id, validate_create_daily_record, validate_update_daily_record,
)
from chickquita.schemas.dtos import DailyRecordDto, project_daily_record
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)

DAILY_RECORD_CONFLICT = "A daily record already exists for this flock on the specified date"


class DailyRecordHandlers(HandlerBase):
    """Daily record command handlers."""

    def __init__(
        self, identity: IdentityContext, records: DailyRecordStore,
        flocks: FlockStore, clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._records = records
        self._flocks = flocks

    async def create(self, command: CreateDailyRecordCommand) -> Result[DailyRecordDto]:
        name = "CreateDailyRecordCommand"
        logger.info(
            f"Processing {name} - flock: {command.flock_id}, "
            f"date: {command.record_date}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = validate_create_daily_record(command, self.today())
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._create(auth.value, command), "create", "daily record",
            DAILY_RECORD_CONFLICT,
        )

    async def _create(self, tenant_id: TenantId, command: CreateDailyRecordCommand):
        name = "CreateDailyRecordCommand"
        flock = await self._flocks.get_by_id(command.flock_id)
        if flock is None:
            return self.reject(
                name, Error.not_found("Flock not found"), entity_id=str(command.flock_id),
            )
        if await self._records.exists_for_flock_and_date(flock.id, command.record_date):
            return self.reject(
                name, Error.conflict(DAILY_RECORD_CONFLICT), entity_id=str(flock.id),
            )
        record = DailyRecord.create(
            tenant_id, flock.id, command.record_date, command.egg_count,
            command.notes, self.now(),
        )
        added = await self._records.add(record)
        logger.info(
            f"Created daily record {added.id} for flock {flock.id}",
            extra={"tenant_id": str(tenant_id), "entity_id": str(added.id)},
        )
        return Success(project_daily_record(added))

    async def update(self, command: UpdateDailyRecordCommand) -> Result[DailyRecordDto]:
        name = "UpdateDailyRecordCommand"
        logger.info(f"Processing {name} - id: {command.record_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.record_id, "Record ID", "record_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._update(command), "update", "daily record")

    async def _update(self, command: UpdateDailyRecordCommand):
        name = "UpdateDailyRecordCommand"
        record = await self._records.get_by_id(command.record_id)
        if record is None:
            return self.reject(
                name, Error.not_found("Daily record not found"),
                entity_id=str(command.record_id),
            )
        if not record.is_editable(self.now()):
            return self.reject(
                name, Error.validation(EDIT_RESTRICTION_UPDATE),
                entity_id=str(record.id),
            )
        violations = validate_update_daily_record(command)
        if violations:
            return self.invalid(name, violations)
        record.update(command.egg_count, command.notes, self.now())
        updated = await self._records.update(record)
        return Success(project_daily_record(updated))

    async def delete(self, command: DeleteDailyRecordCommand) -> Result[bool]:
        name = "DeleteDailyRecordCommand"
        logger.info(f"Processing {name} - id: {command.record_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.record_id, "Record ID", "record_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._delete(command), "delete", "daily record")

    async def _delete(self, command: DeleteDailyRecordCommand):
        name = "DeleteDailyRecordCommand"
        record = await self._records.get_by_id(command.record_id)
        if record is None:
            return self.reject(
                name, Error.not_found("Daily record not found"),
                entity_id=str(command.record_id),
            )
        if not record.is_editable(self.now()):
            return self.reject(
                name, Error.validation(EDIT_RESTRICTION_DELETE),
                entity_id=str(record.id),
            )
        await self._records.delete(record.id)
        logger.info(f"Deleted daily record {record.id}", extra={"entity_id": str(record.id)})
        return Success(True)
