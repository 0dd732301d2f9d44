"""Flock History Handlers — notes edits on existing composition snapshots.

Invariants:
    - Only notes change; counts, reason and change_date stay as recorded
    - Cross-tenant entries are invisible: NotFound "Flock history entry not found"
"""

import logging

from chickquita.core.commands import UpdateFlockHistoryNotesCommand
from chickquita.core.errors import Error
from chickquita.core.repository_protocols import FlockHistoryStore, IdentityContext
from chickquita.core.result import Result, Success
from chickquita.core.validators import require_id, validate_history_notes
from chickquita.schemas.dtos import FlockHistoryDto, project_flock_history
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)


class FlockHistoryHandlers(HandlerBase):

    def __init__(
        self, identity: IdentityContext, history: FlockHistoryStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._history = history

    async def update_notes(
        self, command: UpdateFlockHistoryNotesCommand,
    ) -> Result[FlockHistoryDto]:
        name = "UpdateFlockHistoryNotesCommand"
        logger.info(f"Processing {name} - id: {command.history_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.history_id, "History ID", "history_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._update_notes(command), "update", "flock history entry",
        )

    async def _update_notes(self, command: UpdateFlockHistoryNotesCommand):
        name = "UpdateFlockHistoryNotesCommand"
        entry = await self._history.get_by_id(command.history_id)
        if entry is None:
            return self.reject(
                name, Error.not_found("Flock history entry not found"),
                entity_id=str(command.history_id),
            )
        violations = validate_history_notes(command)
        if violations:
            return self.invalid(name, violations)
        entry.update_notes(command.notes, self.now())
        updated = await self._history.update(entry)
        return Success(project_flock_history(updated))
