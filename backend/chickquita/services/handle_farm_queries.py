"""Farm Queries — read coops, flocks and flock history for the caller's tenant.

Invariants:
    - Same identity gate as commands; queries never write
    - Another tenant's coop or flock is NotFound, exactly as for commands
    - Archived coops and flocks are listed only when asked for
    - Flock history comes back newest first
"""

import logging

from chickquita.core.domain_types import TenantId
from chickquita.core.errors import Error
from chickquita.core.queries import (
    GetCoopByIdQuery, GetCoopsQuery, GetFlockByIdQuery, GetFlockHistoryQuery,
    GetFlocksQuery,
)
from chickquita.core.repository_protocols import CoopStore, FlockStore, IdentityContext
from chickquita.core.result import Result, Success
from chickquita.core.validators import require_id
from chickquita.schemas.dtos import (
    CoopDto, FlockDto, FlockHistoryDto,
    project_coop, project_flock, project_flock_history,
)
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)


class CoopQueries(HandlerBase):
    """Coop read handlers."""

    def __init__(self, identity: IdentityContext, coops: CoopStore, clock: Clock = utc_now):
        super().__init__(identity, clock)
        self._coops = coops

    async def get_all(self, query: GetCoopsQuery) -> Result[list[CoopDto]]:
        name = "GetCoopsQuery"
        logger.info(f"Processing {name} - include archived: {query.include_archived}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        return await self.guard(
            name, self._get_all(auth.value, query), "retrieve", "coops",
        )

    async def _get_all(self, tenant_id: TenantId, query: GetCoopsQuery):
        coops = await self._coops.list_all(query.include_archived)
        dtos = [
            project_coop(coop, flocks_count=await self._coops.count_flocks(coop.id))
            for coop in coops
        ]
        logger.info(
            f"Retrieved {len(dtos)} coops", extra={"tenant_id": str(tenant_id)},
        )
        return Success(dtos)

    async def get_by_id(self, query: GetCoopByIdQuery) -> Result[CoopDto]:
        name = "GetCoopByIdQuery"
        logger.info(f"Processing {name} - id: {query.coop_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(query.coop_id, "Coop ID", "coop_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._get_by_id(query), "retrieve", "coop")

    async def _get_by_id(self, query: GetCoopByIdQuery):
        coop = await self._coops.get_by_id(query.coop_id)
        if coop is None:
            return self.reject(
                "GetCoopByIdQuery", Error.not_found("Coop not found"),
                entity_id=str(query.coop_id),
            )
        flocks_count = await self._coops.count_flocks(coop.id)
        return Success(project_coop(coop, flocks_count=flocks_count))


class FlockQueries(HandlerBase):
    """Flock read handlers."""

    def __init__(
        self, identity: IdentityContext, flocks: FlockStore, coops: CoopStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._flocks = flocks
        self._coops = coops

    async def get_by_coop(self, query: GetFlocksQuery) -> Result[list[FlockDto]]:
        name = "GetFlocksQuery"
        logger.info(
            f"Processing {name} - coop: {query.coop_id}, "
            f"include inactive: {query.include_inactive}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(query.coop_id, "Coop ID", "coop_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(name, self._get_by_coop(query), "retrieve", "flocks")

    async def _get_by_coop(self, query: GetFlocksQuery):
        coop = await self._coops.get_by_id(query.coop_id)
        if coop is None:
            return self.reject(
                "GetFlocksQuery", Error.not_found("Coop not found"),
                entity_id=str(query.coop_id),
            )
        flocks = await self._flocks.list_by_coop(coop.id, query.include_inactive)
        return Success([project_flock(flock) for flock in flocks])

    async def get_by_id(self, query: GetFlockByIdQuery) -> Result[FlockDto]:
        name = "GetFlockByIdQuery"
        logger.info(f"Processing {name} - id: {query.flock_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(query.flock_id, "Flock ID", "flock_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._get_by_id(name, query.flock_id, project_flock),
            "retrieve", "flock",
        )

    async def get_history(
        self, query: GetFlockHistoryQuery,
    ) -> Result[list[FlockHistoryDto]]:
        name = "GetFlockHistoryQuery"
        logger.info(f"Processing {name} - id: {query.flock_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(query.flock_id, "Flock ID", "flock_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._get_by_id(name, query.flock_id, _history_newest_first),
            "retrieve", "flock history",
        )

    async def _get_by_id(self, query_name: str, flock_id, project):
        flock = await self._flocks.get_by_id(flock_id)
        if flock is None:
            return self.reject(
                query_name, Error.not_found("Flock not found"), entity_id=str(flock_id),
            )
        return Success(project(flock))


def _history_newest_first(flock) -> list[FlockHistoryDto]:
    entries = sorted(
        flock.history, key=lambda e: (e.change_date, e.created_at), reverse=True,
    )
    return [project_flock_history(entry) for entry in entries]
