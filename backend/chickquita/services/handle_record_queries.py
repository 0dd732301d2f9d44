"""Record Queries — read daily records and purchases for the caller's tenant.

Invariants:
    - Date filters are inclusive on both ends; omitted filters do not restrict
    - A flock filter must name a flock of the caller's tenant, else NotFound
    - Purchases are filtered by flock through the flock's coop
    - Reading another tenant's purchase by id is Forbidden, as for update/delete
"""

import logging

from chickquita.core.domain_types import TenantId
from chickquita.core.errors import Error
from chickquita.core.queries import (
    GetDailyRecordsQuery, GetPurchaseByIdQuery, GetPurchasesQuery,
)
from chickquita.core.repository_protocols import (
    DailyRecordStore, FlockStore, IdentityContext, PurchaseStore,
)
from chickquita.core.result import Result, Success
from chickquita.core.validators import require_id
from chickquita.schemas.dtos import (
    DailyRecordDto, PurchaseDto, project_daily_record, project_purchase,
)
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)


class DailyRecordQueries(HandlerBase):
    """Daily record read handlers."""

    def __init__(
        self, identity: IdentityContext, records: DailyRecordStore, flocks: FlockStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._records = records
        self._flocks = flocks

    async def search(self, query: GetDailyRecordsQuery) -> Result[list[DailyRecordDto]]:
        name = "GetDailyRecordsQuery"
        logger.info(
            f"Processing {name} - flock: {query.flock_id or 'All'}, "
            f"from: {query.start_date}, to: {query.end_date}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        return await self.guard(
            name, self._search(auth.value, query), "retrieve", "daily records",
        )

    async def _search(self, tenant_id: TenantId, query: GetDailyRecordsQuery):
        if query.flock_id is not None:
            if await self._flocks.get_by_id(query.flock_id) is None:
                return self.reject(
                    "GetDailyRecordsQuery", Error.not_found("Flock not found"),
                    entity_id=str(query.flock_id),
                )
        records = await self._records.search(
            query.flock_id, query.start_date, query.end_date,
        )
        logger.info(
            f"Retrieved {len(records)} daily records",
            extra={"tenant_id": str(tenant_id)},
        )
        return Success([project_daily_record(record) for record in records])


class PurchaseQueries(HandlerBase):
    """Purchase read handlers."""

    def __init__(
        self, identity: IdentityContext, purchases: PurchaseStore, flocks: FlockStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._purchases = purchases
        self._flocks = flocks

    async def search(self, query: GetPurchasesQuery) -> Result[list[PurchaseDto]]:
        name = "GetPurchasesQuery"
        logger.info(
            f"Processing {name} - from: {query.from_date}, to: {query.to_date}, "
            f"type: {query.type}, flock: {query.flock_id}",
        )
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        return await self.guard(name, self._search(query), "retrieve", "purchases")

    async def _search(self, query: GetPurchasesQuery):
        coop_id = None
        if query.flock_id is not None:
            flock = await self._flocks.get_by_id(query.flock_id)
            if flock is None:
                return self.reject(
                    "GetPurchasesQuery",
                    Error.not_found(f"Flock with ID {query.flock_id} not found"),
                )
            coop_id = flock.coop_id
        purchases = await self._purchases.search(
            query.from_date, query.to_date, query.type, coop_id,
        )
        return Success([project_purchase(purchase) for purchase in purchases])

    async def get_by_id(self, query: GetPurchaseByIdQuery) -> Result[PurchaseDto]:
        name = "GetPurchaseByIdQuery"
        logger.info(f"Processing {name} - id: {query.purchase_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(query.purchase_id, "Purchase ID", "purchase_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._get_by_id(auth.value, query), "retrieve", "purchase",
        )

    async def _get_by_id(self, tenant_id: TenantId, query: GetPurchaseByIdQuery):
        name = "GetPurchaseByIdQuery"
        purchase = await self._purchases.get_by_id(query.purchase_id)
        if purchase is None:
            return self.reject(
                name, Error.not_found(f"Purchase with ID {query.purchase_id} not found"),
            )
        if purchase.tenant_id != tenant_id:
            return self.reject(
                name, Error.forbidden("You do not have permission to view this purchase"),
                tenant_id=str(tenant_id), entity_id=str(purchase.id),
            )
        return Success(project_purchase(purchase))
