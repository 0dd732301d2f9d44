"""Purchase Handlers — create, update, delete recorded expenses.

Invariants:
    - The purchase lookup is not tenant-filtered; ownership is compared here and a
      mismatch is Forbidden, never NotFound
    - A coop reference, when given, must resolve within the caller's tenant
      (NotFound "Coop with ID {id} not found")
    - No edit window: purchases stay editable indefinitely
"""

import logging

from chickquita.core.commands import (
    CreatePurchaseCommand, DeletePurchaseCommand, UpdatePurchaseCommand,
)
from chickquita.core.domain_types import TenantId
from chickquita.core.errors import Error
from chickquita.core.purchase import Purchase, PurchaseDetails
from chickquita.core.repository_protocols import CoopStore, IdentityContext, PurchaseStore
from chickquita.core.result import Failure, Result, Success
from chickquita.core.validators import require_id, validate_purchase_fields
from chickquita.schemas.dtos import PurchaseDto, project_purchase
from chickquita.services.handler_base import Clock, HandlerBase, utc_now

logger = logging.getLogger(__name__)


def _details(command: CreatePurchaseCommand) -> PurchaseDetails:
    return PurchaseDetails(
        name=command.name,
        type=command.type,
        amount=command.amount,
        quantity=command.quantity,
        unit=command.unit,
        purchase_date=command.purchase_date,
        coop_id=command.coop_id,
        consumed_date=command.consumed_date,
        notes=command.notes,
    )


class PurchaseHandlers(HandlerBase):
    """Purchase command handlers."""

    def __init__(
        self, identity: IdentityContext, purchases: PurchaseStore, coops: CoopStore,
        clock: Clock = utc_now,
    ):
        super().__init__(identity, clock)
        self._purchases = purchases
        self._coops = coops

    async def _missing_coop(self, command_name: str, command) -> Failure | None:
        if command.coop_id is None:
            return None
        if await self._coops.get_by_id(command.coop_id) is None:
            return self.reject(
                command_name, Error.not_found(f"Coop with ID {command.coop_id} not found"),
            )
        return None

    async def create(self, command: CreatePurchaseCommand) -> Result[PurchaseDto]:
        name = "CreatePurchaseCommand"
        logger.info(f"Processing {name} - name: {command.name}, type: {command.type}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = validate_purchase_fields(command, self.today())
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._create(auth.value, command), "create", "purchase",
        )

    async def _create(self, tenant_id: TenantId, command: CreatePurchaseCommand):
        missing = await self._missing_coop("CreatePurchaseCommand", command)
        if missing is not None:
            return missing
        purchase = Purchase.create(tenant_id, _details(command), self.now())
        added = await self._purchases.add(purchase)
        logger.info(
            f"Created purchase {added.id}",
            extra={"tenant_id": str(tenant_id), "entity_id": str(added.id)},
        )
        return Success(project_purchase(added))

    async def update(self, command: UpdatePurchaseCommand) -> Result[PurchaseDto]:
        name = "UpdatePurchaseCommand"
        logger.info(f"Processing {name} - id: {command.purchase_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.purchase_id, "Purchase ID", "purchase_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._update(auth.value, command), "update", "purchase",
        )

    async def _update(self, tenant_id: TenantId, command: UpdatePurchaseCommand):
        name = "UpdatePurchaseCommand"
        purchase = await self._purchases.get_by_id(command.purchase_id)
        if purchase is None:
            return self.reject(
                name, Error.not_found(f"Purchase with ID {command.purchase_id} not found"),
            )
        if purchase.tenant_id != tenant_id:
            return self.reject(
                name, Error.forbidden("You do not have permission to update this purchase"),
                tenant_id=str(tenant_id), entity_id=str(purchase.id),
            )
        violations = validate_purchase_fields(command, self.today())
        if violations:
            return self.invalid(name, violations)
        missing = await self._missing_coop(name, command)
        if missing is not None:
            return missing
        purchase.update(_details(command), self.now())
        updated = await self._purchases.update(purchase)
        return Success(project_purchase(updated))

    async def delete(self, command: DeletePurchaseCommand) -> Result[bool]:
        name = "DeletePurchaseCommand"
        logger.info(f"Processing {name} - id: {command.purchase_id}")
        auth = self.authorize(name)
        if not auth.ok:
            return auth
        violations = require_id(command.purchase_id, "Purchase ID", "purchase_id")
        if violations:
            return self.invalid(name, violations)
        return await self.guard(
            name, self._delete(auth.value, command), "delete", "purchase",
        )

    async def _delete(self, tenant_id: TenantId, command: DeletePurchaseCommand):
        name = "DeletePurchaseCommand"
        purchase = await self._purchases.get_by_id(command.purchase_id)
        if purchase is None:
            return self.reject(
                name, Error.not_found(f"Purchase with ID {command.purchase_id} not found"),
            )
        if purchase.tenant_id != tenant_id:
            return self.reject(
                name, Error.forbidden("You do not have permission to delete this purchase"),
                tenant_id=str(tenant_id), entity_id=str(purchase.id),
            )
        await self._purchases.delete(purchase.id)
        logger.info(f"Deleted purchase {purchase.id}", extra={"entity_id": str(purchase.id)})
        return Success(True)
