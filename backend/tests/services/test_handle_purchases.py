"""Purchase Handlers — tests for create/update/delete and explicit ownership checks.

Tests cover:
    - Create with and without a coop reference
    - Unknown coop reference is NotFound with the coop id in the message
    - Another tenant's purchase is Forbidden (not NotFound) on update and delete
    - consumed_date before purchase_date is Validation
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from chickquita.core.commands import (
    CreatePurchaseCommand, DeletePurchaseCommand, UpdatePurchaseCommand,
)
from chickquita.core.domain_types import PurchaseType, QuantityUnit
from chickquita.core.errors import ErrorCode
from chickquita.core.purchase import Purchase, PurchaseDetails
from chickquita.services.handle_purchases import PurchaseHandlers
from tests.services.fake_stores import NOW, fixed_clock, seed_coop


def _handlers(identity, purchases, coops):
    return PurchaseHandlers(identity, purchases, coops, fixed_clock())


def _fields(**overrides):
    fields = dict(
        name="Layer pellets", type=PurchaseType.FEED, amount=Decimal("24.90"),
        quantity=Decimal("25"), unit=QuantityUnit.KG, purchase_date=NOW.date(),
    )
    fields.update(overrides)
    return fields


def _seed_purchase(farm, tenant_id) -> Purchase:
    purchase = Purchase.create(
        tenant_id,
        PurchaseDetails(
            name="Straw", type=PurchaseType.BEDDING, amount=Decimal("5"),
            quantity=Decimal("1"), unit=QuantityUnit.PACKAGE,
            purchase_date=NOW.date(),
        ),
        NOW,
    )
    farm.purchases[purchase.id] = purchase
    return purchase


async def test_create_purchase_without_coop(identity, purchases, coops):
    result = await _handlers(identity, purchases, coops).create(
        CreatePurchaseCommand(**_fields()),
    )
    assert result.ok
    assert result.value.type == PurchaseType.FEED
    assert result.value.coop_id is None


async def test_create_purchase_for_own_coop(farm, tenant_id, identity, purchases, coops):
    coop = seed_coop(farm, tenant_id)
    result = await _handlers(identity, purchases, coops).create(
        CreatePurchaseCommand(**_fields(coop_id=coop.id)),
    )
    assert result.ok
    assert result.value.coop_id == coop.id


async def test_create_purchase_for_unknown_coop_is_not_found(identity, purchases, coops):
    coop_id = uuid4()
    result = await _handlers(identity, purchases, coops).create(
        CreatePurchaseCommand(**_fields(coop_id=coop_id)),
    )
    assert result.code == ErrorCode.NOT_FOUND
    assert result.message == f"Coop with ID {coop_id} not found"


async def test_create_with_consumed_before_purchase_is_validation(
    identity, purchases, coops,
):
    result = await _handlers(identity, purchases, coops).create(CreatePurchaseCommand(
        **_fields(consumed_date=NOW.date() - timedelta(days=1)),
    ))
    assert result.code == ErrorCode.VALIDATION
    assert result.error.violations[0].field == "consumed_date"


async def test_create_with_zero_quantity_and_bad_unit_is_validation(
    identity, purchases, coops,
):
    result = await _handlers(identity, purchases, coops).create(CreatePurchaseCommand(
        **_fields(quantity=Decimal("0"), unit="bucket"),
    ))
    assert result.code == ErrorCode.VALIDATION
    assert {v.field for v in result.error.violations} == {"quantity", "unit"}


async def test_update_own_purchase(farm, tenant_id, identity, purchases, coops):
    purchase = _seed_purchase(farm, tenant_id)
    result = await _handlers(identity, purchases, coops).update(UpdatePurchaseCommand(
        purchase_id=purchase.id, **_fields(name="Organic pellets"),
    ))
    assert result.ok
    assert farm.purchases[purchase.id].name == "Organic pellets"


async def test_update_other_tenants_purchase_is_forbidden(
    farm, other_tenant_id, identity, purchases, coops,
):
    purchase = _seed_purchase(farm, other_tenant_id)
    result = await _handlers(identity, purchases, coops).update(UpdatePurchaseCommand(
        purchase_id=purchase.id, **_fields(),
    ))
    assert result.code == ErrorCode.FORBIDDEN
    assert result.message == "You do not have permission to update this purchase"
    assert farm.purchases[purchase.id].name == "Straw"


async def test_update_unknown_purchase_is_not_found(identity, purchases, coops):
    purchase_id = uuid4()
    result = await _handlers(identity, purchases, coops).update(UpdatePurchaseCommand(
        purchase_id=purchase_id, **_fields(),
    ))
    assert result.code == ErrorCode.NOT_FOUND
    assert result.message == f"Purchase with ID {purchase_id} not found"


async def test_delete_other_tenants_purchase_is_forbidden(
    farm, other_tenant_id, identity, purchases, coops,
):
    purchase = _seed_purchase(farm, other_tenant_id)
    result = await _handlers(identity, purchases, coops).delete(
        DeletePurchaseCommand(purchase_id=purchase.id),
    )
    assert result.code == ErrorCode.FORBIDDEN
    assert result.message == "You do not have permission to delete this purchase"
    assert purchase.id in farm.purchases


async def test_delete_own_purchase(farm, tenant_id, identity, purchases, coops):
    purchase = _seed_purchase(farm, tenant_id)
    result = await _handlers(identity, purchases, coops).delete(
        DeletePurchaseCommand(purchase_id=purchase.id),
    )
    assert result.ok
    assert purchase.id not in farm.purchases
