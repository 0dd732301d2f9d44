"""Purchase Routes — list, read, record, edit and remove expenses.

Invariants:
    - Reading, editing or deleting another tenant's purchase is 403, not 404
    - Listing filters by purchase_date range, type and flock (through its coop)
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from chickquita.api.dependencies import get_dispatch
from chickquita.api.result_response import to_http
from chickquita.core.commands import (
    CreatePurchaseCommand, DeletePurchaseCommand, UpdatePurchaseCommand,
)
from chickquita.core.domain_types import PurchaseType
from chickquita.core.queries import GetPurchaseByIdQuery, GetPurchasesQuery
from chickquita.schemas.requests import PurchaseRequest
from chickquita.services.command_dispatch import CommandDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/purchases", tags=["purchases"])


@router.get("")
async def list_purchases(
    from_date: date | None = None, to_date: date | None = None,
    purchase_type: PurchaseType | None = Query(None, alias="type"),
    flock_id: UUID | None = None,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetPurchasesQuery(
        from_date=from_date, to_date=to_date, type=purchase_type, flock_id=flock_id,
    ))
    return to_http(result)


@router.get("/{purchase_id}")
async def get_purchase(
    purchase_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetPurchaseByIdQuery(purchase_id=purchase_id))
    return to_http(result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_purchase(
    body: PurchaseRequest, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(CreatePurchaseCommand(**body.model_dump()))
    return to_http(result, status.HTTP_201_CREATED)


@router.put("/{purchase_id}")
async def update_purchase(
    purchase_id: UUID, body: PurchaseRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        UpdatePurchaseCommand(purchase_id=purchase_id, **body.model_dump()),
    )
    return to_http(result)


@router.delete(
    "/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_purchase(
    purchase_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(DeletePurchaseCommand(purchase_id=purchase_id))
    return to_http(result, status.HTTP_204_NO_CONTENT)
