"""Route Dependencies — per-request identity and command dispatch.

Invariants:
    - Stores are scoped to the tenant of the current request
    - One CommandDispatch per request; it shares the request's AsyncSession
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chickquita.config import get_settings
from chickquita.infrastructure.database import get_db
from chickquita.infrastructure.identity import RequestIdentity
from chickquita.infrastructure.stores import (
    SqlCoopStore, SqlDailyRecordStore, SqlFlockHistoryStore,
    SqlFlockStore, SqlPurchaseStore,
)
from chickquita.services.command_dispatch import CommandDispatch


def get_identity(request: Request) -> RequestIdentity:
    settings = get_settings()
    return RequestIdentity.from_headers(
        request.headers, settings.tenant_header, settings.user_header,
    )


async def get_dispatch(
    identity: RequestIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
) -> CommandDispatch:
    tenant_id = identity.current_tenant_id()
    return CommandDispatch(
        identity,
        coops=SqlCoopStore(db, tenant_id),
        flocks=SqlFlockStore(db, tenant_id),
        history=SqlFlockHistoryStore(db, tenant_id),
        records=SqlDailyRecordStore(db, tenant_id),
        purchases=SqlPurchaseStore(db, tenant_id),
    )
