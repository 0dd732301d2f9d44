"""SQL Stores — AsyncSession implementations of the core store Protocols.

Invariants:
    - Every query filters on the store's tenant_id, except PurchaseStore.get_by_id
    - Each write commits its own unit of work; on failure the session is rolled back
      and the SQLAlchemy exception is re-raised as a core StoreError
    - Stores return domain entities, never ORM rows
    - Timestamps come back timezone-aware (SQLite drops tzinfo; it is restored as UTC)

Design Decisions:
    - Row <-> entity mapping by hand: the core dataclasses stay free of SQLAlchemy
    - Flock history rows are inserted from the aggregate's history list; rows already
      stored are left alone so composition snapshots stay append-only
"""

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chickquita.core.coop import Coop
from chickquita.core.daily_record import DailyRecord
from chickquita.core.domain_types import (
    CoopId, DailyRecordId, FlockHistoryId, FlockId, PurchaseId,
    PurchaseType, QuantityUnit, TenantId,
)
from chickquita.core.errors import DatabaseError
from chickquita.core.flock import Flock, FlockHistoryEntry
from chickquita.core.purchase import Purchase
from chickquita.infrastructure.database import translate_db_error
from chickquita.models.coop import Coop as CoopRow
from chickquita.models.daily_record import DailyRecord as DailyRecordRow
from chickquita.models.flock import Flock as FlockRow
from chickquita.models.flock_history import FlockHistory as FlockHistoryRow
from chickquita.models.purchase import Purchase as PurchaseRow

logger = logging.getLogger(__name__)


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class _SqlStore:
    """Session + tenant scope shared by every store."""

    def __init__(self, db: AsyncSession, tenant_id: TenantId | None):
        self._db = db
        self._tenant_id = tenant_id

    async def _flush(self, operation: str) -> None:
        try:
            await self._db.flush()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_db_error(e, operation) from e

    async def _commit(self, operation: str) -> None:
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_db_error(e, operation) from e

    async def _scoped_row(self, model, row_id: UUID, operation: str):
        result = await self._db.execute(
            select(model).where(
                model.id == row_id, model.tenant_id == self._tenant_id,
            ),
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise DatabaseError(f"{model.__tablename__} row {row_id} missing", operation)
        return row


# ─── Coops ───────────────────────────────────────────────────────

def _coop_from_row(row: CoopRow) -> Coop:
    return Coop(
        id=CoopId(row.id), tenant_id=TenantId(row.tenant_id), name=row.name,
        location=row.location, is_active=row.is_active,
        created_at=_aware(row.created_at), updated_at=_aware(row.updated_at),
    )


class SqlCoopStore(_SqlStore):

    async def get_by_id(self, coop_id: CoopId) -> Coop | None:
        result = await self._db.execute(
            select(CoopRow).where(
                CoopRow.id == coop_id, CoopRow.tenant_id == self._tenant_id,
            ),
        )
        row = result.scalar_one_or_none()
        return _coop_from_row(row) if row else None

    async def list_all(self, include_archived: bool = False) -> list[Coop]:
        query = select(CoopRow).where(CoopRow.tenant_id == self._tenant_id)
        if not include_archived:
            query = query.where(CoopRow.is_active.is_(True))
        result = await self._db.execute(query.order_by(CoopRow.created_at.desc()))
        return [_coop_from_row(row) for row in result.scalars().all()]

    async def exists_by_name(self, name: str) -> bool:
        result = await self._db.execute(
            select(CoopRow.id).where(
                CoopRow.tenant_id == self._tenant_id, CoopRow.name == name,
            ).limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def count_flocks(self, coop_id: CoopId) -> int:
        result = await self._db.execute(
            select(func.count()).select_from(FlockRow).where(
                FlockRow.coop_id == coop_id, FlockRow.tenant_id == self._tenant_id,
            ),
        )
        return result.scalar_one()

    async def add(self, coop: Coop) -> Coop:
        row = CoopRow(
            id=coop.id, tenant_id=coop.tenant_id, name=coop.name,
            location=coop.location, is_active=coop.is_active,
            created_at=coop.created_at, updated_at=coop.updated_at,
        )
        self._db.add(row)
        await self._commit("insert coop")
        return _coop_from_row(row)

    async def update(self, coop: Coop) -> Coop:
        row = await self._scoped_row(CoopRow, coop.id, "update coop")
        row.name = coop.name
        row.location = coop.location
        row.is_active = coop.is_active
        row.updated_at = coop.updated_at
        await self._commit("update coop")
        return _coop_from_row(row)

    async def delete(self, coop_id: CoopId) -> None:
        await self._db.execute(
            delete(CoopRow).where(
                CoopRow.id == coop_id, CoopRow.tenant_id == self._tenant_id,
            ),
        )
        await self._commit("delete coop")


# ─── Flocks ──────────────────────────────────────────────────────

def _history_from_row(row: FlockHistoryRow) -> FlockHistoryEntry:
    return FlockHistoryEntry(
        id=FlockHistoryId(row.id), tenant_id=TenantId(row.tenant_id),
        flock_id=FlockId(row.flock_id), change_date=_aware(row.change_date),
        hens=row.hens, roosters=row.roosters, chicks=row.chicks,
        reason=row.reason, notes=row.notes,
        created_at=_aware(row.created_at), updated_at=_aware(row.updated_at),
    )


def _history_to_row(entry: FlockHistoryEntry) -> FlockHistoryRow:
    return FlockHistoryRow(
        id=entry.id, tenant_id=entry.tenant_id, flock_id=entry.flock_id,
        change_date=entry.change_date, hens=entry.hens,
        roosters=entry.roosters, chicks=entry.chicks,
        reason=entry.reason, notes=entry.notes,
        created_at=entry.created_at, updated_at=entry.updated_at,
    )


def _flock_from_row(row: FlockRow, history: list[FlockHistoryEntry]) -> Flock:
    return Flock(
        id=FlockId(row.id), tenant_id=TenantId(row.tenant_id),
        coop_id=CoopId(row.coop_id), identifier=row.identifier,
        hatch_date=row.hatch_date,
        current_hens=row.current_hens,
        current_roosters=row.current_roosters,
        current_chicks=row.current_chicks,
        is_active=row.is_active,
        created_at=_aware(row.created_at), updated_at=_aware(row.updated_at),
        history=history,
    )


class SqlFlockStore(_SqlStore):

    async def _history_for(
        self, flock_ids: list[UUID],
    ) -> dict[UUID, list[FlockHistoryEntry]]:
        grouped = {flock_id: [] for flock_id in flock_ids}
        if not flock_ids:
            return grouped
        result = await self._db.execute(
            select(FlockHistoryRow)
            .where(FlockHistoryRow.flock_id.in_(flock_ids))
            .order_by(FlockHistoryRow.change_date, FlockHistoryRow.created_at),
        )
        for row in result.scalars().all():
            grouped[row.flock_id].append(_history_from_row(row))
        return grouped

    async def get_by_id(self, flock_id: FlockId) -> Flock | None:
        result = await self._db.execute(
            select(FlockRow).where(
                FlockRow.id == flock_id, FlockRow.tenant_id == self._tenant_id,
            ),
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        history = await self._history_for([row.id])
        return _flock_from_row(row, history[row.id])

    async def list_by_coop(
        self, coop_id: CoopId, include_inactive: bool = False,
    ) -> list[Flock]:
        query = select(FlockRow).where(
            FlockRow.tenant_id == self._tenant_id, FlockRow.coop_id == coop_id,
        )
        if not include_inactive:
            query = query.where(FlockRow.is_active.is_(True))
        result = await self._db.execute(query.order_by(FlockRow.created_at.desc()))
        rows = result.scalars().all()
        history = await self._history_for([row.id for row in rows])
        return [_flock_from_row(row, history[row.id]) for row in rows]

    async def exists_by_identifier_in_coop(
        self, coop_id: CoopId, identifier: str,
        exclude_flock_id: FlockId | None = None,
    ) -> bool:
        query = select(FlockRow.id).where(
            FlockRow.tenant_id == self._tenant_id,
            FlockRow.coop_id == coop_id,
            FlockRow.identifier == identifier,
        )
        if exclude_flock_id is not None:
            query = query.where(FlockRow.id != exclude_flock_id)
        result = await self._db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def add(self, flock: Flock) -> Flock:
        self._db.add(FlockRow(
            id=flock.id, tenant_id=flock.tenant_id, coop_id=flock.coop_id,
            identifier=flock.identifier, hatch_date=flock.hatch_date,
            current_hens=flock.current_hens,
            current_roosters=flock.current_roosters,
            current_chicks=flock.current_chicks,
            is_active=flock.is_active,
            created_at=flock.created_at, updated_at=flock.updated_at,
        ))
        # parent row first: history rows reference it
        await self._flush("insert flock")
        self._db.add_all([_history_to_row(entry) for entry in flock.history])
        await self._commit("insert flock")
        return flock

    async def update(self, flock: Flock) -> Flock:
        row = await self._scoped_row(FlockRow, flock.id, "update flock")
        row.identifier = flock.identifier
        row.hatch_date = flock.hatch_date
        row.current_hens = flock.current_hens
        row.current_roosters = flock.current_roosters
        row.current_chicks = flock.current_chicks
        row.is_active = flock.is_active
        row.updated_at = flock.updated_at
        stored = await self._db.execute(
            select(FlockHistoryRow.id).where(FlockHistoryRow.flock_id == flock.id),
        )
        stored_ids = set(stored.scalars().all())
        new_entries = [e for e in flock.history if e.id not in stored_ids]
        self._db.add_all([_history_to_row(entry) for entry in new_entries])
        await self._commit("update flock")
        if new_entries:
            logger.info(
                f"Appended {len(new_entries)} history entries to flock {flock.id}",
                extra={"entity_id": str(flock.id)},
            )
        return flock


class SqlFlockHistoryStore(_SqlStore):

    async def get_by_id(self, history_id: FlockHistoryId) -> FlockHistoryEntry | None:
        result = await self._db.execute(
            select(FlockHistoryRow).where(
                FlockHistoryRow.id == history_id,
                FlockHistoryRow.tenant_id == self._tenant_id,
            ),
        )
        row = result.scalar_one_or_none()
        return _history_from_row(row) if row else None

    async def update(self, entry: FlockHistoryEntry) -> FlockHistoryEntry:
        row = await self._scoped_row(FlockHistoryRow, entry.id, "update flock history")
        row.notes = entry.notes
        row.updated_at = entry.updated_at
        await self._commit("update flock history")
        return _history_from_row(row)


# ─── Daily records ───────────────────────────────────────────────

def _record_from_row(row: DailyRecordRow) -> DailyRecord:
    return DailyRecord(
        id=DailyRecordId(row.id), tenant_id=TenantId(row.tenant_id),
        flock_id=FlockId(row.flock_id), record_date=row.record_date,
        egg_count=row.egg_count, notes=row.notes,
        created_at=_aware(row.created_at), updated_at=_aware(row.updated_at),
    )


class SqlDailyRecordStore(_SqlStore):

    async def get_by_id(self, record_id: DailyRecordId) -> DailyRecord | None:
        result = await self._db.execute(
            select(DailyRecordRow).where(
                DailyRecordRow.id == record_id,
                DailyRecordRow.tenant_id == self._tenant_id,
            ),
        )
        row = result.scalar_one_or_none()
        return _record_from_row(row) if row else None

    async def search(
        self, flock_id: FlockId | None = None,
        start_date: date | None = None, end_date: date | None = None,
    ) -> list[DailyRecord]:
        query = select(DailyRecordRow).where(
            DailyRecordRow.tenant_id == self._tenant_id,
        )
        if flock_id is not None:
            query = query.where(DailyRecordRow.flock_id == flock_id)
        if start_date is not None:
            query = query.where(DailyRecordRow.record_date >= start_date)
        if end_date is not None:
            query = query.where(DailyRecordRow.record_date <= end_date)
        result = await self._db.execute(
            query.order_by(
                DailyRecordRow.record_date.desc(), DailyRecordRow.created_at.desc(),
            ),
        )
        return [_record_from_row(row) for row in result.scalars().all()]

    async def exists_for_flock_and_date(self, flock_id, record_date) -> bool:
        result = await self._db.execute(
            select(DailyRecordRow.id).where(
                DailyRecordRow.tenant_id == self._tenant_id,
                DailyRecordRow.flock_id == flock_id,
                DailyRecordRow.record_date == record_date,
            ).limit(1),
        )
        return result.scalar_one_or_none() is not None

    async def add(self, record: DailyRecord) -> DailyRecord:
        row = DailyRecordRow(
            id=record.id, tenant_id=record.tenant_id, flock_id=record.flock_id,
            record_date=record.record_date, egg_count=record.egg_count,
            notes=record.notes,
            created_at=record.created_at, updated_at=record.updated_at,
        )
        self._db.add(row)
        await self._commit("insert daily record")
        return _record_from_row(row)

    async def update(self, record: DailyRecord) -> DailyRecord:
        row = await self._scoped_row(DailyRecordRow, record.id, "update daily record")
        row.egg_count = record.egg_count
        row.notes = record.notes
        row.updated_at = record.updated_at
        await self._commit("update daily record")
        return _record_from_row(row)

    async def delete(self, record_id: DailyRecordId) -> None:
        await self._db.execute(
            delete(DailyRecordRow).where(
                DailyRecordRow.id == record_id,
                DailyRecordRow.tenant_id == self._tenant_id,
            ),
        )
        await self._commit("delete daily record")


# ─── Purchases ───────────────────────────────────────────────────

def _purchase_from_row(row: PurchaseRow) -> Purchase:
    return Purchase(
        id=PurchaseId(row.id), tenant_id=TenantId(row.tenant_id),
        name=row.name, type=PurchaseType(row.type),
        amount=row.amount, quantity=row.quantity,
        unit=QuantityUnit(row.unit), purchase_date=row.purchase_date,
        coop_id=CoopId(row.coop_id) if row.coop_id else None,
        consumed_date=row.consumed_date, notes=row.notes,
        created_at=_aware(row.created_at), updated_at=_aware(row.updated_at),
    )


def _apply_purchase(row: PurchaseRow, purchase: Purchase) -> None:
    row.coop_id = purchase.coop_id
    row.name = purchase.name
    row.type = purchase.type.value
    row.amount = purchase.amount
    row.quantity = purchase.quantity
    row.unit = purchase.unit.value
    row.purchase_date = purchase.purchase_date
    row.consumed_date = purchase.consumed_date
    row.notes = purchase.notes
    row.updated_at = purchase.updated_at


class SqlPurchaseStore(_SqlStore):
    """Purchase lookups are by id alone; the handler compares tenants itself."""

    async def get_by_id(self, purchase_id: PurchaseId) -> Purchase | None:
        row = await self._db.get(PurchaseRow, purchase_id)
        return _purchase_from_row(row) if row else None

    async def search(
        self, from_date: date | None = None, to_date: date | None = None,
        purchase_type: PurchaseType | None = None, coop_id: CoopId | None = None,
    ) -> list[Purchase]:
        query = select(PurchaseRow).where(PurchaseRow.tenant_id == self._tenant_id)
        if from_date is not None:
            query = query.where(PurchaseRow.purchase_date >= from_date)
        if to_date is not None:
            query = query.where(PurchaseRow.purchase_date <= to_date)
        if purchase_type is not None:
            query = query.where(PurchaseRow.type == purchase_type.value)
        if coop_id is not None:
            query = query.where(PurchaseRow.coop_id == coop_id)
        result = await self._db.execute(
            query.order_by(
                PurchaseRow.purchase_date.desc(), PurchaseRow.created_at.desc(),
            ),
        )
        return [_purchase_from_row(row) for row in result.scalars().all()]

    async def add(self, purchase: Purchase) -> Purchase:
        row = PurchaseRow(
            id=purchase.id, tenant_id=purchase.tenant_id,
            created_at=purchase.created_at,
        )
        _apply_purchase(row, purchase)
        self._db.add(row)
        await self._commit("insert purchase")
        return _purchase_from_row(row)

    async def update(self, purchase: Purchase) -> Purchase:
        row = await self._scoped_row(PurchaseRow, purchase.id, "update purchase")
        _apply_purchase(row, purchase)
        await self._commit("update purchase")
        return _purchase_from_row(row)

    async def delete(self, purchase_id: PurchaseId) -> None:
        await self._db.execute(
            delete(PurchaseRow).where(
                PurchaseRow.id == purchase_id,
                PurchaseRow.tenant_id == self._tenant_id,
            ),
        )
        await self._commit("delete purchase")
