"""In-Memory Stores — tenant-scoped fakes of the core store Protocols for handler tests.

Invariants:
    - One FarmData holds rows of every tenant; each fake store sees only its tenant
      (except FakePurchaseStore.get_by_id, mirroring the real store)
    - Reads and writes deep-copy entities: handler mutations reach the data only
      through an explicit add/update call
    - Every write is appended to FarmData.writes as (operation, id) for assertions

Design Decisions:
    - Flat fake classes (no inheritance from the Protocols): structural typing is enough
    - FarmData.unique_race simulates a lost check-then-act race: the existence check says "free"
      but the write raises UniquenessViolation
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from chickquita.core.coop import Coop
from chickquita.core.daily_record import DailyRecord
from chickquita.core.domain_types import PurchaseType, QuantityUnit
from chickquita.core.errors import UniquenessViolation
from chickquita.core.flock import Flock
from chickquita.core.purchase import Purchase, PurchaseDetails

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def fixed_clock(moment: datetime = NOW):
    return lambda: moment


class FakeIdentity:
    def __init__(self, tenant_id: UUID | None = None, authenticated: bool = True):
        self._tenant_id = tenant_id
        self._authenticated = authenticated

    def is_authenticated(self) -> bool:
        return self._authenticated

    def current_tenant_id(self):
        return self._tenant_id


@dataclass
class FarmData:
    coops: dict = field(default_factory=dict)
    flocks: dict = field(default_factory=dict)
    history: dict = field(default_factory=dict)
    records: dict = field(default_factory=dict)
    purchases: dict = field(default_factory=dict)
    writes: list = field(default_factory=list)
    unique_race: bool = False

    def write(self, operation: str, entity_id) -> None:
        if self.unique_race and operation in ("add", "update"):
            raise UniquenessViolation("uq_simulated_race")
        self.writes.append((operation, entity_id))


class _Scoped:
    def __init__(self, data: FarmData, tenant_id):
        self._data = data
        self._tenant_id = tenant_id

    def _visible(self, table: dict, entity_id):
        entity = table.get(entity_id)
        if entity is None or entity.tenant_id != self._tenant_id:
            return None
        return copy.deepcopy(entity)

    def _rows(self, table: dict, newest_first, keep=lambda row: True) -> list:
        rows = [
            copy.deepcopy(row) for row in table.values()
            if row.tenant_id == self._tenant_id and keep(row)
        ]
        return sorted(rows, key=newest_first, reverse=True)


class FakeCoopStore(_Scoped):

    async def get_by_id(self, coop_id):
        return self._visible(self._data.coops, coop_id)

    async def list_all(self, include_archived=False):
        return self._rows(
            self._data.coops, lambda c: c.created_at,
            lambda c: include_archived or c.is_active,
        )

    async def exists_by_name(self, name):
        return any(
            c.tenant_id == self._tenant_id and c.name == name
            for c in self._data.coops.values()
        )

    async def count_flocks(self, coop_id):
        return sum(
            1 for f in self._data.flocks.values()
            if f.coop_id == coop_id and f.tenant_id == self._tenant_id
        )

    async def add(self, coop: Coop):
        self._data.write("add", coop.id)
        self._data.coops[coop.id] = copy.deepcopy(coop)
        return copy.deepcopy(coop)

    async def update(self, coop: Coop):
        self._data.write("update", coop.id)
        self._data.coops[coop.id] = copy.deepcopy(coop)
        return copy.deepcopy(coop)

    async def delete(self, coop_id):
        self._data.write("delete", coop_id)
        self._data.coops.pop(coop_id, None)


class FakeFlockStore(_Scoped):

    async def get_by_id(self, flock_id):
        return self._visible(self._data.flocks, flock_id)

    async def list_by_coop(self, coop_id, include_inactive=False):
        return self._rows(
            self._data.flocks, lambda f: f.created_at,
            lambda f: f.coop_id == coop_id and (include_inactive or f.is_active),
        )

    async def exists_by_identifier_in_coop(self, coop_id, identifier, exclude_flock_id=None):
        return any(
            f.coop_id == coop_id and f.identifier == identifier
            and f.id != exclude_flock_id and f.tenant_id == self._tenant_id
            for f in self._data.flocks.values()
        )

    def _store(self, flock: Flock):
        self._data.flocks[flock.id] = copy.deepcopy(flock)
        for entry in flock.history:
            self._data.history.setdefault(entry.id, copy.deepcopy(entry))

    async def add(self, flock: Flock):
        self._data.write("add", flock.id)
        self._store(flock)
        return copy.deepcopy(flock)

    async def update(self, flock: Flock):
        self._data.write("update", flock.id)
        self._store(flock)
        return copy.deepcopy(flock)


class FakeFlockHistoryStore(_Scoped):

    async def get_by_id(self, history_id):
        return self._visible(self._data.history, history_id)

    async def update(self, entry):
        self._data.write("update", entry.id)
        self._data.history[entry.id] = copy.deepcopy(entry)
        return copy.deepcopy(entry)


class FakeDailyRecordStore(_Scoped):

    async def get_by_id(self, record_id):
        return self._visible(self._data.records, record_id)

    async def search(self, flock_id=None, start_date=None, end_date=None):
        return self._rows(
            self._data.records, lambda r: (r.record_date, r.created_at),
            lambda r: (
                (flock_id is None or r.flock_id == flock_id)
                and (start_date is None or r.record_date >= start_date)
                and (end_date is None or r.record_date <= end_date)
            ),
        )

    async def exists_for_flock_and_date(self, flock_id, record_date):
        return any(
            r.flock_id == flock_id and r.record_date == record_date
            and r.tenant_id == self._tenant_id
            for r in self._data.records.values()
        )

    async def add(self, record: DailyRecord):
        self._data.write("add", record.id)
        self._data.records[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    async def update(self, record: DailyRecord):
        self._data.write("update", record.id)
        self._data.records[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    async def delete(self, record_id):
        self._data.write("delete", record_id)
        self._data.records.pop(record_id, None)


class FakePurchaseStore(_Scoped):
    """get_by_id ignores the tenant, like the SQL store."""

    async def get_by_id(self, purchase_id):
        purchase = self._data.purchases.get(purchase_id)
        return copy.deepcopy(purchase) if purchase else None

    async def search(
        self, from_date=None, to_date=None, purchase_type=None, coop_id=None,
    ):
        return self._rows(
            self._data.purchases, lambda p: (p.purchase_date, p.created_at),
            lambda p: (
                (from_date is None or p.purchase_date >= from_date)
                and (to_date is None or p.purchase_date <= to_date)
                and (purchase_type is None or p.type == purchase_type)
                and (coop_id is None or p.coop_id == coop_id)
            ),
        )

    async def add(self, purchase: Purchase):
        self._data.write("add", purchase.id)
        self._data.purchases[purchase.id] = copy.deepcopy(purchase)
        return copy.deepcopy(purchase)

    async def update(self, purchase: Purchase):
        self._data.write("update", purchase.id)
        self._data.purchases[purchase.id] = copy.deepcopy(purchase)
        return copy.deepcopy(purchase)

    async def delete(self, purchase_id):
        self._data.write("delete", purchase_id)
        self._data.purchases.pop(purchase_id, None)


# ─── Seeding helpers ─────────────────────────────────────────────

def seed_coop(data: FarmData, tenant_id, name="Main coop", now=NOW) -> Coop:
    coop = Coop.create(tenant_id, name, None, now)
    data.coops[coop.id] = coop
    return copy.deepcopy(coop)


def seed_flock(
    data: FarmData, tenant_id, coop_id, identifier="Flock A",
    hens=10, roosters=1, chicks=5, now=NOW,
) -> Flock:
    flock = Flock.create(
        tenant_id, coop_id, identifier, now.date(), hens, roosters, chicks, None, now,
    )
    data.flocks[flock.id] = flock
    for entry in flock.history:
        data.history[entry.id] = copy.deepcopy(entry)
    return copy.deepcopy(flock)


def seed_record(
    data: FarmData, tenant_id, flock_id, record_date=None, egg_count=12,
    created_at=NOW,
) -> DailyRecord:
    record = DailyRecord.create(
        tenant_id, flock_id, record_date or created_at.date(), egg_count, None,
        created_at,
    )
    data.records[record.id] = record
    return copy.deepcopy(record)


def new_tenant() -> UUID:
    return uuid4()


def seed_purchase(
    data: FarmData, tenant_id, name="Layer pellets", purchase_type=PurchaseType.FEED,
    purchase_date=None, coop_id=None, now=NOW,
) -> Purchase:
    details = PurchaseDetails(
        name=name, type=purchase_type, amount=Decimal("24.90"),
        quantity=Decimal("25"), unit=QuantityUnit.KG,
        purchase_date=purchase_date or now.date(), coop_id=coop_id,
    )
    purchase = Purchase.create(tenant_id, details, now)
    data.purchases[purchase.id] = purchase
    return copy.deepcopy(purchase)
