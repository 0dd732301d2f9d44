"""Service test fixtures — in-memory farm data, identity and tenant-scoped fake stores.

Invariants:
    - Every test gets fresh FarmData; nothing leaks between tests
    - All handlers run on the fixed clock NOW unless a test injects its own

Design Decisions:
    - Fakes over an in-memory database: handler tests assert on ordering and on
      whether a write happened, which the FarmData.writes log makes explicit
"""

import pytest

from tests.services.fake_stores import (
    FakeCoopStore, FakeDailyRecordStore, FakeFlockHistoryStore,
    FakeFlockStore, FakeIdentity, FakePurchaseStore, FarmData, new_tenant,
)


@pytest.fixture
def farm():
    return FarmData()


@pytest.fixture
def tenant_id():
    return new_tenant()


@pytest.fixture
def other_tenant_id():
    return new_tenant()


@pytest.fixture
def identity(tenant_id):
    return FakeIdentity(tenant_id)


@pytest.fixture
def coops(farm, tenant_id):
    return FakeCoopStore(farm, tenant_id)


@pytest.fixture
def flocks(farm, tenant_id):
    return FakeFlockStore(farm, tenant_id)


@pytest.fixture
def history(farm, tenant_id):
    return FakeFlockHistoryStore(farm, tenant_id)


@pytest.fixture
def records(farm, tenant_id):
    return FakeDailyRecordStore(farm, tenant_id)


@pytest.fixture
def purchases(farm, tenant_id):
    return FakePurchaseStore(farm, tenant_id)
