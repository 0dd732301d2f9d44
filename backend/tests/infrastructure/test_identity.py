"""Request Identity — tests for header parsing."""

from uuid import uuid4

from chickquita.infrastructure.identity import RequestIdentity


def test_identity_from_headers():
    user, tenant = uuid4(), uuid4()
    identity = RequestIdentity.from_headers(
        {"X-User-Id": str(user), "X-Tenant-Id": str(tenant)}, "X-Tenant-Id", "X-User-Id",
    )
    assert identity.is_authenticated()
    assert identity.current_tenant_id() == tenant


def test_missing_user_is_unauthenticated():
    identity = RequestIdentity.from_headers({}, "X-Tenant-Id", "X-User-Id")
    assert not identity.is_authenticated()
    assert identity.current_tenant_id() is None


def test_malformed_tenant_is_no_tenant():
    identity = RequestIdentity.from_headers(
        {"X-User-Id": str(uuid4()), "X-Tenant-Id": "not-a-uuid"}, "X-Tenant-Id", "X-User-Id",
    )
    assert identity.is_authenticated()
    assert identity.current_tenant_id() is None
