"""Request Identity — IdentityContext built from headers set by the authenticating proxy.

Invariants:
    - A request is authenticated iff it carries a parseable user id header
    - A malformed tenant header is treated as "no tenant", never as an error
    - Header names come from Settings (tenant_header, user_header)
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from chickquita.core.domain_types import TenantId

logger = logging.getLogger(__name__)


def _parse_uuid(raw: str | None, header: str) -> UUID | None:
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {header} header")
        return None


@dataclass(frozen=True)
class RequestIdentity:
    user_id: UUID | None
    tenant_id: TenantId | None

    @classmethod
    def from_headers(
        cls, headers, tenant_header: str, user_header: str,
    ) -> "RequestIdentity":
        user_id = _parse_uuid(headers.get(user_header), user_header)
        tenant_id = _parse_uuid(headers.get(tenant_header), tenant_header)
        return cls(
            user_id=user_id,
            tenant_id=TenantId(tenant_id) if tenant_id else None,
        )

    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def current_tenant_id(self) -> TenantId | None:
        return self.tenant_id
