"""Handler Base — identity gate, clock and the store-fault boundary shared by every handler.

Invariants:
    - authorize() runs first in every handler: unauthenticated -> "User is not authenticated",
      no tenant -> "Tenant not found", both Unauthorized, before any store call
    - guard() is the ONLY place exceptions become results:
        DomainValidationError -> Validation (entity invariant)
        UniquenessViolation   -> Conflict when the handler names one, else Failure
        any other Exception   -> Failure "Failed to {verb} {entity}", raw text only in logs
    - asyncio.CancelledError is not an Exception subclass and propagates untouched
    - Handlers hold no per-call state: one instance may serve concurrent commands

Design Decisions:
    - Clock injected as a zero-arg callable so the same-day window is testable
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timezone
from typing import TypeVar

from chickquita.core.domain_types import TenantId
from chickquita.core.errors import (
    DomainValidationError, Error, FieldViolation, UniquenessViolation,
)
from chickquita.core.repository_protocols import IdentityContext
from chickquita.core.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HandlerBase:
    """Common plumbing for the per-aggregate handler classes."""

    def __init__(self, identity: IdentityContext, clock: Clock = utc_now):
        self._identity = identity
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self._clock().astimezone(timezone.utc).date()

    def authorize(self, command_name: str) -> Result[TenantId]:
        if not self._identity.is_authenticated():
            return self.reject(
                command_name, Error.unauthorized("User is not authenticated"),
            )
        tenant_id = self._identity.current_tenant_id()
        if tenant_id is None:
            return self.reject(command_name, Error.unauthorized("Tenant not found"))
        return Success(tenant_id)

    def reject(self, command_name: str, error: Error, **context) -> Failure:
        """Log and return an expected business failure."""
        logger.warning(
            f"{command_name}: {error.message}",
            extra={"command": command_name, "error_code": error.code.value, **context},
        )
        return Failure(error)

    def invalid(self, command_name: str, violations: list[FieldViolation]) -> Failure:
        return self.reject(command_name, Error.from_violations(violations))

    async def guard(
        self,
        command_name: str,
        step: Awaitable[Result[T]],
        verb: str,
        entity: str,
        conflict_message: str | None = None,
    ) -> Result[T]:
        """Await the store-touching part of a handler, translating its exceptions."""
        try:
            return await step
        except DomainValidationError as exc:
            return self.reject(command_name, Error.validation(exc.message, exc.field))
        except UniquenessViolation as exc:
            if conflict_message is None:
                return self._fail(command_name, verb, entity, exc)
            return self.reject(
                command_name, Error.conflict(conflict_message),
                constraint=exc.constraint,
            )
        except Exception as exc:
            return self._fail(command_name, verb, entity, exc)

    def _fail(
        self, command_name: str, verb: str, entity: str, exc: Exception,
    ) -> Failure:
        error = Error.failure(verb, entity)
        logger.error(
            f"{command_name}: {error.message}: {exc}",
            exc_info=exc,
            extra={"command": command_name, "error_code": error.code.value},
        )
        return Failure(error)
